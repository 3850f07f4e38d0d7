from enum import Enum


class DiscountType(str, Enum):
    percentage = "percentage"
    fixed = "fixed"


class VendorStatus(str, Enum):
    pending = "pending"
    active = "active"


class OrderStatus(str, Enum):
    created = "created"
    paid = "paid"


class PaymentStatus(str, Enum):
    unpaid = "unpaid"
    paid = "paid"


class CommissionStatus(str, Enum):
    pending = "pending"
    payable = "payable"
    paid = "paid"


class PayoutStatus(str, Enum):
    processed = "processed"
