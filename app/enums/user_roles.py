from enum import Enum

class UserRole(str, Enum):
    buyer = "buyer"
    vendor = "vendor"
    admin = "admin"
