import uuid


def generate_id(prefix: str, length: int = 10) -> str:
    """ORD_1A2B3C4D5E style identifiers."""
    return f"{prefix}_{uuid.uuid4().hex[:length].upper()}"
