import uuid


def generate_id() -> str:
    """Short random identifier for categories and transactions."""
    return uuid.uuid4().hex[:12]
