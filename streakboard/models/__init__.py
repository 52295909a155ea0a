from .user import UserRecord

__all__ = [
    "UserRecord",
]
