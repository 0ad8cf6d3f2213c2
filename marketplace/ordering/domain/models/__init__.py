from .order import Order, UserRepoAccess


__all__ = [
    "Order",
    "UserRepoAccess",
]
