from .order_serializers import OrderSerializer, UserRepoAccessSerializer


__all__ = ["OrderSerializer", "UserRepoAccessSerializer"]
