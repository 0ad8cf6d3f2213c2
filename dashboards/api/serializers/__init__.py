from .query_serializers import SellerDashboardQuerySerializer


__all__ = ["SellerDashboardQuerySerializer"]
