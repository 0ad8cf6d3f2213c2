from .admin_dashboard_service import AdminDashboardService
from .moderator_dashboard_service import ModeratorDashboardService
from .seller_dashboard_service import SellerDashboardService
from .user_dashboard_service import UserDashboardService


__all__ = [
    "AdminDashboardService",
    "ModeratorDashboardService",
    "SellerDashboardService",
    "UserDashboardService",
]
