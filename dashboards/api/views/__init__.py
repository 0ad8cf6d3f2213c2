from .dashboard_views import admin_dashboard, moderator_dashboard, seller_dashboard, user_dashboard


__all__ = ["admin_dashboard", "moderator_dashboard", "seller_dashboard", "user_dashboard"]
