from django.urls import path

from .api.views import admin_dashboard, moderator_dashboard, seller_dashboard, user_dashboard


app_name = "dashboards"

urlpatterns = [
    path("admin/", admin_dashboard, name="admin"),
    path("moderator/", moderator_dashboard, name="moderator"),
    path("seller/", seller_dashboard, name="seller"),
    path("me/", user_dashboard, name="user"),
]
