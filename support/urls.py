from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .api.views import SupportTicketViewSet


router = DefaultRouter()
router.register(r"tickets", SupportTicketViewSet, basename="ticket")

app_name = "support"

urlpatterns = [
    path("", include(router.urls)),
]
