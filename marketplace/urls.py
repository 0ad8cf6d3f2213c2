from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .catalog.api.views.code_check_views import CodeCheckViewSet
from .catalog.api.views.comment_views import CommentViewSet
from .catalog.api.views.repo_views import RepoViewSet
from .catalog.api.views.review_views import ReviewViewSet
from .catalog.api.views.search_views import SearchViewSet
from .ordering.api.views.order_views import OrderViewSet


router = DefaultRouter()
router.register(r"repos", RepoViewSet, basename="repo")
router.register(r"reviews", ReviewViewSet, basename="review")
router.register(r"comments", CommentViewSet, basename="comment")
router.register(r"orders", OrderViewSet, basename="order")

app_name = "marketplace"

urlpatterns = [
    # Search endpoint (before the router so it is not read as a repo id)
    path("repos/search/", SearchViewSet.as_view({"get": "search"}), name="repo-search"),
    path("code-check/", CodeCheckViewSet.as_view({"post": "check"}), name="code-check"),
    path("", include(router.urls)),
]
