from django.contrib import admin

from .models import CodeRepo, Comment, Order, Review, SearchHistory, Tag, UserRepoAccess, Vote


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    search_fields = ("name",)


@admin.register(CodeRepo)
class CodeRepoAdmin(admin.ModelAdmin):
    list_display = ("name", "user", "language", "price", "visibility", "status", "created_at", "deleted_at")
    list_filter = ("status", "visibility", "language")
    search_fields = ("name", "description", "user__email")
    filter_horizontal = ("tags",)
    readonly_fields = ("stripe_product_id", "stripe_price_id", "created_at", "updated_at")


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("code_repo", "user", "rating", "flag", "upvotes", "downvotes", "created_at")
    list_filter = ("flag", "rating")


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ("review", "user", "flag", "upvotes", "downvotes", "created_at")
    list_filter = ("flag",)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "code_repo", "status", "total_amount", "created_at")
    list_filter = ("status",)
    search_fields = ("stripe_payment_intent_id", "user__email")
    readonly_fields = ("stripe_payment_intent_id", "created_at", "updated_at")


admin.site.register(UserRepoAccess)
admin.site.register(SearchHistory)
admin.site.register(Vote)
