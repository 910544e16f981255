"""
Django admin configuration for blog_api.
"""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from .models import Blog, Image, Review, User


class ImageInline(admin.TabularInline):
    """Inline for the image set of a blog."""

    model = Image
    extra = 0
    fields = ["image_url", "is_active"]


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ["email", "name", "surname", "email_confirmed", "is_active", "is_staff"]
    list_filter = ["email_confirmed", "is_active", "is_staff"]
    search_fields = ["email", "name", "surname"]
    ordering = ["email"]
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Profile", {
            "fields": ("name", "surname", "image_url", "email_confirmed")
        }),
    )
    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("username", "email") + BaseUserAdmin.add_fieldsets[0][1]["fields"][1:],
        }),
    )
    actions = ["confirm_emails"]

    @admin.action(description="Mark selected emails as confirmed")
    def confirm_emails(self, request, queryset):
        updated = queryset.update(email_confirmed=True)
        self.message_user(request, f"{updated} users confirmed.")


@admin.register(Blog)
class BlogAdmin(admin.ModelAdmin):
    list_display = [
        "title_preview",
        "owner",
        "view_count",
        "like_count",
        "review_count",
        "created_at",
    ]
    list_filter = ["created_at"]
    search_fields = ["title", "body", "owner__email"]
    raw_id_fields = ["owner"]
    date_hierarchy = "created_at"
    inlines = [ImageInline]
    readonly_fields = ["view_count", "like_count", "review_count"]

    def title_preview(self, obj):
        """Truncated title for list display."""
        return obj.title[:60] + "..." if len(obj.title) > 60 else obj.title

    title_preview.short_description = "Title"


@admin.register(Image)
class ImageAdmin(admin.ModelAdmin):
    list_display = ["thumbnail_preview", "image_url", "blog", "is_active"]
    list_filter = ["is_active"]
    raw_id_fields = ["blog"]

    def thumbnail_preview(self, obj):
        return format_html(
            '<img src="{}" style="max-width: 50px; max-height: 50px;" />',
            obj.image_url,
        )

    thumbnail_preview.short_description = "Preview"


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ["preview", "user", "blog", "parent", "date"]
    list_filter = ["date"]
    search_fields = ["comment", "user__email", "blog__title"]
    raw_id_fields = ["blog", "user", "parent"]
