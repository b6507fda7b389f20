"""
E-Learning Application Django Admin Configuration

This module provides the Django admin interface configuration for the
E-Learning models.

The admin interface is organized into logical sections:
- User Management: Extended user administration with billing profile
- Course Catalogue: Courses with inline lessons
- Entitlements: Courses owned by users

Author: DSP Development Team
Version: 1.0.0
"""

from typing import Optional
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import User
from django.utils.translation import gettext_lazy as _
from django.db.models import Count, QuerySet
from django.http import HttpRequest

# Import all models from the central models registry
from .models import Course, CourseOwnership, Lesson, Profile

# --- User Management Administration ---


class ProfileInline(admin.StackedInline):
    """
    Inline admin configuration for user profiles.

    Shows the Stripe customer and subscription plan within the user admin.
    """

    model = Profile
    can_delete = False
    verbose_name_plural = "Billing Information"
    fk_name = "user"
    fields = ("stripe_customer_id", "pricing_plan_id")

    def get_extra(
        self, request: HttpRequest, obj: Optional[User] = None, **kwargs
    ) -> int:
        """Return 0 extra forms since profile should exist or be created automatically."""
        return 0


class CourseOwnershipInline(admin.TabularInline):
    model = CourseOwnership
    extra = 0
    fields = ("course", "source", "reference", "created_at")
    readonly_fields = ("created_at",)
    autocomplete_fields = ("course",)


class UserAdmin(BaseUserAdmin):
    """
    User administration with billing profile and owned courses.
    """

    inlines = (ProfileInline, CourseOwnershipInline)
    list_display = (
        "username",
        "email",
        "is_staff",
        "is_active",
        "get_pricing_plan",
    )
    list_select_related = ("profile",)
    search_fields = ("username", "first_name", "last_name", "email", "profile__stripe_customer_id")
    ordering = ("username",)

    @admin.display(description=_("Pricing Plan"))
    def get_pricing_plan(self, instance: User) -> str:
        try:
            return instance.profile.pricing_plan_id or "-"
        except Profile.DoesNotExist:
            return "-"

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        """Optimize queryset with profile prefetch for better performance."""
        return super().get_queryset(request).select_related("profile")


# Register enhanced user administration
admin.site.unregister(User)
admin.site.register(User, UserAdmin)

# --- Course Catalogue Administration ---


class LessonInline(admin.TabularInline):
    """Inline admin for course lesson management."""

    model = Lesson
    extra = 1
    fields = ("seq_no", "description", "duration", "video_url")
    ordering = ("seq_no",)


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("description", "seq_no", "category", "price", "promo", "owner_count")
    list_filter = ("category", "promo")
    search_fields = ("description", "long_description", "url")
    prepopulated_fields = {"url": ("description",)}
    ordering = ("seq_no",)
    inlines = [LessonInline]

    fieldsets = (
        (_("Basic Information"), {"fields": ("description", "url", "long_description", "icon_url")}),
        (_("Catalogue"), {"fields": ("seq_no", "category", "promo", "lessons_count")}),
        (_("Pricing"), {"fields": ("price",)}),
    )

    @admin.display(description=_("Owners"), ordering="owner_count")
    def owner_count(self, obj: Course) -> int:
        return obj.owner_count

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        return super().get_queryset(request).annotate(owner_count=Count("owners"))


@admin.register(CourseOwnership)
class CourseOwnershipAdmin(admin.ModelAdmin):
    list_display = ("user", "course", "source", "created_at")
    list_filter = ("source", "course")
    search_fields = ("user__username", "user__email", "course__description", "reference")
    autocomplete_fields = ("user", "course")
    readonly_fields = ("created_at",)

    def get_queryset(self, request: HttpRequest) -> QuerySet:
        """Optimize queryset with related object prefetch."""
        return super().get_queryset(request).select_related("user", "course")
