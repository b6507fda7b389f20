"""
E-Learning User Management Models

This module defines the user-related models for the E-Learning system,
extending Django's built-in User model with billing information and the
list of courses a user has bought.

Models:
- Profile: Stripe customer id and subscription plan of a user
- CourseOwnership: Courses bought separately through a one-time purchase

Features:
- Automatic profile creation for new users
- Stripe customer id reused across purchases of the same user
- Subscription plan granting access to every course

Author: DSP Development Team
Version: 1.0.0
"""

from django.db import models
from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver
from django.utils.translation import gettext_lazy as _


class Profile(models.Model):
    """
    Extended user profile model for the E-Learning system.

    Attributes:
        user: One-to-one relationship with Django User model
        stripe_customer_id: Customer id assigned by Stripe on the first
            completed checkout; sent with later checkouts so every payment
            of the same user is grouped under one Stripe customer
        pricing_plan_id: Stripe Price id of the subscription the user bought

    The profile is automatically created when a new user is registered
    and maintains a one-to-one relationship with the User model.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        verbose_name=_("User"),
        help_text=_("Associated user account"),
    )

    stripe_customer_id = models.CharField(
        max_length=255,
        blank=True,
        default="",
        verbose_name=_("Stripe Customer ID"),
        help_text=_("Customer id assigned by Stripe (cus_...)"),
    )

    pricing_plan_id = models.CharField(
        max_length=255,
        blank=True,
        default="",
        verbose_name=_("Pricing Plan"),
        help_text=_("Stripe Price id of the active subscription (price_...)"),
    )

    class Meta:
        verbose_name = _("User Profile")
        verbose_name_plural = _("User Profiles")
        db_table = "elearning_profile"

    def __str__(self) -> str:
        return f"{self.user.username} Profile"

    def __repr__(self) -> str:
        return (
            f"<Profile(user={self.user.username}, "
            f"stripe_customer_id={self.stripe_customer_id!r}, "
            f"pricing_plan_id={self.pricing_plan_id!r})>"
        )

    @property
    def has_active_subscription(self) -> bool:
        return bool(self.pricing_plan_id)


class CourseOwnership(models.Model):
    """
    A course the user bought separately.

    Subscriptions are not recorded here: a subscriber has access to all
    courses through `Profile.pricing_plan_id`.

    Attributes:
        user: Owner
        course: Purchased course
        source: Origin of the entitlement ("stripe_checkout", "admin", ...)
        reference: External reference, e.g. the purchase session id
        created_at: When the entitlement was granted
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="courses_owned",
        verbose_name=_("User"),
    )

    course = models.ForeignKey(
        "elearning.Course",
        on_delete=models.CASCADE,
        related_name="owners",
        verbose_name=_("Course"),
    )

    source = models.CharField(
        max_length=50,
        default="stripe_checkout",
        verbose_name=_("Source"),
    )

    reference = models.CharField(
        max_length=255,
        blank=True,
        default="",
        verbose_name=_("Reference"),
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name=_("Created At"),
    )

    class Meta:
        verbose_name = _("Course Ownership")
        verbose_name_plural = _("Course Ownerships")
        db_table = "elearning_course_ownership"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "course"], name="unique_course_ownership"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.user} owns {self.course}"


# --- Signal Handlers for Automatic Profile Management ---


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_profile(sender, instance, created: bool, **kwargs) -> None:
    """
    Automatically create a user profile when a new user is created.

    Args:
        sender: The User model class
        instance: The actual User instance that was saved
        created: Boolean indicating if this is a new instance
        **kwargs: Additional signal arguments
    """
    if created:
        Profile.objects.get_or_create(user=instance)
