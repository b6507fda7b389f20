"""
Stripe Integration Models
=========================

Local records backing the checkout flow.

- `PurchaseSession`: one checkout attempt. Created as `ongoing` before the
  Stripe Checkout Session exists; its id travels to Stripe as
  `client_reference_id` and comes back with the webhook, which moves the
  record to `completed` (or `expired`).
- `PricingPlan`: recurring Stripe prices that can be sold as subscriptions.

Author: DSP Development Team
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class PurchaseSession(models.Model):
    """
    State machine of a single purchase: ongoing -> completed | expired.

    Exactly one of `course` (one-time purchase) or `pricing_plan_id`
    (subscription) is set.
    """

    class Status(models.TextChoices):
        ONGOING = "ongoing", _("Ongoing")
        COMPLETED = "completed", _("Completed")
        EXPIRED = "expired", _("Expired")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ONGOING,
        db_index=True,
    )

    created = models.DateTimeField(default=timezone.now)
    completed_at = models.DateTimeField(null=True, blank=True)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="purchase_sessions",
    )

    course = models.ForeignKey(
        "elearning.Course",
        on_delete=models.PROTECT,
        related_name="purchase_sessions",
        null=True,
        blank=True,
    )

    pricing_plan_id = models.CharField(max_length=255, blank=True, default="")

    stripe_checkout_session_id = models.CharField(
        max_length=255, blank=True, default="", db_index=True
    )
    stripe_customer_id = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        verbose_name = _("Purchase Session")
        verbose_name_plural = _("Purchase Sessions")
        ordering = ["-created"]
        db_table = "stripe_purchase_session"
        constraints = [
            models.CheckConstraint(
                condition=(
                    (models.Q(course__isnull=False) & models.Q(pricing_plan_id=""))
                    | (models.Q(course__isnull=True) & ~models.Q(pricing_plan_id=""))
                ),
                name="purchase_session_course_xor_plan",
            ),
        ]

    def __str__(self) -> str:
        return f"PurchaseSession {self.id} ({self.status})"

    @property
    def is_subscription(self) -> bool:
        return bool(self.pricing_plan_id)

    @property
    def is_ongoing(self) -> bool:
        return self.status == self.Status.ONGOING

    @property
    def is_completed(self) -> bool:
        return self.status == self.Status.COMPLETED

    def mark_completed(self, stripe_customer_id: str = "") -> None:
        self.status = self.Status.COMPLETED
        self.completed_at = timezone.now()
        if stripe_customer_id:
            self.stripe_customer_id = stripe_customer_id
        self.save(update_fields=["status", "completed_at", "stripe_customer_id"])


class PricingPlan(models.Model):
    """
    A recurring Stripe Price offered as a subscription.

    The Product and Price must exist in Stripe before checkout; the
    `setup_stripe_plans` command creates them and records the plan here.
    """

    class Interval(models.TextChoices):
        DAY = "day", _("Daily")
        WEEK = "week", _("Weekly")
        MONTH = "month", _("Monthly")
        YEAR = "year", _("Yearly")

    stripe_price_id = models.CharField(max_length=255, unique=True)
    stripe_product_id = models.CharField(max_length=255, blank=True, default="")
    name = models.CharField(max_length=200)
    amount = models.PositiveIntegerField(help_text=_("Amount in the minor currency unit"))
    currency = models.CharField(max_length=3, default="usd")
    interval = models.CharField(
        max_length=10, choices=Interval.choices, default=Interval.MONTH
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Pricing Plan")
        verbose_name_plural = _("Pricing Plans")
        ordering = ["amount"]
        db_table = "stripe_pricing_plan"

    def __str__(self) -> str:
        return f"{self.name} ({self.stripe_price_id})"
