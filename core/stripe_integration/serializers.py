"""
Stripe Integration Serializers
==============================

- CheckoutRequestSerializer: validates the body of POST /api/payments/checkout/
- PurchaseSessionSerializer: status of a purchase session for the frontend
- PricingPlanSerializer: subscription plans offered on the pricing page
"""

from typing import Any, Dict

from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from .models import PricingPlan, PurchaseSession


class CheckoutRequestSerializer(serializers.Serializer):
    """
    Either a course (one-time purchase) or a pricing plan (subscription).

    Request Body Examples:
        {"course_id": 3, "callback_url": "https://shop.example.com/stripe-checkout"}
        {"pricing_plan_id": "price_1HJPbrJfjaQkS62Ei1Y3uk9X"}
    """

    course_id = serializers.IntegerField(required=False, min_value=1)
    pricing_plan_id = serializers.CharField(required=False, allow_blank=False, max_length=255)
    callback_url = serializers.URLField(required=False, max_length=500)

    def validate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        has_course = data.get("course_id") is not None
        has_plan = bool(data.get("pricing_plan_id"))

        if has_course and has_plan:
            raise serializers.ValidationError(
                _("course_id and pricing_plan_id are mutually exclusive.")
            )
        if not has_course and not has_plan:
            raise serializers.ValidationError(
                _("Either course_id or pricing_plan_id is required.")
            )
        return data


class PurchaseSessionSerializer(serializers.ModelSerializer):
    course_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = PurchaseSession
        fields = (
            "id",
            "status",
            "created",
            "completed_at",
            "course_id",
            "pricing_plan_id",
        )
        read_only_fields = fields


class PricingPlanSerializer(serializers.ModelSerializer):
    class Meta:
        model = PricingPlan
        fields = ("stripe_price_id", "name", "amount", "currency", "interval")
        read_only_fields = fields
