"""
Checkout Session Builder
========================

Creates the local `PurchaseSession` and the matching Stripe Checkout
Session for either purchase type:

- ONE TIME PURCHASE: a single course, priced inline from the course record
  (`mode="payment"`).
- RECURRING CHARGE: a subscription to a Stripe recurring Price created
  beforehand in Stripe (`mode="subscription"`).

The purchase session id is sent to Stripe as `client_reference_id` and in
the success URL, so both the webhook and the frontend can find the record
again.

Author: DSP Development Team
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import stripe
from django.conf import settings

from elearning.models import Course, Profile

from .models import PricingPlan, PurchaseSession

logger = logging.getLogger(__name__)


class CheckoutError(Exception):
    """Raised when the requested course or pricing plan cannot be sold."""


class ProductNotFound(CheckoutError):
    """The course or pricing plan does not exist."""


@dataclass
class CheckoutResult:
    purchase_session: PurchaseSession
    stripe_session: Any

    @property
    def stripe_checkout_session_id(self) -> str:
        return self.stripe_session["id"]

    @property
    def checkout_url(self) -> Optional[str]:
        try:
            return self.stripe_session["url"]
        except KeyError:
            return None


def build_callback_url(callback_url: Optional[str] = None) -> str:
    """
    Frontend page Stripe redirects back to, without a trailing slash.

    Defaults to FRONTEND_URL + CHECKOUT_CALLBACK_PATH when the client does
    not send its own.
    """
    if not callback_url:
        callback_url = f"{settings.FRONTEND_URL.rstrip('/')}{settings.CHECKOUT_CALLBACK_PATH}"
    return callback_url.rstrip("/")


def setup_base_session_config(
    callback_url: str, purchase_session_id: str, stripe_customer_id: Optional[str]
) -> Dict[str, Any]:
    """Properties shared by both purchase types."""
    config: Dict[str, Any] = {
        "payment_method_types": ["card"],
        "success_url": (
            f"{callback_url}/?purchaseResult=success"
            f"&ongoingPurchaseSessionId={purchase_session_id}"
        ),
        "cancel_url": f"{callback_url}/?purchaseResult=failed",
        "client_reference_id": purchase_session_id,
    }

    # Reuse the customer from an earlier purchase so payments stay grouped
    if stripe_customer_id:
        config["customer"] = stripe_customer_id

    return config


def setup_purchase_course_session(
    callback_url: str,
    course: Course,
    purchase_session_id: str,
    stripe_customer_id: Optional[str],
) -> Dict[str, Any]:
    config = setup_base_session_config(callback_url, purchase_session_id, stripe_customer_id)
    config["mode"] = "payment"
    product_data = {"name": course.description}
    # Stripe rejects empty descriptions
    if course.long_description:
        product_data["description"] = course.long_description

    config["line_items"] = [
        {
            "price_data": {
                "currency": settings.DEFAULT_CURRENCY,
                "unit_amount": course.price_in_minor_units,
                "product_data": product_data,
            },
            "quantity": 1,
        }
    ]
    return config


def setup_subscription_session(
    callback_url: str,
    purchase_session_id: str,
    stripe_customer_id: Optional[str],
    pricing_plan_id: str,
) -> Dict[str, Any]:
    config = setup_base_session_config(callback_url, purchase_session_id, stripe_customer_id)
    config["mode"] = "subscription"
    config["line_items"] = [{"price": pricing_plan_id, "quantity": 1}]
    return config


def _resolve_course(course_id) -> Course:
    try:
        course = Course.objects.get(pk=course_id)
    except (Course.DoesNotExist, ValueError, TypeError):
        raise ProductNotFound(f"Course {course_id} does not exist.")

    if course.is_free:
        raise CheckoutError(f"Course {course_id} is free and cannot be purchased.")
    return course


def _resolve_pricing_plan(pricing_plan_id: str) -> PricingPlan:
    try:
        return PricingPlan.objects.get(stripe_price_id=pricing_plan_id, is_active=True)
    except PricingPlan.DoesNotExist:
        raise ProductNotFound(f"Pricing plan {pricing_plan_id} is not available.")


def start_checkout(
    user,
    *,
    course_id=None,
    pricing_plan_id: Optional[str] = None,
    callback_url: Optional[str] = None,
) -> CheckoutResult:
    """
    Create a purchase session and the Stripe Checkout Session for it.

    `course_id` and `pricing_plan_id` are mutually exclusive: a customer buys
    one course or a subscription, never both in one go.

    Raises:
        ProductNotFound: unknown course or pricing plan
        CheckoutError: the course is free
        stripe.StripeError: Stripe refused to create the session
    """
    if bool(course_id) == bool(pricing_plan_id):
        raise ValueError("Exactly one of course_id or pricing_plan_id is required.")

    course = _resolve_course(course_id) if course_id else None
    if pricing_plan_id:
        _resolve_pricing_plan(pricing_plan_id)

    purchase_session = PurchaseSession.objects.create(
        user=user,
        course=course,
        pricing_plan_id=pricing_plan_id or "",
    )

    profile, _ = Profile.objects.get_or_create(user=user)
    stripe_customer_id = profile.stripe_customer_id or None
    callback = build_callback_url(callback_url)
    own_session_id = str(purchase_session.id)

    if course is not None:
        session_config = setup_purchase_course_session(
            callback, course, own_session_id, stripe_customer_id
        )
    else:
        session_config = setup_subscription_session(
            callback, own_session_id, stripe_customer_id, pricing_plan_id
        )

    logger.info(
        "Creating Stripe checkout session for purchase session %s (user=%s, mode=%s)",
        own_session_id,
        user.pk,
        session_config["mode"],
    )

    stripe_session = stripe.checkout.Session.create(**session_config)

    purchase_session.stripe_checkout_session_id = stripe_session["id"]
    purchase_session.save(update_fields=["stripe_checkout_session_id"])

    return CheckoutResult(purchase_session=purchase_session, stripe_session=stripe_session)
