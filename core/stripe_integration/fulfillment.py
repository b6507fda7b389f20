"""
Purchase Fulfillment
====================

Completes a purchase once Stripe reports the Checkout Session as paid.

Handled transitions of `PurchaseSession`:
- `checkout.session.completed` → ongoing -> completed, entitlement granted
  (also expired -> completed when the payment arrives late)
- `checkout.session.expired`   → ongoing -> expired

All writes of one fulfillment happen inside a single `transaction.atomic()`
block with the purchase session row locked, so a redelivered or concurrent
webhook cannot grant twice. Whatever the user bought, the Stripe customer id
is stored on the profile to group all the payments of the same user.

Author: DSP Development Team
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from django.core.exceptions import ValidationError
from django.db import transaction

from elearning.models import CourseOwnership, Profile

from .models import PurchaseSession

logger = logging.getLogger(__name__)


class FulfillmentError(Exception):
    """Raised when a Stripe session cannot be matched to a purchase session."""


def _lock_purchase_session(session: Dict[str, Any]) -> PurchaseSession:
    purchase_session_id = session.get("client_reference_id")
    if not purchase_session_id:
        raise FulfillmentError(
            f"Checkout session {session.get('id')} has no client_reference_id."
        )

    try:
        return (
            PurchaseSession.objects.select_for_update()
            .select_related("user", "course")
            .get(pk=purchase_session_id)
        )
    except (PurchaseSession.DoesNotExist, ValidationError, ValueError):
        raise FulfillmentError(f"Purchase session {purchase_session_id} not found.")


def _store_customer_id(profile: Profile, stripe_customer_id: Optional[str]) -> None:
    if stripe_customer_id and profile.stripe_customer_id != stripe_customer_id:
        profile.stripe_customer_id = stripe_customer_id
        profile.save(update_fields=["stripe_customer_id"])


def fulfill_course_purchase(
    purchase: PurchaseSession, stripe_customer_id: Optional[str]
) -> None:
    """
    ONE TIME PURCHASE: mark the session completed, give the user the
    course and remember the Stripe customer id.
    """
    with transaction.atomic():
        purchase.mark_completed(stripe_customer_id or "")

        _, created = CourseOwnership.objects.get_or_create(
            user=purchase.user,
            course=purchase.course,
            defaults={"source": "stripe_checkout", "reference": str(purchase.id)},
        )

        profile, _ = Profile.objects.select_for_update().get_or_create(user=purchase.user)
        _store_customer_id(profile, stripe_customer_id)

    if created:
        logger.info(
            "User %s now owns course %s (purchase session %s).",
            purchase.user.pk,
            purchase.course.pk,
            purchase.id,
        )
    else:
        logger.info(
            "User %s already owned course %s (purchase session %s).",
            purchase.user.pk,
            purchase.course.pk,
            purchase.id,
        )


def fulfill_subscription_purchase(
    purchase: PurchaseSession, stripe_customer_id: Optional[str]
) -> None:
    """
    RECURRING CHARGE: mark the session completed and attach the pricing
    plan (access to all courses) and the Stripe customer id to the user.
    """
    with transaction.atomic():
        purchase.mark_completed(stripe_customer_id or "")

        profile, _ = Profile.objects.select_for_update().get_or_create(user=purchase.user)
        profile.pricing_plan_id = purchase.pricing_plan_id
        update_fields = ["pricing_plan_id"]
        if stripe_customer_id:
            profile.stripe_customer_id = stripe_customer_id
            update_fields.append("stripe_customer_id")
        profile.save(update_fields=update_fields)

    logger.info(
        "User %s subscribed to plan %s (purchase session %s).",
        purchase.user.pk,
        purchase.pricing_plan_id,
        purchase.id,
    )


def on_checkout_session_completed(session: Dict[str, Any]) -> PurchaseSession:
    """
    Handle `checkout.session.completed`.

    Raises:
        FulfillmentError: the session does not reference a known purchase
    """
    stripe_customer_id = session.get("customer")

    with transaction.atomic():
        purchase = _lock_purchase_session(session)

        if purchase.is_completed:
            logger.info(
                "Purchase session %s already completed, ignoring redelivery.", purchase.id
            )
            return purchase

        if purchase.status == PurchaseSession.Status.EXPIRED:
            # Paid after the session was marked expired; the payment still counts.
            logger.info(
                "Purchase session %s was expired, completing it after late payment.",
                purchase.id,
            )

        if purchase.course_id:
            fulfill_course_purchase(purchase, stripe_customer_id)
        elif purchase.pricing_plan_id:
            fulfill_subscription_purchase(purchase, stripe_customer_id)
        else:
            raise FulfillmentError(
                f"Purchase session {purchase.id} has neither course nor pricing plan."
            )

    return purchase


def on_checkout_session_expired(session: Dict[str, Any]) -> PurchaseSession:
    """Handle `checkout.session.expired`: the customer never paid."""
    with transaction.atomic():
        purchase = _lock_purchase_session(session)
        if purchase.is_ongoing:
            purchase.status = PurchaseSession.Status.EXPIRED
            purchase.save(update_fields=["status"])
            logger.info("Purchase session %s expired.", purchase.id)
    return purchase
