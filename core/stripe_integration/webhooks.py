"""
Stripe Webhook Verification and Dispatch
========================================

Stripe signs every webhook request with the endpoint's signing secret
(`STRIPE_WEBHOOK_SECRET`). The signature from the `Stripe-Signature` header
is checked with `stripe.Webhook.construct_event` before any event is acted on.

Handled event types:
- `checkout.session.completed` → fulfill the purchase
- `checkout.session.expired`   → mark the purchase session expired

Every other event type is acknowledged without action.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

import stripe
from django.conf import settings

from .fulfillment import on_checkout_session_completed, on_checkout_session_expired


class WebhookVerificationError(RuntimeError):
    pass


EVENT_HANDLERS: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    "checkout.session.completed": on_checkout_session_completed,
    "checkout.session.expired": on_checkout_session_expired,
}


def verify_webhook(payload: bytes, signature: str) -> Dict[str, Any]:
    """Verify the Stripe signature and return the verified event as a dict."""
    signing_secret = getattr(settings, "STRIPE_WEBHOOK_SECRET", "")
    if not signing_secret:
        raise WebhookVerificationError("STRIPE_WEBHOOK_SECRET is not configured.")

    if not signature:
        raise WebhookVerificationError("Missing Stripe-Signature header.")

    try:
        event = stripe.Webhook.construct_event(payload, signature, signing_secret)
    except ValueError as exc:
        raise WebhookVerificationError(f"Invalid payload: {exc}") from exc
    except stripe.SignatureVerificationError as exc:
        raise WebhookVerificationError(
            f"Webhook signature verification failed: {exc}"
        ) from exc

    return event.to_dict()
