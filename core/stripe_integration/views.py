"""
Stripe Integration Views (core.stripe_integration)
==================================================

REST API endpoints of the checkout flow.

Endpoints
---------

1. CheckoutSessionView
   - URL: /api/payments/checkout/
   - Method: POST
   - Auth: Required
   - Body: {"course_id": 3} or {"pricing_plan_id": "price_..."},
           optionally "callback_url"
   - Purpose:
       ONE TIME PURCHASE / RECURRING CHARGE: creates a pending purchase
       session and a Stripe Checkout Session, and returns what the frontend
       needs to redirect the user to Stripe.

2. StripeWebhookView
   - URL: /stripe-webhooks/
   - Method: POST
   - Auth: Stripe signature (Stripe-Signature header)
   - Purpose:
       Receives Stripe events; `checkout.session.completed` completes the
       purchase session and grants the course or subscription.
       Stripe only redirects the customer to the success URL after it got
       the acknowledgment from this endpoint.

3. PurchaseSessionStatusView
   - URL: /api/payments/purchase-sessions/<uuid>/?wait=<seconds>
   - Method: GET
   - Auth: Required (owner only)
   - Purpose:
       Lets the success page wait for the webhook: with `wait` the request
       is held until the session leaves `ongoing` or the wait elapses.

4. GetStripeConfigView
   - URL: /api/payments/stripe/config/
   - Method: GET
   - Auth: None
   - Purpose:
       Returns the publishable key so the frontend can initialize Stripe.js.

5. PricingPlanListView
   - URL: /api/payments/pricing-plans/
   - Method: GET
   - Auth: None
   - Purpose:
       Lists the subscription plans that can be bought.

Security
--------
- Only authenticated users can start a checkout.
- Card data is handled exclusively by Stripe; backend only stores ids.
- Webhook requests are rejected unless signed with STRIPE_WEBHOOK_SECRET.

Author: DSP Development Team
"""

import logging
import time

import stripe
from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .checkout import CheckoutError, ProductNotFound, start_checkout
from .fulfillment import FulfillmentError
from .models import PricingPlan, PurchaseSession
from .serializers import (
    CheckoutRequestSerializer,
    PricingPlanSerializer,
    PurchaseSessionSerializer,
)
from .webhooks import EVENT_HANDLERS, WebhookVerificationError, verify_webhook

logger = logging.getLogger(__name__)

STATUS_POLL_INTERVAL_SECONDS = 0.5


class CheckoutSessionView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CheckoutRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            result = start_checkout(
                request.user,
                course_id=data.get("course_id"),
                pricing_plan_id=data.get("pricing_plan_id"),
                callback_url=data.get("callback_url"),
            )
        except ProductNotFound as e:
            return Response({"detail": str(e)}, status=status.HTTP_404_NOT_FOUND)
        except CheckoutError as e:
            return Response({"detail": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except stripe.StripeError:
            logger.exception(
                "Unexpected error occurred while creating checkout session for user %s",
                request.user.pk,
            )
            return Response(
                {"error": "Could not initiate Stripe checkout session"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {
                "stripe_checkout_session_id": result.stripe_checkout_session_id,
                "stripe_public_key": settings.STRIPE_PUBLISHABLE_KEY,
                "checkout_url": result.checkout_url,
                "purchase_session_id": str(result.purchase_session.id),
            },
            status=status.HTTP_200_OK,
        )


@method_decorator(csrf_exempt, name="dispatch")
class StripeWebhookView(View):
    """Receive and process Stripe webhook events."""

    def post(self, request: HttpRequest) -> HttpResponse:
        signature = request.headers.get("Stripe-Signature", "")

        try:
            event = verify_webhook(request.body, signature)
        except WebhookVerificationError as exc:
            logger.warning("Stripe webhook rejected: %s", exc)
            return HttpResponse(f"Webhook Error: {exc}", status=400)

        event_type = event.get("type", "")
        logger.info("[webhook] %s (event_id=%s)", event_type, event.get("id"))

        handler = EVENT_HANDLERS.get(event_type)
        if handler is None:
            logger.debug("Unhandled Stripe event type: %s", event_type)
            return JsonResponse({"received": True})

        try:
            handler(event["data"]["object"])
        except FulfillmentError as exc:
            logger.error("Error processing webhook event %s: %s", event_type, exc)
            return HttpResponse(f"Webhook Error: {exc}", status=400)
        except Exception as exc:
            # Stripe retries on non-2xx responses
            logger.exception("Error processing webhook event %s", event_type)
            return HttpResponse(f"Webhook Error: {exc}", status=400)

        return JsonResponse({"received": True})


class PurchaseSessionStatusView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, pk):
        try:
            wait = float(request.query_params.get("wait", 0))
        except ValueError:
            return Response(
                {"detail": "wait must be a number of seconds."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        wait = min(max(wait, 0.0), settings.PURCHASE_STATUS_MAX_WAIT_SECONDS)

        purchase = get_object_or_404(PurchaseSession, pk=pk, user=request.user)

        deadline = time.monotonic() + wait
        while purchase.is_ongoing and time.monotonic() < deadline:
            time.sleep(STATUS_POLL_INTERVAL_SECONDS)
            purchase.refresh_from_db(fields=["status", "completed_at"])

        return Response(PurchaseSessionSerializer(purchase).data, status=status.HTTP_200_OK)


class GetStripeConfigView(APIView):
    """
    endpoint so the frontend can initialize Stripe.js
    """
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({"publishableKey": settings.STRIPE_PUBLISHABLE_KEY}, status=200)


class PricingPlanListView(generics.ListAPIView):
    permission_classes = [AllowAny]
    serializer_class = PricingPlanSerializer
    queryset = PricingPlan.objects.filter(is_active=True)
