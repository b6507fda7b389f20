"""
Tests für den Stripe Webhook (POST /stripe-webhooks/).

Die Requests werden wie von Stripe mit HMAC-SHA256 signiert, damit
`stripe.Webhook.construct_event` ohne Mock geprüft wird.
"""

import hashlib
import hmac
import json
import time
from decimal import Decimal
from unittest import mock

from django.contrib.auth.models import User
from django.test import TestCase, override_settings

from core.stripe_integration.models import PurchaseSession
from elearning.models import Course, CourseOwnership, Profile

WEBHOOK_URL = "/stripe-webhooks/"
WEBHOOK_SECRET = "whsec_test_secret"


def sign_payload(payload: str, secret: str = WEBHOOK_SECRET) -> str:
    timestamp = int(time.time())
    signed_payload = f"{timestamp}.{payload}"
    signature = hmac.new(
        secret.encode("utf-8"), signed_payload.encode("utf-8"), hashlib.sha256
    ).hexdigest()
    return f"t={timestamp},v1={signature}"


def checkout_event(event_type, purchase_session_id, customer="cus_ABC"):
    return {
        "id": "evt_test_1",
        "object": "event",
        "type": event_type,
        "data": {
            "object": {
                "id": "cs_test_123",
                "object": "checkout.session",
                "client_reference_id": purchase_session_id,
                "customer": customer,
            }
        },
    }


@override_settings(STRIPE_WEBHOOK_SECRET=WEBHOOK_SECRET)
class StripeWebhookTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = User.objects.create_user(username="Max", password="Musterpassword")
        cls.course = Course.objects.create(
            url="rxjs-course", description="RxJs In Practice Course", price=Decimal("50")
        )

    def setUp(self):
        self.course_purchase = PurchaseSession.objects.create(user=self.user, course=self.course)
        self.subscription_purchase = PurchaseSession.objects.create(
            user=self.user, pricing_plan_id="price_monthly"
        )

    def post_event(self, event, signature=None):
        payload = json.dumps(event)
        headers = {}
        if signature is None:
            signature = sign_payload(payload)
        if signature:
            headers["HTTP_STRIPE_SIGNATURE"] = signature
        return self.client.post(
            WEBHOOK_URL, data=payload, content_type="application/json", **headers
        )

    def testKursKaufWirdAbgeschlossen(self):
        response = self.post_event(
            checkout_event("checkout.session.completed", str(self.course_purchase.id))
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"received": True})

        self.course_purchase.refresh_from_db()
        self.assertEqual(self.course_purchase.status, PurchaseSession.Status.COMPLETED)
        self.assertIsNotNone(self.course_purchase.completed_at)
        self.assertEqual(self.course_purchase.stripe_customer_id, "cus_ABC")

        ownership = CourseOwnership.objects.get(user=self.user, course=self.course)
        self.assertEqual(ownership.source, "stripe_checkout")
        self.assertEqual(ownership.reference, str(self.course_purchase.id))
        self.assertEqual(Profile.objects.get(user=self.user).stripe_customer_id, "cus_ABC")

    def testAboWirdAbgeschlossen(self):
        response = self.post_event(
            checkout_event("checkout.session.completed", str(self.subscription_purchase.id))
        )

        self.assertEqual(response.status_code, 200)
        profile = Profile.objects.get(user=self.user)
        self.assertEqual(profile.pricing_plan_id, "price_monthly")
        self.assertEqual(profile.stripe_customer_id, "cus_ABC")
        self.assertFalse(CourseOwnership.objects.exists())

    def testWiederholteZustellungIstIdempotent(self):
        event = checkout_event("checkout.session.completed", str(self.course_purchase.id))
        self.post_event(event)
        self.course_purchase.refresh_from_db()
        first_completed_at = self.course_purchase.completed_at

        response = self.post_event(event)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(CourseOwnership.objects.filter(user=self.user).count(), 1)
        self.course_purchase.refresh_from_db()
        self.assertEqual(self.course_purchase.completed_at, first_completed_at)

    def testUngueltigeSignatur(self):
        event = checkout_event("checkout.session.completed", str(self.course_purchase.id))
        payload = json.dumps(event)

        response = self.post_event(event, signature=sign_payload(payload, secret="whsec_wrong"))

        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.content.startswith(b"Webhook Error:"))
        self.course_purchase.refresh_from_db()
        self.assertTrue(self.course_purchase.is_ongoing)
        self.assertFalse(CourseOwnership.objects.exists())

    def testFehlendeSignatur(self):
        response = self.post_event(
            checkout_event("checkout.session.completed", str(self.course_purchase.id)),
            signature="",
        )
        self.assertEqual(response.status_code, 400)

    @override_settings(STRIPE_WEBHOOK_SECRET="")
    def testOhneKonfiguriertesSecret(self):
        response = self.post_event(
            checkout_event("checkout.session.completed", str(self.course_purchase.id))
        )
        self.assertEqual(response.status_code, 400)

    def testUnbekannterKaufvorgang(self):
        response = self.post_event(
            checkout_event("checkout.session.completed", "00000000-0000-0000-0000-000000000000")
        )
        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.content.startswith(b"Webhook Error:"))

    def testAbgelaufeneSession(self):
        response = self.post_event(
            checkout_event("checkout.session.expired", str(self.course_purchase.id))
        )

        self.assertEqual(response.status_code, 200)
        self.course_purchase.refresh_from_db()
        self.assertEqual(self.course_purchase.status, PurchaseSession.Status.EXPIRED)
        self.assertFalse(CourseOwnership.objects.exists())

    def testAbgeschlosseneSessionVerfaelltNicht(self):
        self.post_event(checkout_event("checkout.session.completed", str(self.course_purchase.id)))
        self.post_event(checkout_event("checkout.session.expired", str(self.course_purchase.id)))

        self.course_purchase.refresh_from_db()
        self.assertEqual(self.course_purchase.status, PurchaseSession.Status.COMPLETED)

    def testAndereEventsWerdenQuittiert(self):
        response = self.post_event(
            {"id": "evt_test_2", "object": "event", "type": "customer.created",
             "data": {"object": {"id": "cus_ABC", "object": "customer"}}}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"received": True})

    def testVerarbeitetGeprueftesEvent(self):
        # The handler must receive the event returned by construct_event,
        # not a second parse of the raw request body.
        verified_event = checkout_event("checkout.session.completed", str(self.course_purchase.id))
        raw_event = checkout_event(
            "checkout.session.completed", str(self.subscription_purchase.id)
        )

        with mock.patch("stripe.Webhook.construct_event") as construct_event:
            construct_event.return_value.to_dict.return_value = verified_event
            response = self.post_event(raw_event, signature="t=1,v1=checked")

        self.assertEqual(response.status_code, 200)
        construct_event.assert_called_once()
        self.course_purchase.refresh_from_db()
        self.subscription_purchase.refresh_from_db()
        self.assertTrue(self.course_purchase.is_completed)
        self.assertTrue(self.subscription_purchase.is_ongoing)
