"""
Tests für den Start eines Kaufvorgangs (POST /api/payments/checkout/).

Stripe wird gemockt; geprüft wird, welche Checkout-Session-Konfiguration an
Stripe geht und welcher Kaufvorgang lokal angelegt wird.
"""

from decimal import Decimal
from unittest import mock

import stripe
from django.contrib.auth.models import User
from django.test import override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from core.stripe_integration.models import PricingPlan, PurchaseSession
from elearning.models import Course, Profile

CHECKOUT_URL = "/api/payments/checkout/"
STRIPE_SESSION = {"id": "cs_test_123", "url": "https://checkout.stripe.com/c/pay/cs_test_123"}


@override_settings(
    FRONTEND_URL="https://shop.example.com",
    CHECKOUT_CALLBACK_PATH="/stripe-checkout",
    DEFAULT_CURRENCY="usd",
    STRIPE_PUBLISHABLE_KEY="pk_test_123",
)
class CheckoutSessionViewTests(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = User.objects.create_user(username="Max", password="Musterpassword")
        cls.course = Course.objects.create(
            seq_no=1,
            url="stripe-course",
            description="Stripe Payments In Practice",
            long_description="Build your own ecommerce store",
            price=Decimal("49.99"),
        )
        cls.free_course = Course.objects.create(
            seq_no=2, url="angular-for-beginners", description="Angular for Beginners"
        )
        cls.plan = PricingPlan.objects.create(
            stripe_price_id="price_monthly", name="Monthly", amount=999
        )

    def setUp(self):
        self.client.force_authenticate(user=self.user)
        patcher = mock.patch("stripe.checkout.Session.create", return_value=STRIPE_SESSION)
        self.create_session = patcher.start()
        self.addCleanup(patcher.stop)

    def testCheckoutOhneLoginWirdAbgelehnt(self):
        self.client.force_authenticate(user=None)
        response = self.client.post(CHECKOUT_URL, {"course_id": self.course.id}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.create_session.assert_not_called()

    def testKursKaufErzeugtKaufvorgangUndStripeSession(self):
        response = self.client.post(CHECKOUT_URL, {"course_id": self.course.id}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        purchase = PurchaseSession.objects.get()
        self.assertEqual(purchase.status, PurchaseSession.Status.ONGOING)
        self.assertEqual(purchase.course, self.course)
        self.assertEqual(purchase.user, self.user)
        self.assertEqual(purchase.stripe_checkout_session_id, "cs_test_123")

        self.assertEqual(
            response.json(),
            {
                "stripe_checkout_session_id": "cs_test_123",
                "stripe_public_key": "pk_test_123",
                "checkout_url": STRIPE_SESSION["url"],
                "purchase_session_id": str(purchase.id),
            },
        )

        config = self.create_session.call_args.kwargs
        self.assertEqual(config["mode"], "payment")
        self.assertEqual(config["client_reference_id"], str(purchase.id))
        self.assertEqual(
            config["success_url"],
            "https://shop.example.com/stripe-checkout/?purchaseResult=success"
            f"&ongoingPurchaseSessionId={purchase.id}",
        )
        self.assertEqual(
            config["cancel_url"], "https://shop.example.com/stripe-checkout/?purchaseResult=failed"
        )
        self.assertNotIn("customer", config)

        line_item = config["line_items"][0]
        self.assertEqual(line_item["quantity"], 1)
        self.assertEqual(line_item["price_data"]["unit_amount"], 4999)
        self.assertEqual(line_item["price_data"]["currency"], "usd")
        self.assertEqual(
            line_item["price_data"]["product_data"],
            {"name": "Stripe Payments In Practice", "description": "Build your own ecommerce store"},
        )

    def testAboNutztPreisplan(self):
        response = self.client.post(
            CHECKOUT_URL, {"pricing_plan_id": "price_monthly"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        purchase = PurchaseSession.objects.get()
        self.assertTrue(purchase.is_subscription)
        self.assertIsNone(purchase.course)

        config = self.create_session.call_args.kwargs
        self.assertEqual(config["mode"], "subscription")
        self.assertEqual(config["line_items"], [{"price": "price_monthly", "quantity": 1}])

    def testBekannterKundeWirdWiederverwendet(self):
        Profile.objects.filter(user=self.user).update(stripe_customer_id="cus_123")

        self.client.post(CHECKOUT_URL, {"course_id": self.course.id}, format="json")

        self.assertEqual(self.create_session.call_args.kwargs["customer"], "cus_123")

    def testEigeneCallbackUrl(self):
        self.client.post(
            CHECKOUT_URL,
            {"course_id": self.course.id, "callback_url": "https://other.example.com/done/"},
            format="json",
        )

        config = self.create_session.call_args.kwargs
        self.assertTrue(
            config["success_url"].startswith("https://other.example.com/done/?purchaseResult=success")
        )
        self.assertEqual(config["cancel_url"], "https://other.example.com/done/?purchaseResult=failed")

    def testUnbekannterKurs(self):
        response = self.client.post(CHECKOUT_URL, {"course_id": 9999}, format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(PurchaseSession.objects.exists())
        self.create_session.assert_not_called()

    def testKostenloserKursKannNichtGekauftWerden(self):
        response = self.client.post(CHECKOUT_URL, {"course_id": self.free_course.id}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(PurchaseSession.objects.exists())

    def testInaktiverPreisplan(self):
        PricingPlan.objects.filter(pk=self.plan.pk).update(is_active=False)
        response = self.client.post(
            CHECKOUT_URL, {"pricing_plan_id": "price_monthly"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def testKursUndAboGleichzeitig(self):
        response = self.client.post(
            CHECKOUT_URL,
            {"course_id": self.course.id, "pricing_plan_id": "price_monthly"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def testWederKursNochAbo(self):
        response = self.client.post(CHECKOUT_URL, {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def testStripeFehlerLiefert500(self):
        self.create_session.side_effect = stripe.StripeError("Invalid API Key provided")

        with self.assertLogs("core.stripe_integration.views", level="ERROR"):
            response = self.client.post(CHECKOUT_URL, {"course_id": self.course.id}, format="json")

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.json(), {"error": "Could not initiate Stripe checkout session"})
