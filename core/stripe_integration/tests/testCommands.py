from datetime import timedelta
from decimal import Decimal
from io import StringIO
from unittest import mock

from django.contrib.auth.models import User
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from django.utils import timezone

from core.stripe_integration.models import PricingPlan, PurchaseSession
from elearning.models import Course


class SetupStripePlansCommandTests(TestCase):
    @mock.patch("stripe.Price.create", return_value={"id": "price_new"})
    @mock.patch("stripe.Product.create", return_value={"id": "prod_new"})
    def testErstelltProduktUndPreis(self, product_create, price_create):
        out = StringIO()
        call_command(
            "setup_stripe_plans", "--name", "Yearly", "--amount", "9900",
            "--interval", "year", stdout=out,
        )

        product_create.assert_called_once_with(name="Yearly")
        price_create.assert_called_once_with(
            product="prod_new", unit_amount=9900, currency="usd", recurring={"interval": "year"}
        )
        plan = PricingPlan.objects.get(stripe_price_id="price_new")
        self.assertEqual(plan.stripe_product_id, "prod_new")
        self.assertEqual(plan.interval, "year")
        self.assertIn("price_new", out.getvalue())

    @mock.patch("stripe.Product.create")
    def testDryRunLegtNichtsAn(self, product_create):
        call_command("setup_stripe_plans", "--dry-run", stdout=StringIO())
        product_create.assert_not_called()
        self.assertFalse(PricingPlan.objects.exists())

    @mock.patch("stripe.Price.retrieve")
    def testDryRunMitVorhandenemPreisLegtNichtsAn(self, price_retrieve):
        price_retrieve.return_value = {
            "id": "price_existing",
            "unit_amount": 1500,
            "currency": "eur",
            "recurring": {"interval": "month"},
            "product": {"id": "prod_existing", "name": "Premium"},
        }
        out = StringIO()

        call_command(
            "setup_stripe_plans", "--price-id", "price_existing", "--dry-run", stdout=out
        )

        price_retrieve.assert_called_once_with("price_existing", expand=["product"])
        self.assertFalse(PricingPlan.objects.exists())
        self.assertIn("DRY RUN", out.getvalue())

    @mock.patch("stripe.Price.retrieve")
    def testRegistriertVorhandenenPreis(self, price_retrieve):
        price_retrieve.return_value = {
            "id": "price_existing",
            "unit_amount": 1500,
            "currency": "eur",
            "recurring": {"interval": "month"},
            "product": {"id": "prod_existing", "name": "Premium"},
        }

        call_command("setup_stripe_plans", "--price-id", "price_existing", stdout=StringIO())

        price_retrieve.assert_called_once_with("price_existing", expand=["product"])
        plan = PricingPlan.objects.get(stripe_price_id="price_existing")
        self.assertEqual(plan.name, "Premium")
        self.assertEqual(plan.amount, 1500)
        self.assertEqual(plan.currency, "eur")

    @mock.patch("stripe.Price.retrieve")
    def testEinmaligerPreisWirdAbgelehnt(self, price_retrieve):
        price_retrieve.return_value = {
            "id": "price_once",
            "unit_amount": 1500,
            "currency": "usd",
            "recurring": None,
            "product": {"id": "prod_once", "name": "One-off"},
        }

        with self.assertRaises(CommandError):
            call_command("setup_stripe_plans", "--price-id", "price_once", stdout=StringIO())


class ExpirePurchaseSessionsCommandTests(TestCase):
    def testNurAlteLaufendeKaufvorgaengeVerfallen(self):
        user = User.objects.create_user(username="Max", password="Musterpassword")
        course = Course.objects.create(url="rxjs-course", description="RxJs", price=Decimal("50"))
        old = timezone.now() - timedelta(hours=30)

        stale = PurchaseSession.objects.create(user=user, course=course, created=old)
        recent = PurchaseSession.objects.create(user=user, course=course)
        completed = PurchaseSession.objects.create(user=user, course=course, created=old)
        completed.mark_completed()

        call_command("expire_purchase_sessions", stdout=StringIO())

        stale.refresh_from_db()
        recent.refresh_from_db()
        completed.refresh_from_db()
        self.assertEqual(stale.status, PurchaseSession.Status.EXPIRED)
        self.assertEqual(recent.status, PurchaseSession.Status.ONGOING)
        self.assertEqual(completed.status, PurchaseSession.Status.COMPLETED)
