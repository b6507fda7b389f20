"""Setup Stripe Pricing Plans Management Command

Subscriptions can only be sold for a recurring Price that already exists in
Stripe. This command creates the Product and its recurring Price in Stripe
(or registers an existing Price) and records it as a local PricingPlan.
"""

import logging

import stripe
from django.core.management.base import BaseCommand, CommandError

from ...models import PricingPlan

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Creates a recurring Stripe price for subscriptions and records it as a PricingPlan"

    def add_arguments(self, parser):
        parser.add_argument(
            "--name",
            default="Monthly Subscription",
            help="Product name shown on the Stripe checkout page",
        )
        parser.add_argument(
            "--amount",
            type=int,
            default=999,
            help="Amount per interval in the minor currency unit (999 = 9.99)",
        )
        parser.add_argument("--currency", default="usd")
        parser.add_argument(
            "--interval",
            default=PricingPlan.Interval.MONTH,
            choices=PricingPlan.Interval.values,
        )
        parser.add_argument(
            "--price-id",
            help="Register an existing Stripe price instead of creating a new one",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only show what would be created in Stripe",
        )

    def handle(self, *args, **options):
        if options["price_id"]:
            price = self.retrieve_recurring_price(options["price_id"])

            if options["dry_run"]:
                self.stdout.write(
                    self.style.WARNING(
                        f"DRY RUN: would register '{price['product']['name']}' "
                        f"({price['id']}) without writing a pricing plan"
                    )
                )
                return

            plan = self.register_existing_price(price)
        else:
            if options["amount"] <= 0:
                raise CommandError("--amount must be a positive number of minor units.")

            if options["dry_run"]:
                self.stdout.write(
                    self.style.WARNING(
                        f"DRY RUN: would create '{options['name']}' at "
                        f"{options['amount']} {options['currency']} per {options['interval']}"
                    )
                )
                return

            plan = self.create_price(
                name=options["name"],
                amount=options["amount"],
                currency=options["currency"],
                interval=options["interval"],
            )

        self.stdout.write(
            self.style.SUCCESS(f"Pricing plan ready: {plan.name} ({plan.stripe_price_id})")
        )

    def create_price(self, *, name, amount, currency, interval):
        try:
            product = stripe.Product.create(name=name)
            price = stripe.Price.create(
                product=product["id"],
                unit_amount=amount,
                currency=currency,
                recurring={"interval": interval},
            )
        except stripe.StripeError as e:
            raise CommandError(f"Stripe rejected the pricing plan: {e}") from e

        logger.info("Created Stripe price %s for product %s", price["id"], product["id"])

        plan, _ = PricingPlan.objects.update_or_create(
            stripe_price_id=price["id"],
            defaults={
                "stripe_product_id": product["id"],
                "name": name,
                "amount": amount,
                "currency": currency,
                "interval": interval,
                "is_active": True,
            },
        )
        return plan

    def retrieve_recurring_price(self, price_id):
        try:
            price = stripe.Price.retrieve(price_id, expand=["product"])
        except stripe.StripeError as e:
            raise CommandError(f"Could not retrieve Stripe price {price_id}: {e}") from e

        if not price["recurring"]:
            raise CommandError(f"Stripe price {price_id} is not recurring.")
        return price

    def register_existing_price(self, price):
        recurring = price["recurring"]
        product = price["product"]

        plan, created = PricingPlan.objects.update_or_create(
            stripe_price_id=price["id"],
            defaults={
                "stripe_product_id": product["id"],
                "name": product["name"],
                "amount": price["unit_amount"],
                "currency": price["currency"],
                "interval": recurring["interval"],
                "is_active": True,
            },
        )
        logger.info(
            "%s pricing plan %s", "Registered" if created else "Updated", plan.stripe_price_id
        )
        return plan
