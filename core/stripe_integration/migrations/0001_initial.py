import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("elearning", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PricingPlan",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("stripe_price_id", models.CharField(max_length=255, unique=True)),
                ("stripe_product_id", models.CharField(blank=True, default="", max_length=255)),
                ("name", models.CharField(max_length=200)),
                ("amount", models.PositiveIntegerField(help_text="Amount in the minor currency unit")),
                ("currency", models.CharField(default="usd", max_length=3)),
                ("interval", models.CharField(choices=[("day", "Daily"), ("week", "Weekly"), ("month", "Monthly"), ("year", "Yearly")], default="month", max_length=10)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Pricing Plan",
                "verbose_name_plural": "Pricing Plans",
                "db_table": "stripe_pricing_plan",
                "ordering": ["amount"],
            },
        ),
        migrations.CreateModel(
            name="PurchaseSession",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("status", models.CharField(choices=[("ongoing", "Ongoing"), ("completed", "Completed"), ("expired", "Expired")], db_index=True, default="ongoing", max_length=20)),
                ("created", models.DateTimeField(default=django.utils.timezone.now)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("pricing_plan_id", models.CharField(blank=True, default="", max_length=255)),
                ("stripe_checkout_session_id", models.CharField(blank=True, db_index=True, default="", max_length=255)),
                ("stripe_customer_id", models.CharField(blank=True, default="", max_length=255)),
                ("course", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name="purchase_sessions", to="elearning.course")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="purchase_sessions", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Purchase Session",
                "verbose_name_plural": "Purchase Sessions",
                "db_table": "stripe_purchase_session",
                "ordering": ["-created"],
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            (models.Q(("course__isnull", False)) & models.Q(("pricing_plan_id", "")))
                            | (models.Q(("course__isnull", True)) & ~models.Q(("pricing_plan_id", "")))
                        ),
                        name="purchase_session_course_xor_plan",
                    ),
                ],
            },
        ),
    ]
