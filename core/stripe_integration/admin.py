from django.contrib import admin

from .models import PricingPlan, PurchaseSession


@admin.register(PurchaseSession)
class PurchaseSessionAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "status", "course", "pricing_plan_id", "created", "completed_at")
    list_filter = ("status", "created")
    search_fields = (
        "id",
        "user__username",
        "user__email",
        "stripe_checkout_session_id",
        "stripe_customer_id",
    )
    readonly_fields = (
        "id",
        "created",
        "completed_at",
        "stripe_checkout_session_id",
        "stripe_customer_id",
    )
    list_select_related = ("user", "course")


@admin.register(PricingPlan)
class PricingPlanAdmin(admin.ModelAdmin):
    list_display = ("name", "stripe_price_id", "amount", "currency", "interval", "is_active")
    list_filter = ("is_active", "interval", "currency")
    search_fields = ("name", "stripe_price_id", "stripe_product_id")
