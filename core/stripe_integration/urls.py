from django.urls import path
from .views import (
    CheckoutSessionView,
    GetStripeConfigView,
    PricingPlanListView,
    PurchaseSessionStatusView,
)

app_name = "stripe_integration"

urlpatterns = [
    path("checkout/", CheckoutSessionView.as_view(), name="checkout"),
    path("purchase-sessions/<uuid:pk>/", PurchaseSessionStatusView.as_view(), name="purchase-session-status"),
    path("pricing-plans/", PricingPlanListView.as_view(), name="pricing-plans"),
    path("stripe/config/", GetStripeConfigView.as_view(), name="stripe-config"),
]
