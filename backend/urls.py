"""
Root URL configuration.

URL Structure:
- /:                   Health check
- /admin/:             Django admin (jazzmin)
- /api/elearning/:     Courses, lessons, authentication and users
- /api/payments/:      Checkout sessions, purchase status, Stripe config
- /stripe-webhooks/:   Stripe webhook receiver (called by Stripe only)
"""

from django.contrib import admin
from django.urls import include, path

from core.stripe_integration.views import StripeWebhookView

from .views import health_check

urlpatterns = [
    path("", health_check, name="health-check"),
    path("admin/", admin.site.urls),
    path("api/elearning/", include("elearning.urls")),
    path("api/payments/", include("core.stripe_integration.urls")),
    path("stripe-webhooks/", StripeWebhookView.as_view(), name="stripe-webhooks"),
]
