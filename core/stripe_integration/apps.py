"""
Stripe Integration AppConfig
============================

This module defines the Django application configuration for the local
`core.stripe_integration` app. It is responsible for:

- Registering with Django (name, verbose label, default PK field).
- Configuring the Stripe SDK once per process with the active secret key
  and the pinned API version, so views, services and management commands
  can call `stripe.*` directly.

Operational notes
-----------------
- Keep side effects in `ready()` minimal and idempotent.
- `apps.py` is executed on every process start; avoid DB/network calls here.

Author: DSP Development Team
"""

import stripe
from django.apps import AppConfig
from django.conf import settings


class StripeIntegrationConfig(AppConfig):
    """
    App configuration for the `core.stripe_integration` package.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "core.stripe_integration"
    label = "stripe_integration"
    verbose_name = "Stripe Integration"

    def ready(self):
        stripe.api_key = settings.STRIPE_SECRET_KEY
        stripe.api_version = settings.STRIPE_API_VERSION
