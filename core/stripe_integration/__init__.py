"""
Stripe Integration Package
=============================================================

This package centralizes all Stripe-related logic: the checkout of single
courses (one-time purchase) and of subscriptions (recurring charge).

Purchase Lifecycle
------------------
1. The frontend calls POST /api/payments/checkout/ with a course or a
   pricing plan.
2. A `PurchaseSession` is stored with status `ongoing` and a Stripe
   Checkout Session is created referencing it (`client_reference_id`).
3. The customer pays on the Stripe hosted page.
4. Stripe calls /stripe-webhooks/ with `checkout.session.completed`; the
   purchase session is marked `completed` and the course (or the pricing
   plan) is granted in the same database transaction.
5. Stripe redirects the customer to the success URL, where the frontend
   waits on /api/payments/purchase-sessions/<id>/ for the completion.

Structure
---------
- apps.py         → App configuration, Stripe SDK setup
- models.py       → PurchaseSession, PricingPlan
- checkout.py     → Stripe Checkout Session configuration
- fulfillment.py  → Completion of purchases (atomic)
- webhooks.py     → Signature verification and event dispatch
- views.py        → API endpoints
- urls.py         → Routes for payment endpoints
- management/     → setup_stripe_plans command

Author: DSP Development Team
"""
