"""Stripe payment gateway client.

The gateway is always charged ``Order.total`` in the configured
``gateway_currency``. Stripe represents amounts as integers in the smallest
currency unit, so totals are converted before they are submitted.
"""

import logging
from decimal import Decimal

import stripe

from django_gateway_currency.settings import get_config
from django_gateway_currency.storefront.models import Order

logger = logging.getLogger(__name__)

ZERO_DECIMAL_CURRENCIES: frozenset[str] = frozenset(
    {
        "BIF",
        "CLP",
        "DJF",
        "GNF",
        "JPY",
        "KMF",
        "KRW",
        "MGA",
        "PYG",
        "RWF",
        "UGX",
        "VND",
        "VUV",
        "XAF",
        "XOF",
        "XPF",
    }
)


def convert_amount_for_api(amount: Decimal, currency: str) -> int:
    """Convert a Decimal amount to the integer representation expected by the Stripe API.

    ``Decimal("37.00")`` in USD becomes ``3700``; zero-decimal currencies
    such as JPY are returned as ``int(amount)``.
    """
    if currency.upper() in ZERO_DECIMAL_CURRENCIES:
        return int(amount)
    return int(amount * 100)


class StripeGateway:
    """Stripe client bound to the configured secret key and API version.

    Raises:
        ValueError: If no Stripe secret key is configured.
    """

    def __init__(self) -> None:
        config = get_config()
        if not config.stripe.secret_key:
            msg = "GATEWAY_CURRENCY['stripe']['secret_key'] must be set before initializing StripeGateway."
            raise ValueError(msg)
        self.currency = config.gateway_currency
        self.client = stripe.StripeClient(
            config.stripe.secret_key,
            stripe_version=config.stripe.api_version,
        )

    def create_payment_intent(self, order: Order) -> str:
        """Create a Stripe PaymentIntent charging the order total.

        The order reference doubles as the idempotency key so retried
        requests are safe. Call this before the order-received page fires
        ``order_thankyou``; see
        :class:`~django_gateway_currency.storefront.services.payment.PaymentService`.

        Args:
            order: The order to collect payment for.

        Returns:
            The ``client_secret`` for the frontend payment flow.

        Raises:
            ValueError: If Stripe returns no client secret.
        """
        amount = convert_amount_for_api(order.total, self.currency)
        intent = self.client.v1.payment_intents.create(
            params={
                "amount": amount,
                "currency": self.currency.lower(),
                "metadata": {
                    "order_id": str(order.pk),
                    "reference": order.reference,
                },
                "description": f"Order {order.reference}",
            },
            options={
                "idempotency_key": order.reference,
            },
        )

        client_secret = intent.client_secret
        if client_secret is None:
            msg = f"Stripe returned no client_secret for order {order.reference}"
            raise ValueError(msg)

        logger.info("Created payment intent for order %s: %s %s", order.reference, amount, self.currency)
        return client_secret
