"""Payment service for collecting order totals through the gateway.

Payment must be initiated straight after checkout, while ``Order.total``
still holds the amount add-ons left on it for the gateway. Once the
order-received page fires ``order_thankyou`` the total may be rewritten for
display.
"""

import logging

from django.core.exceptions import ValidationError

from django_gateway_currency.settings import get_config
from django_gateway_currency.storefront.gateway import StripeGateway
from django_gateway_currency.storefront.models import Order

logger = logging.getLogger(__name__)


def client_secret_session_key(reference: str) -> str:
    """Return the session key holding the payment client secret for an order."""
    return f"storefront_client_secret:{reference}"


class PaymentService:
    """Stateless service for payment operations."""

    @staticmethod
    def is_enabled() -> bool:
        """Return ``True`` when a gateway secret key is configured."""
        return bool(get_config().stripe.secret_key)

    @staticmethod
    def initiate_payment(order: Order) -> str:
        """Create a payment intent for the order's current total.

        Args:
            order: The freshly checked-out order.

        Returns:
            The gateway ``client_secret`` for frontend confirmation.

        Raises:
            ValidationError: If the order is not in PENDING status.
            ValueError: If no secret key is configured or the gateway
                returns no client secret.
        """
        if order.status != Order.Status.PENDING:
            raise ValidationError("Payment can only be initiated for pending orders.")

        client_secret = StripeGateway().create_payment_intent(order)
        logger.info("Initiated payment for order %s (%s)", order.reference, order.total)
        return client_secret
