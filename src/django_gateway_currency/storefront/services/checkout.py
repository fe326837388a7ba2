"""Checkout service for converting carts into orders.

Builds an order from an open cart, gives add-ons a chance to adjust it via
the ``checkout_create_order`` hook, saves it, and then fires
``checkout_update_order_meta`` so add-ons can attach their own metadata.
"""

import logging
import secrets
import string
from collections.abc import Mapping
from dataclasses import dataclass, field

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from django_gateway_currency.settings import get_config
from django_gateway_currency.storefront.hooks import checkout_create_order, checkout_update_order_meta
from django_gateway_currency.storefront.models import Cart, Order, OrderLineItem

logger = logging.getLogger(__name__)


@dataclass
class CheckoutContext:
    """Values handed from one checkout hook to the next within a single checkout.

    A fresh context is created for every call to
    :meth:`CheckoutService.checkout` and passed to both
    ``checkout_create_order`` and ``checkout_update_order_meta``.
    """

    values: dict[str, str] = field(default_factory=dict)

    def __getitem__(self, key: str) -> str:
        return self.values[key]

    def __setitem__(self, key: str, value: str) -> None:
        self.values[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def get(self, key: str, default: str = "") -> str:
        return self.values.get(key, default)


def _generate_reference() -> str:
    """Generate a unique order reference using the configured prefix.

    The prefix is set via ``GATEWAY_CURRENCY["order_reference_prefix"]``
    (default ``"ORD"``), producing references like ``ORD-A1B2C3D4``.
    """
    config = get_config()
    chars = string.ascii_uppercase + string.digits
    suffix = "".join(secrets.choice(chars) for _ in range(8))
    return f"{config.order_reference_prefix}-{suffix}"


class CheckoutService:
    """Stateless service for checkout operations."""

    @staticmethod
    @transaction.atomic
    def checkout(
        cart: Cart,
        *,
        billing_email: str = "",
        form_data: Mapping[str, str] | None = None,
    ) -> Order:
        """Convert a cart into an order atomically.

        Args:
            cart: The open cart to check out.
            billing_email: Customer billing email.
            form_data: The submitted checkout form data, forwarded to hooks.

        Returns:
            The newly created Order with PENDING status. Its ``total`` is
            whatever the ``checkout_create_order`` receivers left on it.

        Raises:
            ValidationError: If the cart is not open or is empty.
        """
        cart = Cart.objects.select_for_update().get(pk=cart.pk)
        if cart.status != Cart.Status.OPEN:
            raise ValidationError("Only open carts can be checked out.")

        items = list(cart.items.all())
        if not items:
            raise ValidationError("Cannot check out an empty cart.")

        data = dict(form_data or {})
        context = CheckoutContext()
        order = Order(
            status=Order.Status.PENDING,
            billing_email=billing_email,
            total=cart.contents_total,
        )
        checkout_create_order.send(sender=Order, order=order, form_data=data, context=context)

        while True:
            order.reference = _generate_reference()
            try:
                with transaction.atomic():
                    order.save(force_insert=True)
                break
            except IntegrityError:
                order.pk = None
                continue

        OrderLineItem.objects.bulk_create(
            [
                OrderLineItem(
                    order=order,
                    description=item.description,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    line_total=item.line_total,
                )
                for item in items
            ]
        )

        cart.status = Cart.Status.CHECKED_OUT
        cart.save(update_fields=["status", "updated_at"])

        checkout_update_order_meta.send(sender=Order, order_id=order.pk, form_data=data, context=context)

        logger.info("Order %s created from cart %s with total %s", order.reference, cart.pk, order.total)
        return order
