"""Extension points the storefront exposes to add-ons.

Actions are plain Django signals. Receivers that return a string from an
action marked *fragment* contribute an HTML fragment to the page or email
being rendered; see :func:`collect_fragments`.

Actions:
    checkout_create_order: Sent while an order is being built from a cart,
        before it is saved.
        Kwargs:
            order: The unsaved ``Order``. Receivers may change ``order.total``.
            form_data: The submitted checkout data (a mapping).
            context: The request-scoped ``CheckoutContext``.
    checkout_update_order_meta: Sent once the order has been saved.
        Kwargs:
            order_id: Primary key of the new order.
            form_data: The submitted checkout data.
            context: The same ``CheckoutContext`` passed to ``checkout_create_order``.
    review_order_before_payment: *Fragment.* Rendered above the payment step.
        Kwargs:
            cart: The ``Cart`` being checked out.
    order_thankyou: Sent after the order-received page has been rendered.
        Kwargs:
            order_id: Primary key of the order.
    admin_order_totals_after_total: *Fragment.* Extra ``<tr>`` rows for the
        admin order totals table.
        Kwargs:
            order_id: Primary key of the order.
    order_details_after_order_table: *Fragment.* Rendered below the customer
        order details table.
        Kwargs:
            order: The ``Order``.
    email_after_order_table: *Fragment.* Rendered below the order table in
        order emails.
        Kwargs:
            email: The ``OrderEmail`` being rendered.

Filters (see :class:`Filter`):
    price_format: The price format template. Kwargs: ``position``.
    order_item_totals: The mapping of order total rows. Kwargs: ``order``,
        ``tax_display``.
    formatted_order_total: The rendered order total. Kwargs: ``order``,
        ``tax_display``, ``display_refunded``, ``request``.
"""

from collections.abc import Callable
from dataclasses import dataclass

from django.dispatch import Signal
from django.utils.html import conditional_escape
from django.utils.safestring import SafeString, mark_safe

checkout_create_order = Signal()
checkout_update_order_meta = Signal()
review_order_before_payment = Signal()
order_thankyou = Signal()
admin_order_totals_after_total = Signal()
order_details_after_order_table = Signal()
email_after_order_table = Signal()

DEFAULT_PRIORITY = 10


@dataclass(frozen=True, slots=True)
class _FilterReceiver:
    priority: int
    sequence: int
    func: Callable[..., object]
    lookup_key: object


class Filter:
    """An ordered chain of callables that each transform a value.

    Receivers are called as ``receiver(value, **kwargs)`` in ascending
    ``priority`` order (ties keep connection order) and must return the
    new value, which is handed to the next receiver.

    Args:
        name: Human-readable name used in ``repr``.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._receivers: list[_FilterReceiver] = []
        self._sequence = 0

    def __repr__(self) -> str:
        return f"<Filter {self.name} ({len(self._receivers)} receivers)>"

    def connect(
        self,
        receiver: Callable[..., object],
        *,
        priority: int = DEFAULT_PRIORITY,
        dispatch_uid: str | None = None,
    ) -> None:
        """Connect *receiver* to this filter.

        Connecting the same receiver (or the same ``dispatch_uid``) twice
        is a no-op, so modules that connect at import time stay idempotent.
        """
        lookup_key = dispatch_uid if dispatch_uid is not None else receiver
        if any(r.lookup_key == lookup_key for r in self._receivers):
            return
        self._sequence += 1
        self._receivers.append(_FilterReceiver(priority, self._sequence, receiver, lookup_key))
        self._receivers.sort(key=lambda r: (r.priority, r.sequence))

    def disconnect(
        self,
        receiver: Callable[..., object] | None = None,
        *,
        dispatch_uid: str | None = None,
    ) -> bool:
        """Disconnect a receiver, returning ``True`` if one was removed."""
        lookup_key = dispatch_uid if dispatch_uid is not None else receiver
        remaining = [r for r in self._receivers if r.lookup_key != lookup_key]
        removed = len(remaining) != len(self._receivers)
        self._receivers = remaining
        return removed

    def has_receivers(self) -> bool:
        return bool(self._receivers)

    def apply(self, value: object, **kwargs: object) -> object:
        """Run *value* through every connected receiver and return the result."""
        for receiver in list(self._receivers):
            value = receiver.func(value, **kwargs)
        return value


price_format = Filter("price_format")
order_item_totals = Filter("order_item_totals")
formatted_order_total = Filter("formatted_order_total")


def collect_fragments(signal: Signal, *, sender: object = None, **kwargs: object) -> SafeString:
    """Send a fragment action and join the HTML its receivers returned.

    ``None`` responses are skipped. Plain strings are escaped unless they are
    already marked safe.
    """
    responses = signal.send(sender=sender, **kwargs)
    parts = [conditional_escape(response) for _, response in responses if response is not None]
    return mark_safe("".join(parts))  # noqa: S308
