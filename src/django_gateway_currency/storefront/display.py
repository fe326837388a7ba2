"""Rendering helpers that expose order totals to add-ons.

Each helper renders what the storefront would show on its own and then runs
the matching filter or fragment action from
:mod:`django_gateway_currency.storefront.hooks`.
"""

from django.http import HttpRequest
from django.utils.safestring import SafeString, mark_safe

from django_gateway_currency.storefront import hooks
from django_gateway_currency.storefront.models import Cart, Order
from django_gateway_currency.storefront.pricing import format_price

TotalRows = dict[str, dict[str, str]]


def get_formatted_order_total(
    order: Order,
    *,
    tax_display: str = "",
    display_refunded: bool = True,
    request: HttpRequest | None = None,
) -> SafeString:
    """Render the order total and run it through ``formatted_order_total``.

    Args:
        order: The order whose ``total`` is rendered.
        tax_display: ``"incl"``, ``"excl"`` or ``""``; forwarded to receivers.
        display_refunded: Forwarded to receivers.
        request: The current request, if rendering for a page.

    Returns:
        The (possibly rewritten) price fragment.
    """
    formatted = format_price(order.total)
    result = hooks.formatted_order_total.apply(
        formatted,
        order=order,
        tax_display=tax_display,
        display_refunded=display_refunded,
        request=request,
    )
    return mark_safe(result)  # noqa: S308


def get_order_item_totals(
    order: Order,
    *,
    tax_display: str = "",
    request: HttpRequest | None = None,
) -> TotalRows:
    """Build the labelled total rows shown under an order table.

    Returns a mapping of ``{"cart_subtotal": {...}, "order_total": {...}}``
    where each row has ``label`` and ``value`` keys, after the
    ``order_item_totals`` filter has run.
    """
    rows: TotalRows = {
        "cart_subtotal": {"label": "Subtotal:", "value": format_price(order.subtotal)},
        "order_total": {
            "label": "Total:",
            "value": get_formatted_order_total(order, tax_display=tax_display, request=request),
        },
    }
    return hooks.order_item_totals.apply(rows, order=order, tax_display=tax_display)


def render_review_order_before_payment(cart: Cart) -> SafeString:
    """Collect the fragments add-ons render above the payment step."""
    return hooks.collect_fragments(hooks.review_order_before_payment, sender=Cart, cart=cart)


def render_admin_order_totals(order_id: int) -> SafeString:
    """Collect the extra admin totals rows for an order."""
    return hooks.collect_fragments(hooks.admin_order_totals_after_total, sender=Order, order_id=order_id)


def render_order_details_after_table(order: Order) -> SafeString:
    """Collect the fragments shown below the customer order details table."""
    return hooks.collect_fragments(hooks.order_details_after_order_table, sender=Order, order=order)
