"""Storefront hook handlers for the display-currency add-on.

Shoppers see prices labelled in the display currency, but the order total is
converted to the gateway currency at checkout so the payment gateway charges
the converted amount. After checkout these handlers put the original total
back wherever the order is shown, and add an "Amount Paid" line with the
converted total.

Connected when the ``gc_currency`` app is ready.
"""

import logging

from django.http import HttpRequest
from django.utils.html import format_html
from django.utils.safestring import SafeString, mark_safe

from django_gateway_currency.currency.conversion import convert, from_meta, to_meta
from django_gateway_currency.currency.labels import gateway_label, label_format
from django_gateway_currency.currency.meta import (
    CONVERTED_TOTAL_KEY,
    ORIGINAL_TOTAL_KEY,
    get_converted_total,
    get_original_total,
    save_order_totals,
)
from django_gateway_currency.currency.rewriter import rewrite_display_total
from django_gateway_currency.settings import get_config
from django_gateway_currency.storefront import hooks
from django_gateway_currency.storefront.emails import OrderEmail, to_plain_text
from django_gateway_currency.storefront.models import Cart, Order
from django_gateway_currency.storefront.pricing import format_number, format_price
from django_gateway_currency.storefront.services.checkout import CheckoutContext
from django_gateway_currency.storefront.urls import is_checkout_request

logger = logging.getLogger(__name__)

# Filter priority for receivers that must see the value every other receiver settled on.
LATE_PRIORITY = 9999


def add_currency_label(fmt: str, *, position: str, **kwargs: object) -> str:  # noqa: ARG001
    """Label every left-positioned price with the display-currency code."""
    return label_format(fmt, position)


def show_gateway_total_at_checkout(sender: object, cart: Cart, **kwargs: object) -> SafeString | None:  # noqa: ARG001
    """Tell the shopper what they will actually be billed, in the gateway currency."""
    config = get_config()
    if not config.show_checkout_notice:
        return None

    total = convert(cart.contents_total, config.rate)
    return format_html(
        "<div style='text-align: center'><p>Total in {currency}: {symbol}{total}<br>"
        "<small>You will be billed in {currency}.</small></p></div>",
        currency=config.gateway_currency,
        symbol=config.currency_symbol,
        total=format_number(total),
    )


def set_total_for_gateway(
    sender: object,  # noqa: ARG001
    order: Order,
    context: CheckoutContext,
    **kwargs: object,  # noqa: ARG001
) -> None:
    """Convert the order total so the gateway is charged in its own currency.

    Both totals are stashed on the checkout context for
    :func:`save_order_totals_meta`, which runs once the order has an id.
    """
    config = get_config()
    original_total = order.total
    converted_total = convert(original_total, config.rate)

    context[ORIGINAL_TOTAL_KEY] = to_meta(original_total)
    context[CONVERTED_TOTAL_KEY] = to_meta(converted_total)
    order.total = converted_total

    logger.info(
        "Converted order total %s %s to %s %s for the payment gateway",
        original_total,
        config.display_currency,
        converted_total,
        config.gateway_currency,
    )


def save_order_totals_meta(
    sender: object,  # noqa: ARG001
    order_id: int,
    context: CheckoutContext,
    **kwargs: object,  # noqa: ARG001
) -> None:
    """Persist the original and converted totals recorded during checkout."""
    save_order_totals(
        order_id,
        original_total=context.get(ORIGINAL_TOTAL_KEY),
        converted_total=context.get(CONVERTED_TOTAL_KEY),
    )
    logger.info("Saved gateway currency totals for order %s", order_id)


def restore_original_total(sender: object, order_id: int, **kwargs: object) -> None:  # noqa: ARG001
    """Write the original total back to ``Order.total`` after the thank-you page.

    From here on anything reading the order total sees the display-currency
    amount again.
    """
    original_total = get_original_total(order_id)
    if not original_total:
        logger.warning("Order %s has no original total; leaving its total unchanged", order_id)
        return

    Order.objects.filter(pk=order_id).update(total=from_meta(original_total))
    logger.info("Restored original total %s on order %s", original_total, order_id)


def show_original_total_in_rows(
    rows: dict[str, dict[str, str]],
    *,
    order: Order,
    **kwargs: object,  # noqa: ARG001
) -> dict[str, dict[str, str]]:
    """Show the original total in the order total rows (emails, order pages)."""
    original_total = get_original_total(order.pk)
    if original_total and "order_total" in rows:
        rows["order_total"]["value"] = format_price(from_meta(original_total))
    return rows


def show_original_total_on_order_received(
    formatted_total: str,
    *,
    order: Order,
    request: HttpRequest | None = None,
    **kwargs: object,  # noqa: ARG001
) -> str:
    """Show the original total on the checkout and order-received pages.

    Those pages render before ``order_thankyou`` restores the original total,
    so the fragment still holds the converted amount; swap it out in place.
    """
    if not is_checkout_request(request):
        return formatted_total

    original_total = get_original_total(order.pk)
    if not original_total:
        return formatted_total

    rewritten = rewrite_display_total(str(formatted_total), format_number(from_meta(original_total)))
    return mark_safe(rewritten)  # noqa: S308


def _amount_paid(order_id: int) -> SafeString:
    """Format the converted total with the gateway-currency label."""
    formatted = format_price(from_meta(get_converted_total(order_id)))
    return mark_safe(gateway_label(formatted))  # noqa: S308


def show_admin_converted_total(sender: object, order_id: int, **kwargs: object) -> SafeString:  # noqa: ARG001
    """Add an "Amount Paid" row to the admin order totals table."""
    return format_html(
        '<tr><td class="label">Amount Paid in {}:</td><td width="1%"></td><td class="total">{}</td></tr>',
        get_config().gateway_currency,
        _amount_paid(order_id),
    )


def show_customer_converted_total(sender: object, order: Order, **kwargs: object) -> SafeString:  # noqa: ARG001
    """Add an "Amount Paid" line below the customer order details table."""
    return format_html(
        '<p style="text-align: right"><strong>Amount Paid in {}:</strong> {}</p>',
        get_config().gateway_currency,
        _amount_paid(order.pk),
    )


def add_converted_total_to_email(sender: object, email: OrderEmail, **kwargs: object) -> SafeString:  # noqa: ARG001
    """Add an "Amount Paid" line below the order table in order emails."""
    currency = get_config().gateway_currency
    amount = _amount_paid(email.order.pk)
    if email.is_plain_text:
        return mark_safe(f"Amount Paid in {currency}: {to_plain_text(amount)}\n")  # noqa: S308
    return format_html("<p><strong>Amount Paid in {}:</strong> {}</p>", currency, amount)


hooks.price_format.connect(add_currency_label, priority=1, dispatch_uid="gc_currency.add_currency_label")
hooks.order_item_totals.connect(
    show_original_total_in_rows,
    priority=LATE_PRIORITY,
    dispatch_uid="gc_currency.show_original_total_in_rows",
)
hooks.formatted_order_total.connect(
    show_original_total_on_order_received,
    priority=LATE_PRIORITY,
    dispatch_uid="gc_currency.show_original_total_on_order_received",
)

hooks.review_order_before_payment.connect(
    show_gateway_total_at_checkout, sender=Cart, dispatch_uid="gc_currency.show_gateway_total_at_checkout"
)
hooks.checkout_create_order.connect(set_total_for_gateway, sender=Order, dispatch_uid="gc_currency.set_total_for_gateway")
hooks.checkout_update_order_meta.connect(
    save_order_totals_meta, sender=Order, dispatch_uid="gc_currency.save_order_totals_meta"
)
hooks.order_thankyou.connect(restore_original_total, sender=Order, dispatch_uid="gc_currency.restore_original_total")
hooks.admin_order_totals_after_total.connect(
    show_admin_converted_total, sender=Order, dispatch_uid="gc_currency.show_admin_converted_total"
)
hooks.order_details_after_order_table.connect(
    show_customer_converted_total, sender=Order, dispatch_uid="gc_currency.show_customer_converted_total"
)
hooks.email_after_order_table.connect(
    add_converted_total_to_email, sender=Order, dispatch_uid="gc_currency.add_converted_total_to_email"
)
