"""Order confirmation emails."""

import html
import logging
from dataclasses import dataclass

from django.core.mail import send_mail
from django.template.loader import render_to_string
from django.utils.html import strip_tags
from django.utils.safestring import SafeString

from django_gateway_currency.storefront import hooks
from django_gateway_currency.storefront.display import get_order_item_totals
from django_gateway_currency.storefront.models import Order

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OrderEmail:
    """The email being rendered, as seen by ``email_after_order_table`` receivers."""

    order: Order
    is_admin: bool = False
    is_plain_text: bool = False


def to_plain_text(fragment: str) -> str:
    """Strip markup and decode entities so a price fragment reads well in a text email."""
    return html.unescape(strip_tags(fragment))


def render_order_email(order: Order, *, sent_to_admin: bool = False, plain_text: bool = False) -> str:
    """Render the order email body.

    Args:
        order: The order to summarise.
        sent_to_admin: ``True`` for the copy sent to shop staff.
        plain_text: Render the ``.txt`` template instead of ``.html``.

    Returns:
        The rendered body.
    """
    email = OrderEmail(order=order, is_admin=sent_to_admin, is_plain_text=plain_text)
    after_table: SafeString = hooks.collect_fragments(hooks.email_after_order_table, sender=Order, email=email)
    totals = get_order_item_totals(order)
    if plain_text:
        totals = {key: {"label": row["label"], "value": to_plain_text(row["value"])} for key, row in totals.items()}
    template = "order.txt" if plain_text else "order.html"
    return render_to_string(
        f"gateway_currency/storefront/emails/{template}",
        {
            "email": email,
            "order": order,
            "line_items": order.line_items.all(),
            "totals": totals,
            "after_order_table": after_table,
        },
    )


def send_order_email(order: Order, *, sent_to_admin: bool = False, recipient: str | None = None) -> int:
    """Send the order confirmation email as multipart text and HTML.

    Args:
        order: The order to summarise.
        sent_to_admin: ``True`` for the copy sent to shop staff.
        recipient: Override the recipient; defaults to ``order.billing_email``.

    Returns:
        The number of messages sent (``0`` when there is no recipient).
    """
    to = recipient or order.billing_email
    if not to:
        logger.warning("Order %s has no billing email; confirmation not sent", order.reference)
        return 0

    sent = send_mail(
        subject=f"Your order {order.reference}",
        message=render_order_email(order, sent_to_admin=sent_to_admin, plain_text=True),
        from_email=None,
        recipient_list=[to],
        html_message=render_order_email(order, sent_to_admin=sent_to_admin),
    )
    logger.info("Sent order email for %s to %s", order.reference, to)
    return sent
