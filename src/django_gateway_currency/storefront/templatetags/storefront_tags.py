"""Template tags and filters for the storefront app."""

from decimal import Decimal

from django import template
from django.utils.safestring import SafeString

from django_gateway_currency.storefront.pricing import format_price

register = template.Library()


@register.filter
def price(amount: Decimal | None) -> SafeString:
    """Format an amount with the storefront price formatter.

    Usage in templates::

        {% load storefront_tags %}
        {{ line.line_total|price }}
    """
    return format_price(amount)
