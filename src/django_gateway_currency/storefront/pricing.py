"""Price formatting for the storefront.

:func:`format_price` is the single place amounts are turned into HTML. Its
format template runs through the ``price_format`` filter, so add-ons can
change how every price on the site is labelled.
"""

from decimal import ROUND_HALF_UP, Decimal

from django.utils.html import escape
from django.utils.safestring import SafeString, mark_safe

from django_gateway_currency.settings import get_config
from django_gateway_currency.storefront import hooks

CENTS = Decimal("0.01")

PRICE_FORMATS: dict[str, str] = {
    "left": "{symbol}{price}",
    "right": "{price}{symbol}",
    "left_space": "{symbol}&nbsp;{price}",
    "right_space": "{price}&nbsp;{symbol}",
}


def format_number(amount: Decimal) -> str:
    """Render *amount* with two decimals and the configured separators.

    ``Decimal("1234.5")`` becomes ``"1,234.50"`` with the default
    separators. Negative amounts keep their leading minus sign.
    """
    config = get_config()
    quantized = Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    whole, _, fraction = f"{abs(quantized):,.2f}".partition(".")
    whole = whole.replace(",", config.thousand_separator)
    sign = "-" if quantized < 0 else ""
    return f"{sign}{whole}{config.decimal_separator}{fraction}"


def get_price_format(position: str | None = None) -> str:
    """Return the price format template for *position* after the ``price_format`` filter."""
    position = position or get_config().currency_position
    fmt = PRICE_FORMATS.get(position, PRICE_FORMATS["left"])
    return str(hooks.price_format.apply(fmt, position=position))


def format_price(amount: Decimal | None) -> SafeString:
    """Format *amount* as a price fragment.

    ``None`` is treated as zero. The output looks like::

        <span class="storefront-price amount"><bdi><span class="storefront-price-symbol">$</span>37.00</bdi></span>

    Args:
        amount: The amount to render.

    Returns:
        The rendered fragment, marked safe for templates.
    """
    if amount is None:
        amount = Decimal("0.00")

    config = get_config()
    symbol = f'<span class="storefront-price-symbol">{escape(config.currency_symbol)}</span>'
    price = format_number(amount)
    inner = get_price_format().format(symbol=symbol, price=price)
    return mark_safe(f'<span class="storefront-price amount"><bdi>{inner}</bdi></span>')  # noqa: S308
