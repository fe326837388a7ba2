"""Currency-code labels shown next to storefront prices."""

from django.utils.html import escape

from django_gateway_currency.settings import get_config


def label_format(fmt: str, position: str) -> str:
    """Return the price format template with the display-currency code appended.

    Only left-positioned symbols are relabelled; every other position keeps
    *fmt* as is.

    >>> label_format("{symbol}{price}", "left")
    "{symbol}{price}&nbsp;<span id='gc-ccode'>XCD</span>"
    """
    if position != "left":
        return fmt
    config = get_config()
    return f"{{symbol}}{{price}}&nbsp;<span id='{escape(config.code_marker_id)}'>{escape(config.display_currency)}</span>"


def gateway_label(fragment: str) -> str:
    """Swap the display-currency code in *fragment* for the gateway-currency code."""
    config = get_config()
    return fragment.replace(config.display_currency, config.gateway_currency)
