"""Order meta keys and accessors for the original and converted totals."""

from django_gateway_currency.storefront.models import OrderMeta

ORIGINAL_TOTAL_KEY = "_gc_original_total"
CONVERTED_TOTAL_KEY = "_gc_converted_total"


def save_order_totals(order_id: int, *, original_total: str, converted_total: str) -> None:
    """Persist both totals against an order."""
    OrderMeta.objects.set_value(order_id, ORIGINAL_TOTAL_KEY, original_total)
    OrderMeta.objects.set_value(order_id, CONVERTED_TOTAL_KEY, converted_total)


def get_original_total(order_id: int) -> str:
    """Return the stored display-currency total, or ``""`` if it was never saved."""
    return OrderMeta.objects.get_value(order_id, ORIGINAL_TOTAL_KEY)


def get_converted_total(order_id: int) -> str:
    """Return the stored gateway-currency total, or ``""`` if it was never saved."""
    return OrderMeta.objects.get_value(order_id, CONVERTED_TOTAL_KEY)
