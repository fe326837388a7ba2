"""Swap the amount inside an already rendered price fragment.

The storefront renders an order total as something like::

    <span class="amount"><bdi><span class="symbol">$</span>37.00&nbsp;<span id='gc-ccode'>XCD</span></bdi></span>

The number sits between the first closing tag and the next tag that carries
an ``id`` attribute (the currency-code marker). :func:`rewrite_display_total`
pulls that number out and puts a different one in its place, leaving every
other byte of the fragment untouched.
"""

import re

_AMOUNT_RE = re.compile(r"</[^>]+>(.*?)<\w+[^>]*?\sid=", re.DOTALL)
_NON_NUMERIC_RE = re.compile(r"[^0-9.,]")


def extract_display_amount(formatted_total: str) -> str:
    """Return the amount token rendered in *formatted_total*, or ``""`` if none is found."""
    match = _AMOUNT_RE.search(formatted_total)
    if match is None:
        return ""
    return _NON_NUMERIC_RE.sub("", match.group(1))


def rewrite_display_total(formatted_total: str, original_total: str) -> str:
    """Replace the rendered amount in *formatted_total* with *original_total*.

    Only the first occurrence of the rendered amount is replaced. When no
    amount can be found the fragment is returned unchanged.

    Args:
        formatted_total: A rendered price fragment with a currency-code marker.
        original_total: The text to show instead of the rendered amount.

    Returns:
        The rewritten fragment.
    """
    token = extract_display_amount(formatted_total)
    if not token:
        return formatted_total
    return formatted_total.replace(token, original_total, 1)
