"""Tests for the display-total rewriter."""

import pytest

from django_gateway_currency.currency.rewriter import extract_display_amount, rewrite_display_total

RENDERED = (
    '<span class="storefront-price amount"><bdi><span class="storefront-price-symbol">$</span>'
    "37.00&nbsp;<span id='gc-ccode'>XCD</span></bdi></span>"
)


@pytest.mark.unit
class TestExtractDisplayAmount:
    def test_extracts_amount_between_marker_tags(self):
        assert extract_display_amount(RENDERED) == "37.00"

    def test_keeps_grouping_separators(self):
        fragment = "<b>$</b>1,234.56&nbsp;<span id='c'>XCD</span>"
        assert extract_display_amount(fragment) == "1,234.56"

    def test_no_marker(self):
        assert extract_display_amount("<span>$37.00</span>") == ""


@pytest.mark.unit
class TestRewriteDisplayTotal:
    def test_simple_fragment(self):
        fragment = 'A</span>37.00<span id="x">XCD</span>B'
        assert rewrite_display_total(fragment, "100.00") == 'A</span>100.00<span id="x">XCD</span>B'

    def test_storefront_fragment_preserves_markup(self):
        result = rewrite_display_total(RENDERED, "100.00")
        assert result == RENDERED.replace("37.00", "100.00")

    def test_no_marker_spans_returns_input(self):
        fragment = "<p>Total: 37.00 XCD</p>"
        assert rewrite_display_total(fragment, "100.00") == fragment

    def test_plain_text_returns_input(self):
        assert rewrite_display_total("37.00", "100.00") == "37.00"

    def test_empty_token_returns_input(self):
        fragment = "A</span>&nbsp;<span id='x'>XCD</span>"
        assert rewrite_display_total(fragment, "100.00") == fragment

    def test_only_first_occurrence_is_replaced(self):
        fragment = "</i>37.00<span id='x'>XCD</span> (37.00)"
        assert rewrite_display_total(fragment, "100.00") == "</i>100.00<span id='x'>XCD</span> (37.00)"

    def test_double_application_is_identity(self):
        once = rewrite_display_total(RENDERED, "100.00")
        assert rewrite_display_total(once, "100.00") == once
