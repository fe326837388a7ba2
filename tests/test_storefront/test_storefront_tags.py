"""Tests for storefront template tags and filters."""

from decimal import Decimal

from django.template import Context, Template

from django_gateway_currency.storefront.templatetags.storefront_tags import price


def test_price_filter():
    assert "12.50" in price(Decimal("12.5"))


def test_price_filter_none():
    assert "0.00" in price(None)


def test_price_filter_template_rendering():
    tpl = Template("{% load storefront_tags %}{{ amount|price }}")
    rendered = tpl.render(Context({"amount": Decimal("42.50")}))

    assert "42.50&nbsp;<span id='gc-ccode'>XCD</span>" in rendered
    assert "&lt;" not in rendered
