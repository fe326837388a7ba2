"""Tests for the storefront admin."""

from decimal import Decimal

import pytest
from django.contrib.admin.sites import site
from django.urls import reverse

from django_gateway_currency.currency.meta import save_order_totals
from django_gateway_currency.storefront.models import Order


@pytest.fixture
def order(db):
    order = Order.objects.create(reference="ORD-ADMIN001", total=Decimal("100.00"))
    save_order_totals(order.pk, original_total="100.00", converted_total="37.00")
    return order


@pytest.mark.django_db
def test_order_totals_field_includes_amount_paid_row(order):
    order_admin = site._registry[Order]

    rendered = order_admin.order_totals(order)

    assert rendered.startswith('<table class="storefront-order-totals">')
    assert "Order Total:" in rendered
    assert '<tr><td class="label">Amount Paid in USD:</td>' in rendered
    assert "37.00" in rendered


@pytest.mark.django_db
def test_order_totals_field_blank_for_unsaved_order():
    order_admin = site._registry[Order]

    assert order_admin.order_totals(Order()) == ""


@pytest.mark.django_db
def test_order_change_page_renders(admin_client, order):
    response = admin_client.get(reverse("admin:gc_storefront_order_change", args=[order.pk]))

    assert response.status_code == 200
    assert "Amount Paid in USD:" in response.content.decode()
