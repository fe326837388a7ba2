"""Tests for order confirmation emails."""

from decimal import Decimal

import pytest
from django.core import mail

from django_gateway_currency.currency.meta import save_order_totals
from django_gateway_currency.storefront.emails import render_order_email, send_order_email, to_plain_text
from django_gateway_currency.storefront.models import Order, OrderLineItem


@pytest.fixture
def order(db):
    order = Order.objects.create(
        reference="ORD-EMAIL001",
        billing_email="buyer@example.com",
        total=Decimal("37.00"),
    )
    OrderLineItem.objects.create(
        order=order,
        description="Hot sauce",
        quantity=2,
        unit_price=Decimal("50.00"),
        line_total=Decimal("100.00"),
    )
    save_order_totals(order.pk, original_total="100.00", converted_total="37.00")
    return order


@pytest.mark.unit
def test_to_plain_text():
    assert to_plain_text("<b>$</b>37.00&nbsp;<span>USD</span>") == "$37.00\xa0USD"


@pytest.mark.django_db
class TestRenderOrderEmail:
    def test_html_shows_original_total_and_amount_paid(self, order):
        body = render_order_email(order)

        assert "ORD-EMAIL001" in body
        assert "Hot sauce" in body
        assert '<tr class="order_total"><th>Total:</th><td><span class="storefront-price amount">' in body
        assert "<p><strong>Amount Paid in USD:</strong>" in body
        assert "37.00" in body

    def test_plain_text_has_no_markup(self, order):
        body = render_order_email(order, plain_text=True)

        assert "<" not in body
        assert "Total: $100.00\xa0XCD" in body
        assert "Amount Paid in USD: $37.00\xa0USD" in body


@pytest.mark.django_db
class TestSendOrderEmail:
    def test_sends_multipart_message(self, order):
        sent = send_order_email(order)

        assert sent == 1
        message = mail.outbox[0]
        assert message.to == ["buyer@example.com"]
        assert message.subject == "Your order ORD-EMAIL001"
        assert "Amount Paid in USD" in message.body
        html_body, mimetype = message.alternatives[0]
        assert mimetype == "text/html"
        assert "<p><strong>Amount Paid in USD:</strong>" in html_body

    def test_recipient_override(self, order):
        send_order_email(order, sent_to_admin=True, recipient="shop@example.com")

        assert mail.outbox[0].to == ["shop@example.com"]

    def test_no_recipient_sends_nothing(self, order):
        order.billing_email = ""

        assert send_order_email(order) == 0
        assert mail.outbox == []
