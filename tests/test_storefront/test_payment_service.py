"""Tests for PaymentService."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from django.core.exceptions import ValidationError
from django.test import override_settings

from django_gateway_currency.storefront.models import Order
from django_gateway_currency.storefront.services.payment import PaymentService, client_secret_session_key

STRIPE_SETTINGS = {"stripe": {"secret_key": "sk_test_abc123"}}


@pytest.fixture
def order(db):
    return Order.objects.create(reference="ORD-PAY00001", total=Decimal("37.00"))


def test_is_enabled_follows_secret_key():
    assert PaymentService.is_enabled() is False

    with override_settings(GATEWAY_CURRENCY=STRIPE_SETTINGS):
        assert PaymentService.is_enabled() is True


def test_client_secret_session_key():
    assert client_secret_session_key("ORD-PAY00001") == "storefront_client_secret:ORD-PAY00001"


@pytest.mark.django_db
def test_initiate_payment_returns_client_secret(order):
    with (
        patch("django_gateway_currency.storefront.gateway.stripe.StripeClient") as mock_cls,
        override_settings(GATEWAY_CURRENCY=STRIPE_SETTINGS),
    ):
        mock_cls.return_value.v1.payment_intents.create.return_value = MagicMock(client_secret="pi_1_secret_2")
        client_secret = PaymentService.initiate_payment(order)

    assert client_secret == "pi_1_secret_2"
    assert mock_cls.return_value.v1.payment_intents.create.call_args.kwargs["params"]["amount"] == 3700


@pytest.mark.django_db
def test_initiate_payment_rejects_non_pending_order(order):
    order.status = Order.Status.COMPLETED

    with pytest.raises(ValidationError, match="pending orders"):
        PaymentService.initiate_payment(order)
