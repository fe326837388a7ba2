"""Tests for the Stripe gateway client."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from django.test import override_settings

from django_gateway_currency.storefront.gateway import StripeGateway, convert_amount_for_api
from django_gateway_currency.storefront.models import Order

STRIPE_SETTINGS = {"stripe": {"secret_key": "sk_test_abc123"}}


@pytest.fixture
def order(db):
    return Order.objects.create(reference="ORD-STRIPE01", total=Decimal("37.00"))


@pytest.fixture
def mock_stripe_client_cls():
    with patch("django_gateway_currency.storefront.gateway.stripe.StripeClient") as mock_cls:
        mock_instance = MagicMock()
        mock_cls.return_value = mock_instance
        yield mock_cls, mock_instance.v1


@pytest.mark.unit
class TestConvertAmountForApi:
    def test_two_decimal_currency(self):
        assert convert_amount_for_api(Decimal("37.00"), "USD") == 3700

    def test_zero_decimal_currency(self):
        assert convert_amount_for_api(Decimal("1000"), "jpy") == 1000


@pytest.mark.unit
class TestInit:
    def test_requires_secret_key(self):
        with pytest.raises(ValueError, match="secret_key"):
            StripeGateway()

    def test_binds_key_and_api_version(self, mock_stripe_client_cls):
        mock_cls, _ = mock_stripe_client_cls

        with override_settings(GATEWAY_CURRENCY=STRIPE_SETTINGS):
            gateway = StripeGateway()

        mock_cls.assert_called_once_with("sk_test_abc123", stripe_version="2024-12-18")
        assert gateway.currency == "USD"


@pytest.mark.django_db
class TestCreatePaymentIntent:
    def test_charges_order_total_in_gateway_currency(self, order, mock_stripe_client_cls):
        _, v1 = mock_stripe_client_cls
        v1.payment_intents.create.return_value = MagicMock(client_secret="pi_123_secret_456")

        with override_settings(GATEWAY_CURRENCY=STRIPE_SETTINGS):
            client_secret = StripeGateway().create_payment_intent(order)

        assert client_secret == "pi_123_secret_456"
        call = v1.payment_intents.create.call_args
        assert call.kwargs["params"]["amount"] == 3700
        assert call.kwargs["params"]["currency"] == "usd"
        assert call.kwargs["params"]["metadata"] == {"order_id": str(order.pk), "reference": "ORD-STRIPE01"}
        assert call.kwargs["options"] == {"idempotency_key": "ORD-STRIPE01"}

    def test_missing_client_secret_raises(self, order, mock_stripe_client_cls):
        _, v1 = mock_stripe_client_cls
        v1.payment_intents.create.return_value = MagicMock(client_secret=None)

        with override_settings(GATEWAY_CURRENCY=STRIPE_SETTINGS):
            gateway = StripeGateway()
            with pytest.raises(ValueError, match="no client_secret"):
                gateway.create_payment_intent(order)
