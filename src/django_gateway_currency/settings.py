"""Typed configuration for django-gateway-currency.

Reads a single ``GATEWAY_CURRENCY`` dict from Django settings and exposes it
as composed, frozen dataclasses with sensible defaults.

Usage::

    from django_gateway_currency.settings import get_config

    config = get_config()
    config.rate
    config.display_currency
    config.stripe.secret_key
"""

import functools
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.test.signals import setting_changed

CURRENCY_POSITIONS: frozenset[str] = frozenset({"left", "right", "left_space", "right_space"})


@dataclass(frozen=True, slots=True)
class StripeConfig:
    """Stripe payment gateway configuration."""

    secret_key: str | None = None
    publishable_key: str | None = None
    api_version: str = "2024-12-18"


@dataclass(frozen=True, slots=True)
class GatewayCurrencyConfig:
    """Top-level django-gateway-currency configuration.

    ``rate`` converts an amount in ``display_currency`` (what shoppers see)
    into ``gateway_currency`` (what the payment gateway charges).
    """

    stripe: StripeConfig = field(default_factory=StripeConfig)
    rate: Decimal = Decimal("0.37")
    display_currency: str = "XCD"
    gateway_currency: str = "USD"
    currency_symbol: str = "$"
    currency_position: str = "left"
    code_marker_id: str = "gc-ccode"
    thousand_separator: str = ","
    decimal_separator: str = "."
    show_checkout_notice: bool = True
    order_reference_prefix: str = "ORD"


@functools.lru_cache(maxsize=1)
def get_config() -> GatewayCurrencyConfig:
    """Build and return the add-on configuration.

    Reads ``settings.GATEWAY_CURRENCY`` (a plain dict) and returns a frozen
    :class:`GatewayCurrencyConfig`.  The result is cached; the cache is
    cleared automatically when Django's ``setting_changed`` signal fires
    (e.g. inside ``override_settings``).
    """
    raw = getattr(settings, "GATEWAY_CURRENCY", {})
    if not isinstance(raw, Mapping):
        msg = "GATEWAY_CURRENCY must be a mapping (dict-like object)"
        raise TypeError(msg)
    raw_data = dict(raw)

    stripe_data = raw_data.pop("stripe", {})
    if not isinstance(stripe_data, Mapping):
        msg = "GATEWAY_CURRENCY['stripe'] must be a mapping (dict-like object)"
        raise TypeError(msg)

    if "rate" in raw_data:
        raw_data["rate"] = _coerce_rate(raw_data["rate"])

    config = GatewayCurrencyConfig(
        stripe=StripeConfig(**dict(stripe_data)),
        **raw_data,
    )
    _validate_config(config)
    return config


def _coerce_rate(value: object) -> Decimal:
    """Turn a configured rate (``str``, ``int``, ``float`` or ``Decimal``) into a Decimal."""
    if isinstance(value, bool):
        msg = "GATEWAY_CURRENCY['rate'] must be a decimal number"
        raise TypeError(msg)
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        msg = f"GATEWAY_CURRENCY['rate'] must be a decimal number, got {value!r}"
        raise ValueError(msg) from exc


def _validate_config(config: GatewayCurrencyConfig) -> None:
    """Validate high-impact configuration values with clear error messages."""
    if not config.rate.is_finite() or config.rate <= 0:
        msg = "GATEWAY_CURRENCY['rate'] must be a positive decimal"
        raise ValueError(msg)
    for key in ("display_currency", "gateway_currency", "currency_symbol", "code_marker_id"):
        value = getattr(config, key)
        if not isinstance(value, str) or not value.strip():
            msg = f"GATEWAY_CURRENCY['{key}'] must be a non-empty string"
            raise ValueError(msg)
    if config.display_currency == config.gateway_currency:
        msg = "GATEWAY_CURRENCY['display_currency'] and ['gateway_currency'] must differ"
        raise ValueError(msg)
    if config.currency_position not in CURRENCY_POSITIONS:
        msg = f"GATEWAY_CURRENCY['currency_position'] must be one of: {', '.join(sorted(CURRENCY_POSITIONS))}"
        raise ValueError(msg)
    if not isinstance(config.show_checkout_notice, bool):
        msg = "GATEWAY_CURRENCY['show_checkout_notice'] must be a boolean"
        raise TypeError(msg)


def _clear_config_cache(*, setting: str, **kwargs: object) -> None:  # noqa: ARG001
    """Clear the cached config when Django settings change during tests."""
    if setting == "GATEWAY_CURRENCY":
        get_config.cache_clear()


setting_changed.connect(_clear_config_cache, dispatch_uid="django_gateway_currency.settings.clear_config_cache")
