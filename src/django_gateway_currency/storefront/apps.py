"""Django app configuration for the storefront app."""

from django.apps import AppConfig


class GatewayCurrencyStorefrontConfig(AppConfig):
    """Configuration for the storefront app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "django_gateway_currency.storefront"
    label = "gc_storefront"
    verbose_name = "Storefront"
