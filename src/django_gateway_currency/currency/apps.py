"""Django app configuration for the display-currency add-on."""

from django.apps import AppConfig


class GatewayCurrencyConfig(AppConfig):
    """Configuration for the display-currency add-on."""

    name = "django_gateway_currency.currency"
    label = "gc_currency"
    verbose_name = "Gateway Currency"

    def ready(self) -> None:
        """Connect the storefront hook handlers on app startup."""
        import django_gateway_currency.currency.handlers  # noqa: F401, PLC0415
