"""URL configuration for the storefront app.

Mount these in the host project::

    urlpatterns = [
        path("shop/", include("django_gateway_currency.storefront.urls")),
    ]
"""

from django.http import HttpRequest
from django.urls import path

from django_gateway_currency.storefront.views import CheckoutView, OrderDetailView, OrderReceivedView

app_name = "storefront"

CHECKOUT_URL_NAMES: frozenset[str] = frozenset({"checkout", "order-received"})

urlpatterns = [
    path("checkout/<int:cart_id>/", CheckoutView.as_view(), name="checkout"),
    path("checkout/order-received/<str:reference>/", OrderReceivedView.as_view(), name="order-received"),
    path("orders/<str:reference>/", OrderDetailView.as_view(), name="order-detail"),
]


def is_checkout_request(request: HttpRequest | None) -> bool:
    """Return ``True`` when *request* was routed to the checkout or order-received page."""
    match = getattr(request, "resolver_match", None)
    if match is None:
        return False
    return app_name in match.namespaces and match.url_name in CHECKOUT_URL_NAMES
