"""Views for the storefront app.

Provides the checkout review page, the order-received (thank-you) page, and
the customer order detail page.
"""

import logging

from django.contrib import messages
from django.core.exceptions import ValidationError
from django.db.models import QuerySet
from django.http import HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.template.response import SimpleTemplateResponse
from django.urls import reverse
from django.views import View
from django.views.generic import DetailView

from django_gateway_currency.storefront.display import (
    get_formatted_order_total,
    get_order_item_totals,
    render_order_details_after_table,
    render_review_order_before_payment,
)
from django_gateway_currency.storefront.emails import send_order_email
from django_gateway_currency.storefront.hooks import order_thankyou
from django_gateway_currency.storefront.models import Cart, Order
from django_gateway_currency.storefront.pricing import format_price
from django_gateway_currency.storefront.services.checkout import CheckoutService
from django_gateway_currency.storefront.services.payment import PaymentService, client_secret_session_key

logger = logging.getLogger(__name__)


class CheckoutView(View):
    """Review an open cart and turn it into an order."""

    template_name = "gateway_currency/storefront/checkout.html"

    def _get_open_cart(self, cart_id: int) -> Cart:
        return get_object_or_404(Cart, pk=cart_id, status=Cart.Status.OPEN)

    def get(self, request: HttpRequest, cart_id: int) -> HttpResponse:
        """Render the cart review with any fragments add-ons show before payment."""
        cart = self._get_open_cart(cart_id)
        return render(
            request,
            self.template_name,
            {
                "cart": cart,
                "items": cart.items.all(),
                "total": format_price(cart.contents_total),
                "before_payment": render_review_order_before_payment(cart),
            },
        )

    def post(self, request: HttpRequest, cart_id: int) -> HttpResponse:
        """Create the order and redirect to the order-received page.

        The full POST body is forwarded to the checkout hooks as form data.
        When a gateway is configured the payment intent is created here,
        before order-received, and its client secret kept in the session.
        The order confirmation email is sent last.
        """
        cart = self._get_open_cart(cart_id)
        try:
            order = CheckoutService.checkout(
                cart,
                billing_email=request.POST.get("billing_email", ""),
                form_data=request.POST.dict(),
            )
        except ValidationError as exc:
            logger.warning("Checkout failed for cart %s: %s", cart_id, exc.messages)
            messages.error(request, "; ".join(exc.messages))
            return redirect(reverse("storefront:checkout", args=[cart_id]))

        if PaymentService.is_enabled():
            request.session[client_secret_session_key(order.reference)] = PaymentService.initiate_payment(order)
        send_order_email(order)

        return redirect(reverse("storefront:order-received", args=[order.reference]))


class _OrderByReferenceMixin:
    """Look orders up by their public reference."""

    context_object_name = "order"

    def get_object(self, queryset: QuerySet[Order] | None = None) -> Order:  # noqa: ARG002
        return get_object_or_404(Order, reference=self.kwargs["reference"])


class OrderReceivedView(_OrderByReferenceMixin, DetailView):
    """Thank-you page shown after checkout.

    Fires ``order_thankyou`` once the page has been rendered, so anything on
    the page still sees the order as it was saved during checkout.
    """

    template_name = "gateway_currency/storefront/order_received.html"

    def get_context_data(self, **kwargs: object) -> dict[str, object]:
        """Add the formatted total, total rows, and after-table fragments."""
        context = super().get_context_data(**kwargs)
        order = self.object
        context["formatted_total"] = get_formatted_order_total(order, request=self.request)
        context["line_items"] = order.line_items.all()
        context["totals"] = get_order_item_totals(order, request=self.request)
        context["after_order_table"] = render_order_details_after_table(order)
        return context

    def render_to_response(self, context: dict[str, object], **response_kwargs: object) -> HttpResponse:
        response = super().render_to_response(context, **response_kwargs)
        order_id = self.object.pk

        def _fire_thankyou(rendered: SimpleTemplateResponse) -> None:  # noqa: ARG001
            order_thankyou.send(sender=Order, order_id=order_id)

        response.add_post_render_callback(_fire_thankyou)
        return response


class OrderDetailView(_OrderByReferenceMixin, DetailView):
    """Customer view of a past order."""

    template_name = "gateway_currency/storefront/order_detail.html"

    def get_context_data(self, **kwargs: object) -> dict[str, object]:
        """Add line items, total rows, and after-table fragments."""
        context = super().get_context_data(**kwargs)
        order = self.object
        context["line_items"] = order.line_items.all()
        context["totals"] = get_order_item_totals(order, request=self.request)
        context["after_order_table"] = render_order_details_after_table(order)
        return context
