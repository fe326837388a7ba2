"""Django admin configuration for the storefront app."""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.safestring import SafeString, mark_safe

from django_gateway_currency.storefront.display import render_admin_order_totals
from django_gateway_currency.storefront.models import Cart, CartItem, Order, OrderLineItem, OrderMeta
from django_gateway_currency.storefront.pricing import format_price


class CartItemInline(admin.TabularInline):
    """Inline display of cart items within the cart admin."""

    model = CartItem
    extra = 0


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    """Admin interface for carts."""

    list_display = ("id", "status", "created_at")
    list_filter = ("status",)
    inlines = (CartItemInline,)


class OrderLineItemInline(admin.TabularInline):
    """Read-only inline display of order line items."""

    model = OrderLineItem
    extra = 0
    readonly_fields = ("description", "quantity", "unit_price", "line_total")


class OrderMetaInline(admin.TabularInline):
    """Read-only inline display of order metadata."""

    model = OrderMeta
    extra = 0
    readonly_fields = ("key", "value")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin interface for orders.

    ``total`` is read-only; the ``order_totals`` field renders the totals
    table including any rows add-ons contribute.
    """

    list_display = ("reference", "status", "billing_email", "total", "created_at")
    list_filter = ("status",)
    search_fields = ("reference", "billing_email")
    readonly_fields = ("total", "order_totals")
    inlines = (OrderLineItemInline, OrderMetaInline)

    @admin.display(description="Totals")
    def order_totals(self, obj: Order) -> SafeString:
        """Render the order total row followed by add-on rows."""
        if obj.pk is None:
            return mark_safe("")  # noqa: S308
        return format_html(
            '<table class="storefront-order-totals"><tr><td class="label">Order Total:</td>'
            '<td width="1%"></td><td class="total">{}</td></tr>{}</table>',
            format_price(obj.total),
            render_admin_order_totals(obj.pk),
        )
