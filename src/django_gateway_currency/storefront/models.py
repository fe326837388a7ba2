"""Cart, order, and order metadata models for the storefront."""

from decimal import Decimal

from django.db import models


class Cart(models.Model):
    """A shopper's cart.

    Carts hold line items before checkout and transition from ``OPEN`` to
    ``CHECKED_OUT`` once an order has been created from them.
    """

    class Status(models.TextChoices):
        """Lifecycle states for a shopping cart."""

        OPEN = "open", "Open"
        CHECKED_OUT = "checked_out", "Checked Out"

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.OPEN,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Cart {self.pk} ({self.status})"

    @property
    def contents_total(self) -> Decimal:
        """Sum of all line totals in the cart, in the display currency."""
        return sum((item.line_total for item in self.items.all()), Decimal("0.00"))


class CartItem(models.Model):
    """A single priced line in a cart."""

    cart = models.ForeignKey(
        Cart,
        on_delete=models.CASCADE,
        related_name="items",
    )
    description = models.CharField(max_length=300)
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)

    def __str__(self) -> str:
        return f"{self.quantity}x {self.description}"

    @property
    def line_total(self) -> Decimal:
        """Return ``unit_price * quantity``."""
        return self.unit_price * self.quantity


class Order(models.Model):
    """An order created from a checked-out cart.

    ``total`` is the canonical order total. The storefront persists whatever
    value the order carries once the ``checkout_create_order`` hooks have run,
    and that is the amount submitted to the payment gateway.
    """

    class Status(models.TextChoices):
        """Lifecycle states for an order."""

        PENDING = "pending", "Pending"
        PROCESSING = "processing", "Processing"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"

    reference = models.CharField(
        max_length=100,
        unique=True,
        help_text='Unique order reference, e.g. "ORD-A1B2C3D4".',
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    billing_email = models.EmailField(blank=True, default="")
    total = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.reference} ({self.status})"

    @property
    def subtotal(self) -> Decimal:
        """Sum of the order's line totals."""
        return sum((line.line_total for line in self.line_items.all()), Decimal("0.00"))


class OrderLineItem(models.Model):
    """A snapshot of a purchased cart line at checkout time."""

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="line_items",
    )
    description = models.CharField(max_length=300)
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    line_total = models.DecimalField(max_digits=12, decimal_places=2)

    def __str__(self) -> str:
        return f"{self.quantity}x {self.description}"


class OrderMetaManager(models.Manager):
    """String-keyed, string-valued metadata lookups by order id."""

    def get_value(self, order_id: int, key: str, default: str = "") -> str:
        """Return the stored value for *key*, or *default* when it was never set."""
        value = self.filter(order_id=order_id, key=key).values_list("value", flat=True).first()
        return default if value is None else value

    def set_value(self, order_id: int, key: str, value: str) -> "OrderMeta":
        """Create or overwrite the value stored under *key* for an order."""
        meta, _ = self.update_or_create(order_id=order_id, key=key, defaults={"value": value})
        return meta


class OrderMeta(models.Model):
    """A single metadata attribute attached to an order.

    Add-ons use this table to keep their own values alongside an order
    without altering the ``Order`` schema.
    """

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="meta_entries",
    )
    key = models.CharField(max_length=191)
    value = models.TextField(blank=True, default="")

    objects = OrderMetaManager()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["order", "key"], name="gc_storefront_ordermeta_unique_key"),
        ]

    def __str__(self) -> str:
        return f"{self.order_id}:{self.key}"
