"""Display-currency add-on that converts order totals for the payment gateway."""
