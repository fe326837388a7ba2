"""Show storefront prices in one currency while charging the payment gateway in another."""
