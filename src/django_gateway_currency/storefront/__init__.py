"""Minimal storefront: carts, orders, per-order metadata and the extension points add-ons hook into."""
