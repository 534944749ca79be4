"""Storefront: product catalog and a session cart kept in sync with Supabase."""

__version__ = "0.1.0"
