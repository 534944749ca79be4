"""
Database Module - Supabase and Redis Clients

Provides singleton instances of:
- Async Supabase client for the products, categories, cart_items,
  orders and order_items tables
- Upstash Redis client for the redis session backend
"""

from typing import Optional

from supabase._async.client import AsyncClient, create_client as acreate_client
from upstash_redis.asyncio import Redis as AsyncRedis

from storefront.config import Settings, get_settings

# Singleton instances
_async_supabase_client: Optional[AsyncClient] = None
_redis_client: Optional[AsyncRedis] = None


async def get_supabase(settings: Optional[Settings] = None) -> AsyncClient:
    """
    Get async Supabase client (singleton).
    """
    global _async_supabase_client

    if _async_supabase_client is None:
        settings = settings or get_settings()
        settings.require_supabase()
        _async_supabase_client = await acreate_client(settings.supabase_url, settings.supabase_key)

    return _async_supabase_client


def get_redis(settings: Optional[Settings] = None) -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        settings = settings or get_settings()
        settings.require_redis()
        _redis_client = AsyncRedis(url=settings.redis_url, token=settings.redis_token)

    return _redis_client


def reset_clients() -> None:
    """Drop cached clients."""
    global _async_supabase_client, _redis_client
    _async_supabase_client = None
    _redis_client = None


class Tables:
    """Remote table names."""

    PRODUCTS = "products"
    CATEGORIES = "categories"
    CART_ITEMS = "cart_items"
    ORDERS = "orders"
    ORDER_ITEMS = "order_items"
