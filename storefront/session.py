"""
Session identity.

A session id is an opaque string created once per install and reused on
every later run. It scopes which cart_items rows belong to this shopper.
"""
import json
import random
import string
import time
from pathlib import Path
from typing import Optional, Protocol

from storefront.config import SESSION_BACKEND_REDIS, Settings
from storefront.logging import get_logger, for_log

logger = get_logger(__name__)

SESSION_KEY = "sessionId"

_BASE36 = string.digits + string.ascii_lowercase


class SessionStore(Protocol):
    """Durable key-value storage for client-local state."""

    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...


class MemorySessionStore:
    """Process-local store. Lost on exit."""

    def __init__(self, initial: Optional[dict] = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileSessionStore:
    """JSON file on local disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        return json.loads(self.path.read_text(encoding="utf-8") or "{}")

    async def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    async def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")


class RedisSessionStore:
    """Upstash Redis, for headless installs without a writable home directory."""

    def __init__(self, redis, namespace: str = "storefront:"):
        self.redis = redis
        self.namespace = namespace

    async def get(self, key: str) -> Optional[str]:
        return await self.redis.get(f"{self.namespace}{key}")

    async def set(self, key: str, value: str) -> None:
        # No TTL: the id must outlive any single visit
        await self.redis.set(f"{self.namespace}{key}", value)


def new_session_id() -> str:
    """Timestamp plus random suffix, e.g. ``session_1761712758000_k3j9x0a1b``."""
    suffix = "".join(random.choices(_BASE36, k=9))
    return f"session_{int(time.time() * 1000)}_{suffix}"


async def get_or_create_session_id(store: SessionStore) -> str:
    """Return the stored session id, creating and persisting one on first use."""
    session_id = await store.get(SESSION_KEY)
    if session_id:
        return session_id

    session_id = new_session_id()
    await store.set(SESSION_KEY, session_id)
    logger.info(f"Created new session {for_log(session_id)}")
    return session_id


def create_session_store(settings: Settings) -> SessionStore:
    """Build the session store selected by STOREFRONT_SESSION_BACKEND."""
    if settings.session_backend == SESSION_BACKEND_REDIS:
        from storefront.db import get_redis

        return RedisSessionStore(get_redis(settings))
    return FileSessionStore(settings.state_path)
