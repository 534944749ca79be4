"""Base repository with shared Supabase client."""
from typing import Any

from supabase._async.client import AsyncClient

from storefront.errors import RemoteUnavailable
from storefront.logging import get_logger, for_log

logger = get_logger(__name__)


class BaseRepository:
    """Base class for all repositories.

    Every remote call goes through ``_execute`` so callers only ever see
    ``RemoteUnavailable``, never PostgREST or httpx exceptions.
    """

    def __init__(self, client: AsyncClient) -> None:
        self.client = client

    async def _execute(self, query: Any, operation: str) -> Any:
        try:
            return await query.execute()
        except Exception as e:
            logger.error(f"{operation} failed: {for_log(str(e), 200)}")
            raise RemoteUnavailable(operation, str(e)) from e
