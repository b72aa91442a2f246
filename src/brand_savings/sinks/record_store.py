"""Supabase-backed record store."""

import logging
from typing import Any, Callable

from postgrest.types import ReturnMethod
from supabase import Client

from brand_savings.errors import RecordStoreError

logger = logging.getLogger(__name__)


class SupabaseRecordStore:
    """
    Inserts submission records into a Supabase table.

    The client factory is resolved lazily so building the store never
    touches settings or the network.
    """

    def __init__(self, client_factory: Callable[[], Client] | None = None):
        if client_factory is None:
            from brand_savings.db.client import get_client
            client_factory = get_client
        self._client_factory = client_factory

    async def write(self, collection: str, record: dict[str, Any]) -> None:
        try:
            client = self._client_factory()
            # Anon role may insert but not read back, so ask for a minimal response
            client.table(collection).insert(
                [record], returning=ReturnMethod.minimal
            ).execute()
        except Exception as e:
            logger.error(f"Insert into {collection} failed: {e}")
            raise RecordStoreError(str(e)) from e

        logger.debug(f"Inserted submission into {collection}")
