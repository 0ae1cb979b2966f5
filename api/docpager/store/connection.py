"""Connection lifecycle for the application's document store."""

import logging
from typing import Optional

from ..config import Settings
from .client import DocumentStore, MongoDocumentStore
from .monitoring import CommandLogger


logger = logging.getLogger(__name__)


async def connect_store(settings: Settings) -> MongoDocumentStore:
    """Connect to MongoDB using the given settings, with command logging if enabled."""
    listeners = []
    if settings.monitor_commands:
        listeners.append(CommandLogger(ignored_commands=settings.ignored_commands))

    return await MongoDocumentStore.connect(
        settings.mongodb_uri,
        settings.mongodb_database,
        app_name=settings.app_name,
        server_selection_timeout_ms=settings.server_selection_timeout_ms,
        listeners=listeners
    )


class StoreManager:
    """Owns the single store connection shared by the application."""

    def __init__(self):
        self.store: Optional[DocumentStore] = None

    async def initialize(self, settings: Settings) -> None:
        """Open the store connection if it is not open yet."""
        if self.store is None:
            self.store = await connect_store(settings)

    async def close(self) -> None:
        """Close the store connection."""
        if self.store is not None:
            await self.store.close()
            self.store = None

    def get_store(self) -> DocumentStore:
        """Return the open store.

        Raises:
            RuntimeError: If initialize() has not been awaited
        """
        if self.store is None:
            raise RuntimeError("Document store is not initialized")
        return self.store


# Application-wide store manager, opened and closed by the app lifespan
store_manager = StoreManager()


def get_store() -> DocumentStore:
    """FastAPI dependency returning the shared document store."""
    return store_manager.get_store()
