"""Document store client over the pymongo asyncio driver."""

import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, runtime_checkable

from pymongo import AsyncMongoClient
from pymongo.errors import ConnectionFailure, PyMongoError
from pymongo.monitoring import CommandListener

from ..errors.exceptions import StoreConnectionError, QueryError


logger = logging.getLogger(__name__)

Document = Dict[str, Any]


@runtime_checkable
class DocumentStore(Protocol):
    """Minimal capability surface the pagers need from a document store."""

    async def query(
        self,
        collection_name: str,
        filter: Dict[str, Any],
        sort: Sequence[Tuple[str, int]],
        limit: int
    ) -> List[Document]:
        ...

    async def ping(self) -> None:
        ...

    async def close(self) -> None:
        ...


class MongoDocumentStore:
    """DocumentStore backed by an AsyncMongoClient.

    Driver errors are translated at this boundary: anything signalling that
    the server cannot be reached becomes StoreConnectionError, every other
    driver failure becomes QueryError.
    """

    def __init__(self, client: AsyncMongoClient, database_name: str):
        self._client = client
        self._database_name = database_name
        self._database = client[database_name]

    @property
    def database_name(self) -> str:
        return self._database_name

    @classmethod
    async def connect(
        cls,
        uri: str,
        database_name: str,
        *,
        app_name: Optional[str] = None,
        server_selection_timeout_ms: int = 5000,
        listeners: Optional[Sequence[CommandListener]] = None
    ) -> "MongoDocumentStore":
        """Create a client and verify the server is reachable.

        Args:
            uri: MongoDB connection string
            database_name: Database holding the paginated collections
            app_name: Application name reported to the server
            server_selection_timeout_ms: How long to wait for a usable server
            listeners: Optional command listeners notified of every command

        Returns:
            A connected store

        Raises:
            StoreConnectionError: If the URI is invalid or no server answers
        """
        options: Dict[str, Any] = {"serverSelectionTimeoutMS": server_selection_timeout_ms}
        if app_name:
            options["appname"] = app_name
        if listeners:
            options["event_listeners"] = list(listeners)

        try:
            client = AsyncMongoClient(uri, **options)
        except PyMongoError as e:
            logger.error(f"Invalid MongoDB configuration: {e}")
            raise StoreConnectionError(f"Invalid MongoDB configuration: {e}") from e

        store = cls(client, database_name)
        try:
            await store.ping()
        except StoreConnectionError:
            await client.close()
            raise
        except QueryError as e:
            await client.close()
            raise StoreConnectionError(f"MongoDB handshake failed: {e}") from e

        logger.info(f"Connected to MongoDB database '{database_name}'")
        return store

    async def query(
        self,
        collection_name: str,
        filter: Dict[str, Any],
        sort: Sequence[Tuple[str, int]],
        limit: int
    ) -> List[Document]:
        """Run a find with the given filter, sort and limit and return every document."""
        try:
            cursor = self._database[collection_name].find(filter, sort=list(sort), limit=limit)
            return await cursor.to_list()
        except ConnectionFailure as e:
            logger.error(f"Lost connection to MongoDB while querying '{collection_name}': {e}")
            raise StoreConnectionError(f"MongoDB unreachable: {e}") from e
        except PyMongoError as e:
            logger.error(f"Query on '{collection_name}' failed: {e}")
            raise QueryError(f"Query on '{collection_name}' failed: {e}", collection=collection_name) from e

    async def ping(self) -> None:
        """Round trip a ping command to the server."""
        try:
            await self._client.admin.command("ping")
        except ConnectionFailure as e:
            raise StoreConnectionError(f"MongoDB unreachable: {e}") from e
        except PyMongoError as e:
            raise QueryError(f"Ping failed: {e}") from e

    async def close(self) -> None:
        """Close the underlying client."""
        await self._client.close()
        logger.info("MongoDB client closed")
