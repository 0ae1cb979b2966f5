"""Document store access for docpager."""

from .client import Document, DocumentStore, MongoDocumentStore
from .connection import StoreManager, store_manager, connect_store, get_store
from .monitoring import CommandLogger, DEFAULT_IGNORED_COMMANDS

__all__ = [
    "Document",
    "DocumentStore",
    "MongoDocumentStore",
    "StoreManager",
    "store_manager",
    "connect_store",
    "get_store",
    "CommandLogger",
    "DEFAULT_IGNORED_COMMANDS"
]
