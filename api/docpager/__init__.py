"""docpager: cursor-based pagination over MongoDB collections."""

__version__ = "1.0.0"
