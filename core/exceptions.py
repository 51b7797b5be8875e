"""Typed exceptions for storage, mutation and read failures."""


class DashboardError(Exception):
    """Base class for invoice dashboard errors."""


class StorageError(DashboardError):
    """
    The database rejected or failed a statement.

    Raised by PostgresClient with the driver error chained as __cause__.
    """


class WriteError(DashboardError):
    """
    An insert, update or delete failed at the storage layer.

    Nothing was committed; the statement is atomic.
    """


class DataFetchError(DashboardError):
    """A read could not be completed. The message names the read."""


class ConfigError(ValueError):
    """Required configuration is missing or invalid. Fatal at startup."""
