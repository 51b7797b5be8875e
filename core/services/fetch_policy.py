"""
Storage-error contract for read handlers.

Each read declares what a storage failure means for it: either the read
is essential and the failure propagates as DataFetchError, or the read is
decorative and the handler degrades to a fallback value after logging.
The decision lives in the decorator call, next to the handler signature.
"""

import copy
import functools
import logging
from typing import Any, Callable

from pydantic import ValidationError

from core.exceptions import DataFetchError, StorageError

logger = logging.getLogger(__name__)

# Sentinel: no fallback, storage errors propagate
RAISE = object()


def data_fetch(message: str, fallback: Any = RAISE) -> Callable:
    """
    Decorate a read handler with its storage-error contract.

    Args:
        message: Human-readable failure message ("Failed to fetch revenue data.")
        fallback: Value returned (as a fresh copy) when storage fails.
            Omit to raise DataFetchError instead.

    Behaviour:
        - StorageError with a fallback: logged at error, fallback returned.
        - StorageError without a fallback: DataFetchError(message) raised.
        - DataFetchError and plain ValueError (bad arguments) propagate unchanged.
        - Rows that fail model validation, and anything else: logged with
          traceback, DataFetchError(message) raised.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except StorageError as e:
                if fallback is RAISE:
                    logger.error(f"{func.__name__}: {e}")
                    raise DataFetchError(message) from e
                logger.error(f"{func.__name__} degraded to fallback: {e}")
                return copy.copy(fallback)
            except DataFetchError:
                raise
            except ValidationError as e:
                logger.exception(f"{func.__name__} returned rows of an unexpected shape")
                raise DataFetchError(message) from e
            except ValueError:
                raise
            except Exception as e:
                logger.exception(f"{func.__name__} failed unexpectedly")
                raise DataFetchError(message) from e

        wrapper.fetch_message = message
        wrapper.soft_fails = fallback is not RAISE
        return wrapper

    return decorator
