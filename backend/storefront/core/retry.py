"""
Retry with exponential backoff for storage calls.

Connection-level failures are retried a bounded number of times; integrity
violations (duplicate key, foreign key, check constraint) are never retried.
"""
import time
import random
import logging
import functools
from typing import Callable, TypeVar, List, Type

from sqlalchemy import exc as sa_exc
from sqlalchemy.orm import Session

from storefront.config import settings
from storefront.core.exceptions import TransientStorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRY_MAX_DELAY = 2.0
RETRY_BACKOFF_FACTOR = 2.0

# Exceptions that should be retried
RETRYABLE_EXCEPTIONS: List[Type[Exception]] = [
    sa_exc.OperationalError,
    sa_exc.DisconnectionError,
    sa_exc.TimeoutError,
]

# Exceptions that must surface immediately
NON_RETRYABLE_EXCEPTIONS: List[Type[Exception]] = [
    sa_exc.IntegrityError,
]


def calculate_delay(attempt: int, initial_delay: float, backoff_factor: float,
                    max_delay: float, jitter: bool) -> float:
    """
    Delay before the next attempt (attempt is 0-indexed).

    With jitter the delay varies by +/-20%.
    """
    delay = initial_delay * (backoff_factor ** attempt)
    delay = min(delay, max_delay)

    if jitter:
        jitter_amount = delay * 0.2
        delay = max(0.0, delay + random.uniform(-jitter_amount, jitter_amount))

    return delay


def is_retryable_exception(exception: Exception) -> bool:
    """Check whether a storage exception is transient."""
    for non_retryable_type in NON_RETRYABLE_EXCEPTIONS:
        if isinstance(exception, non_retryable_type):
            return False

    for retryable_type in RETRYABLE_EXCEPTIONS:
        if isinstance(exception, retryable_type):
            return True

    # A DBAPI error flagged as having invalidated its connection
    if isinstance(exception, sa_exc.DBAPIError) and exception.connection_invalidated:
        return True

    return False


def _find_session(args, kwargs):
    db = kwargs.get("db")
    if isinstance(db, Session):
        return db
    for arg in args:
        if isinstance(arg, Session):
            return arg
    return None


def retry_with_backoff(
    max_retries: int = settings.STORAGE_RETRY_ATTEMPTS,
    initial_delay: float = settings.STORAGE_RETRY_DELAY,
    backoff_factor: float = RETRY_BACKOFF_FACTOR,
    max_delay: float = RETRY_MAX_DELAY,
    jitter: bool = True,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator retrying a storage operation on transient errors.

    The wrapped callable receives a SQLAlchemy session (positional or as
    ``db=``); it is rolled back before every new attempt. When all attempts
    fail, TransientStorageError is raised.

    Example:
        @retry_with_backoff(max_retries=3, initial_delay=0.1)
        def list_lines(self, db, user_id):
            ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            last_exception = None

            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    if not is_retryable_exception(e):
                        raise
                    last_exception = e

                    db = _find_session(args, kwargs)
                    if db is not None:
                        db.rollback()

                    if attempt == max_retries - 1:
                        break

                    delay = calculate_delay(
                        attempt, initial_delay, backoff_factor, max_delay, jitter
                    )
                    logger.warning(
                        f"Retry {attempt + 1}/{max_retries - 1} for {func.__name__} "
                        f"after storage error: {e.__class__.__name__}. "
                        f"Waiting {delay:.2f}s..."
                    )
                    time.sleep(delay)

            logger.error(
                f"{func.__name__} failed after {max_retries} attempts: {last_exception}"
            )
            raise TransientStorageError() from last_exception

        return wrapper
    return decorator
