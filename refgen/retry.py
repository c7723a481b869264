"""
Retry utilities for fact store reads.

Provides a decorator for resilient Neo4j reads; the in-memory rdflib store
never needs it.
"""

import logging
from typing import Callable, TypeVar

from neo4j.exceptions import ServiceUnavailable, SessionExpired, TransientError
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Common transient exceptions
TRANSIENT_EXCEPTIONS = (
    ConnectionError,
    TimeoutError,
    OSError,
)

NEO4J_TRANSIENT = (ServiceUnavailable, SessionExpired, TransientError)


def retry_neo4j(func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator for retrying Neo4j reads with exponential backoff.

    Retries on:
    - Service unavailable / expired sessions
    - Transient errors
    - Connection errors

    Example:
        @retry_neo4j
        def fetch(session, query: str):
            return list(session.run(query))
    """
    return retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
        retry=retry_if_exception_type(TRANSIENT_EXCEPTIONS + NEO4J_TRANSIENT),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )(func)
