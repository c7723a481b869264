"""
Unit tests for refgen.retry module.
"""

import pytest
from neo4j.exceptions import ServiceUnavailable

from refgen.retry import retry_neo4j


class TestRetryDecorators:
    """Tests for retry decorators."""

    def test_retry_neo4j_decorator_exists(self):
        """Test that retry_neo4j decorator exists and is callable."""
        assert callable(retry_neo4j)

    def test_retry_neo4j_wraps_function(self):
        """Test that retry_neo4j properly wraps a function."""

        @retry_neo4j
        def success_func():
            return 42

        assert success_func() == 42

    def test_retry_neo4j_retries_on_service_unavailable(self):
        """Test that retry_neo4j retries a transient driver error."""
        call_count = 0

        @retry_neo4j
        def flaky_func():
            nonlocal call_count
            call_count += 1
            if call_count < 2:
                raise ServiceUnavailable("Database restarting")
            return "success"

        assert flaky_func() == "success"
        assert call_count == 2

    def test_retry_neo4j_gives_up_after_max_attempts(self):
        """Test that retry_neo4j gives up after max attempts."""
        call_count = 0

        @retry_neo4j
        def always_fails():
            nonlocal call_count
            call_count += 1
            raise ConnectionError("Always fails")

        with pytest.raises(ConnectionError):
            always_fails()

        assert call_count == 3

    def test_retry_neo4j_does_not_retry_other_errors(self):
        """Test that non-transient errors propagate immediately."""
        call_count = 0

        @retry_neo4j
        def bad_query():
            nonlocal call_count
            call_count += 1
            raise ValueError("Bad parameter")

        with pytest.raises(ValueError):
            bad_query()

        assert call_count == 1
