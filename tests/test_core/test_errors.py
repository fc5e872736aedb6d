"""Tests for the error taxonomy and timeouts."""

import asyncio

import pytest

from ledgerlens.errors import (
    DependencyTimeoutError,
    DependencyUnavailableError,
    LedgerLensError,
    NotFoundError,
    UnsupportedInputError,
    ValidationFailureError,
    with_timeout,
)


class TestErrorKinds:
    def test_status_codes(self):
        assert NotFoundError.status_code == 404
        assert UnsupportedInputError.status_code == 422
        assert DependencyUnavailableError.status_code == 502
        assert DependencyTimeoutError.status_code == 504
        assert ValidationFailureError.status_code == 400

    def test_timeout_is_a_dependency_failure(self):
        error = DependencyTimeoutError("slow")

        assert isinstance(error, DependencyUnavailableError)
        assert isinstance(error, LedgerLensError)
        assert error.kind == "dependency_timeout"
        assert error.message == "slow"


class TestWithTimeout:
    def test_returns_result(self):
        async def fast():
            return 42

        assert asyncio.run(with_timeout(fast(), 1.0, "fast call")) == 42

    def test_raises_timeout(self):
        with pytest.raises(DependencyTimeoutError) as exc_info:
            asyncio.run(with_timeout(asyncio.sleep(1), 0.01, "slow call"))

        assert "slow call" in exc_info.value.message

    def test_other_errors_propagate(self):
        async def broken():
            raise NotFoundError("gone")

        with pytest.raises(NotFoundError):
            asyncio.run(with_timeout(broken(), 1.0, "broken call"))
