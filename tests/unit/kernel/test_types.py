"""Unit tests for the Result type and attempt()."""

import pytest

from mp_masking.kernel.errors import MaskConfigurationError
from mp_masking.kernel.types import Err, Ok, attempt


class TestOk:
    def test_value(self) -> None:
        ok = Ok(3)
        assert ok.is_ok() and not ok.is_err()
        assert ok.unwrap() == 3
        assert ok.unwrap_or(0) == 3
        assert ok.map(lambda v: v * 2).unwrap() == 6


class TestErr:
    def test_error(self) -> None:
        err = Err(ValueError("x"))
        assert err.is_err() and not err.is_ok()
        assert err.unwrap_or(0) == 0
        assert err.map(lambda v: v * 2) is err
        with pytest.raises(ValueError):
            err.unwrap()


class TestAttempt:
    def test_success(self) -> None:
        assert attempt(int, "5").unwrap() == 5

    def test_failure_is_captured(self) -> None:
        result = attempt(int, "five")
        assert result.is_err()
        assert isinstance(result.error, ValueError)

    def test_keyword_arguments(self) -> None:
        assert attempt(int, "ff", base=16).unwrap() == 255

    def test_reraise(self) -> None:
        def broken() -> None:
            raise MaskConfigurationError("misconfigured")

        with pytest.raises(MaskConfigurationError):
            attempt(broken, reraise=(MaskConfigurationError,))
