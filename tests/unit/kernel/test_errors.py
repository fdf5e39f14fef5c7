"""Unit tests for the kernel error hierarchy."""

import json

import pytest

from mp_masking.config import ConfigError
from mp_masking.kernel.errors import (
    ConditionCreationError,
    ConverterCreationError,
    InvalidDirectiveError,
    MaskConfigurationError,
    MaskingError,
    MaskProcessingError,
    ScopeError,
)


class TestMaskingError:
    def test_default_code(self) -> None:
        err = MaskingError("something broke")
        assert err.code == "masking_error"
        assert err.message == "something broke"
        assert err.detail == {}

    def test_custom_code_and_detail(self) -> None:
        err = MaskingError("bad", code="custom", detail={"field": "email"})
        assert err.to_dict() == {"code": "custom", "message": "bad", "detail": {"field": "email"}}

    def test_cause_is_chained(self) -> None:
        cause = KeyError("k")
        err = MaskingError("wrapped", cause=cause)
        assert err.__cause__ is cause
        assert err.to_dict()["cause"] == repr(cause)

    def test_str_is_json(self) -> None:
        payload = json.loads(str(MaskingError("bad")))
        assert payload["code"] == "masking_error"


class TestHierarchy:
    @pytest.mark.parametrize(
        "error_cls",
        [ConditionCreationError, ConverterCreationError, InvalidDirectiveError, ScopeError, ConfigError],
    )
    def test_configuration_errors(self, error_cls: type) -> None:
        assert issubclass(error_cls, MaskConfigurationError)
        assert issubclass(error_cls, MaskingError)

    def test_processing_error_is_not_a_configuration_error(self) -> None:
        assert not issubclass(MaskProcessingError, MaskConfigurationError)


class TestSpecificErrors:
    def test_condition_creation(self) -> None:
        err = ConditionCreationError(int)
        assert err.message == "Failed to create condition: int"
        assert err.condition_cls is int

    def test_converter_creation(self) -> None:
        err = ConverterCreationError(str)
        assert err.code == "converter_creation_failed"
        assert err.converter_cls is str

    def test_scope_error_default_message(self) -> None:
        err = ScopeError("request")
        assert err.message == "No active request scope"
        assert err.scope == "request"

    def test_processing_error(self) -> None:
        err = MaskProcessingError(dict)
        assert err.message == "Failed to mask value of type dict"
        assert err.value_type is dict
