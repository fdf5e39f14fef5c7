"""Unit tests for masking-aware logging."""

from __future__ import annotations

import dataclasses
import json
import logging

import pytest
import structlog

from mp_masking.application.masking import (
    AlwaysMaskCondition,
    ConverterRegistry,
    DescriptorRegistry,
    MaskingLogFilter,
    MaskProcessor,
    masked,
)
from mp_masking.observability.logging import JsonLoggerFactory, MaskingProcessor, get_logger


@dataclasses.dataclass
class Account:
    owner: str = masked(AlwaysMaskCondition, mask_value="hidden")
    iban: str = masked(AlwaysMaskCondition)


@pytest.fixture
def processor() -> MaskProcessor:
    return MaskProcessor(descriptors=DescriptorRegistry(), converters=ConverterRegistry())


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


# ---------------------------------------------------------------------------
# get_logger
# ---------------------------------------------------------------------------


class TestGetLogger:
    def test_returns_bindable_logger(self) -> None:
        logger = get_logger("mp_masking.tests")
        assert hasattr(logger, "info")
        assert hasattr(logger, "bind")

    def test_initial_values_are_bound(self) -> None:
        with structlog.testing.capture_logs() as logs:
            get_logger("mp_masking.tests", component="engine").info("masking.ready")
        assert logs == [{"component": "engine", "event": "masking.ready", "log_level": "info"}]


# ---------------------------------------------------------------------------
# MaskingProcessor (structlog)
# ---------------------------------------------------------------------------


class TestMaskingProcessor:
    def test_masks_maskable_values(self, processor: MaskProcessor) -> None:
        event = {"event": "account.loaded", "account": Account("Ann", "PT50"), "count": 1}
        result = MaskingProcessor(processor)(None, "info", event)
        assert result["account"] == Account("hidden", "****")
        assert result["count"] == 1
        assert result["event"] == "account.loaded"

    def test_masks_inside_containers(self, processor: MaskProcessor) -> None:
        event = {"event": "accounts.listed", "accounts": [Account("Ann", "PT50")]}
        result = MaskingProcessor(processor)(None, "info", event)
        assert result["accounts"][0].iban == "****"

    def test_creates_processor_lazily(self) -> None:
        masking = MaskingProcessor()
        assert isinstance(masking.processor, MaskProcessor)
        assert masking.processor is masking.processor


class TestJsonLoggerFactory:
    def test_rendered_json_is_masked(self, capsys, restore_logging, processor) -> None:
        JsonLoggerFactory.configure(logging.INFO, masking=MaskingProcessor(processor))
        structlog.get_logger("mp_masking.tests").info("account.loaded", account=Account("Ann", "PT50"))
        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "account.loaded"
        assert "hidden" in payload["account"]
        assert "Ann" not in payload["account"]
        assert "PT50" not in payload["account"]


# ---------------------------------------------------------------------------
# MaskingLogFilter (stdlib logging)
# ---------------------------------------------------------------------------


class TestMaskingLogFilter:
    def test_masks_args_tuple(self, processor: MaskProcessor) -> None:
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="loaded %s", args=(Account("Ann", "PT50"), 3), exc_info=None,
        )
        MaskingLogFilter(processor).filter(record)
        assert record.args == (Account("hidden", "****"), 3)
        assert "Ann" not in record.getMessage()

    def test_masks_msg(self, processor: MaskProcessor) -> None:
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg=Account("Ann", "PT50"), args=(), exc_info=None,
        )
        MaskingLogFilter(processor).filter(record)
        assert record.msg == Account("hidden", "****")

    def test_masks_mapping_args(self, processor: MaskProcessor) -> None:
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="%(account)s", args=({"account": Account("Ann", "PT50")},), exc_info=None,
        )
        MaskingLogFilter(processor).filter(record)
        assert record.args["account"].owner == "hidden"

    def test_plain_records_untouched(self, processor: MaskProcessor) -> None:
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="plain %s", args=("text",), exc_info=None,
        )
        assert MaskingLogFilter(processor).filter(record) is True
        assert record.getMessage() == "plain text"
