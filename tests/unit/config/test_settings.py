"""Unit tests for masking settings and their loaders."""

import dataclasses
from typing import ClassVar

import pytest

from mp_masking.config import (
    ConfigError,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    InvalidSettingValueError,
    MaskingSettings,
    MissingRequiredSettingError,
    Settings,
    load_masking_settings,
)
from mp_masking.kernel.errors import MaskConfigurationError


@dataclasses.dataclass(frozen=True)
class AuditSettings(Settings):
    _prefix: ClassVar[str] = "AUDIT"

    sink: str
    batch_size: int = 10


@dataclasses.dataclass(frozen=True)
class BoundedSettings(Settings):
    _prefix: ClassVar[str] = "BOUNDED"

    limit: int = 1

    def _validate(self) -> None:
        if self.limit < 1:
            raise ValueError("limit must be positive")


# ---------------------------------------------------------------------------
# MaskingSettings
# ---------------------------------------------------------------------------


class TestMaskingSettings:
    def test_defaults(self) -> None:
        settings = MaskingSettings()
        assert settings.fail_open is True
        assert settings.resolve_placeholders is True
        assert settings.log_fail_open is True

    def test_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            MaskingSettings().fail_open = False  # type: ignore[misc]


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_unset_variables_keep_defaults(self) -> None:
        assert EnvSettingsLoader({}).load(MaskingSettings) == MaskingSettings()

    @pytest.mark.parametrize("raw", ["false", "FALSE", "0", "no", "off"])
    def test_false_flags(self, raw: str) -> None:
        settings = EnvSettingsLoader({"MASKING_FAIL_OPEN": raw}).load(MaskingSettings)
        assert settings.fail_open is False

    @pytest.mark.parametrize("raw", ["true", "1", "yes", " On "])
    def test_true_flags(self, raw: str) -> None:
        settings = EnvSettingsLoader({"MASKING_LOG_FAIL_OPEN": raw}).load(MaskingSettings)
        assert settings.log_fail_open is True

    def test_invalid_flag(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader({"MASKING_FAIL_OPEN": "maybe"}).load(MaskingSettings)
        assert exc_info.value.setting_name == "MASKING_FAIL_OPEN"
        assert isinstance(exc_info.value, MaskConfigurationError)

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MASKING_RESOLVE_PLACEHOLDERS", "false")
        assert EnvSettingsLoader().load(MaskingSettings).resolve_placeholders is False

    def test_required_setting_missing(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader({}).load(AuditSettings)
        assert exc_info.value.setting_name == "AUDIT_SINK"

    def test_int_coercion(self) -> None:
        settings = EnvSettingsLoader({"AUDIT_SINK": "stdout", "AUDIT_BATCH_SIZE": "25"}).load(
            AuditSettings
        )
        assert settings.batch_size == 25

    def test_invalid_int(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader({"AUDIT_SINK": "stdout", "AUDIT_BATCH_SIZE": "many"}).load(
                AuditSettings
            )

    def test_validation_failure_wrapped(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            EnvSettingsLoader({"BOUNDED_LIMIT": "0"}).load(BoundedSettings)
        assert isinstance(exc_info.value.cause, ValueError)


# ---------------------------------------------------------------------------
# DotenvSettingsLoader / load_masking_settings
# ---------------------------------------------------------------------------


class TestDotenvSettingsLoader:
    def test_loads_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MASKING_LOG_FAIL_OPEN", "true")
        env_file = tmp_path / ".env"
        env_file.write_text("MASKING_LOG_FAIL_OPEN=false\n")
        settings = DotenvSettingsLoader(str(env_file), override=True).load(MaskingSettings)
        assert settings.log_fail_open is False


class TestLoadMaskingSettings:
    def test_with_explicit_loader(self) -> None:
        settings = load_masking_settings(EnvSettingsLoader({"MASKING_FAIL_OPEN": "off"}))
        assert settings == MaskingSettings(fail_open=False)
