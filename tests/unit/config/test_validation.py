"""Unit tests for settings validation errors."""

from __future__ import annotations

import pytest

from fx_export.config.settings import ExportSettings
from fx_export.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from fx_export.kernel.errors import ApplicationError


# ---------------------------------------------------------------------------
# ConfigError hierarchy
# ---------------------------------------------------------------------------


class TestConfigError:
    def test_is_application_error(self) -> None:
        assert isinstance(ConfigError("bad"), ApplicationError)

    def test_default_code(self) -> None:
        assert ConfigError("bad").code == "config_error"

    def test_custom_code_override(self) -> None:
        assert ConfigError("msg", code="custom_cfg").code == "custom_cfg"


class TestMissingRequiredSettingError:
    def test_setting_name_in_detail(self) -> None:
        err = MissingRequiredSettingError("FX_EXPORT_COMPANY_NAME")
        assert err.setting_name == "FX_EXPORT_COMPANY_NAME"
        assert err.to_dict()["detail"] == {"setting": "FX_EXPORT_COMPANY_NAME"}
        assert err.code == "missing_required_setting"

    def test_caught_as_config_error(self) -> None:
        with pytest.raises(ConfigError):
            raise MissingRequiredSettingError("X")


class TestInvalidSettingValueError:
    def test_detail(self) -> None:
        err = InvalidSettingValueError("csv_delimiter", ";;", "must be a single character")
        assert err.to_dict()["detail"] == {
            "setting": "csv_delimiter",
            "value": "';;'",
            "reason": "must be a single character",
        }
        assert "csv_delimiter" in err.message

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("csv_delimiter", "||"),
            ("csv_line_terminator", "cr"),
            ("json_indent", -1),
            ("log_level", "VERBOSE"),
        ],
    )
    def test_raised_by_export_settings(self, field: str, value: object) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            ExportSettings(**{field: value})
        assert exc_info.value.setting_name == field
