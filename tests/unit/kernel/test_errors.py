"""Unit tests for kernel error hierarchy."""

from __future__ import annotations

import json

import pytest

from fx_export.kernel.errors import (
    ApplicationError,
    BaseError,
    ChartDataError,
    ConfigInvalidError,
    DomainError,
    EncodeFailedError,
    InfrastructureError,
    InvariantViolationError,
    NotFoundError,
    SerializationError,
    UnsupportedFormatError,
    ValidationError,
)


class TestBaseError:
    def test_message_is_stored(self) -> None:
        err = BaseError("something went wrong")
        assert err.message == "something went wrong"

    def test_default_code(self) -> None:
        assert BaseError("m").code == "base_error"

    def test_custom_code(self) -> None:
        assert BaseError("m", code="custom").code == "custom"

    def test_to_dict_basic(self) -> None:
        err = BaseError("m", code="my_code", detail={"key": "val"})
        assert err.to_dict() == {"code": "my_code", "message": "m", "detail": {"key": "val"}}

    def test_cause_sets_dunder_cause(self) -> None:
        cause = RuntimeError("root")
        err = BaseError("wrap", cause=cause)
        assert err.__cause__ is cause
        assert "root" in err.to_dict()["cause"]

    def test_str_is_valid_json(self) -> None:
        parsed = json.loads(str(BaseError("oops", code="oops", detail={"x": 1})))
        assert parsed["detail"] == {"x": 1}


class TestHierarchy:
    @pytest.mark.parametrize(
        ("cls", "parent"),
        [
            (ConfigInvalidError, ValidationError),
            (ValidationError, DomainError),
            (ChartDataError, DomainError),
            (InvariantViolationError, DomainError),
            (NotFoundError, DomainError),
            (UnsupportedFormatError, ApplicationError),
            (EncodeFailedError, InfrastructureError),
            (SerializationError, InfrastructureError),
        ],
    )
    def test_subclassing(self, cls: type, parent: type) -> None:
        assert issubclass(cls, parent)
        assert issubclass(cls, BaseError)


class TestConfigInvalidError:
    def test_carries_field_errors(self) -> None:
        err = ConfigInvalidError("bad", errors=[{"field": "fields", "message": "empty"}])
        payload = err.to_dict()
        assert payload["code"] == "config_invalid"
        assert payload["errors"] == [{"field": "fields", "message": "empty"}]


class TestUnsupportedFormatError:
    def test_message_lists_supported(self) -> None:
        err = UnsupportedFormatError("docx", supported=("text", "vector"))
        assert err.code == "unsupported_format"
        assert "'docx'" in err.message
        assert "text, vector" in err.message


class TestEncodeFailedError:
    def test_generic_message_and_format_detail(self) -> None:
        cause = ValueError("openpyxl exploded")
        err = EncodeFailedError("workbook", cause=cause)
        assert err.message == "The export file could not be generated"
        assert err.detail == {"format": "workbook"}
        assert err.__cause__ is cause


class TestChartDataError:
    def test_keeps_series(self) -> None:
        err = ChartDataError("negative", series=[("Jan", -1)])
        assert err.series == [("Jan", -1)]
        assert err.code == "chart_data_invalid"


class TestNotFoundError:
    def test_message_with_identifier(self) -> None:
        err = NotFoundError("Saved export configuration", "abc")
        assert err.message == "Saved export configuration 'abc' not found"
        assert err.identifier == "abc"


class TestLogContext:
    def test_flattens_detail_and_cause(self) -> None:
        err = EncodeFailedError("vector", cause=KeyError("usd_total"))
        assert err.log_context() == {
            "error_code": "encode_failed",
            "format": "vector",
            "cause": "KeyError('usd_total')",
        }

    def test_without_cause(self) -> None:
        assert BaseError("m", detail={"id": 3}).log_context() == {"error_code": "base_error", "id": 3}
