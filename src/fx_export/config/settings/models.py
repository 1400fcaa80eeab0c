"""Config settings – Settings base class and the export engine settings."""
from __future__ import annotations

import dataclasses

from fx_export.config.validation import InvalidSettingValueError

_LINE_TERMINATORS = {"lf": "\n", "crlf": "\r\n", "\n": "\n", "\r\n": "\r\n"}


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class ExportSettings(Settings):
    """Tunables shared by every encoder.

    Environment variables use the ``FX_EXPORT_`` prefix, e.g.
    ``FX_EXPORT_CSV_DELIMITER=;`` or ``FX_EXPORT_CSV_LINE_TERMINATOR=crlf``.
    """

    _prefix = "FX_EXPORT"

    csv_delimiter: str = ","
    csv_line_terminator: str = "lf"
    csv_bom: bool = False
    json_indent: int = 2
    date_format: str = "%d/%m/%Y"
    currency_symbol: str = "$"
    report_title: str = ""  # empty: "<Data type> Report"
    company_name: str = "Currency Exchange"
    log_level: str = "INFO"

    def _validate(self) -> None:
        if len(self.csv_delimiter) != 1:
            raise InvalidSettingValueError(
                "csv_delimiter", self.csv_delimiter, "must be a single character"
            )
        terminator = _LINE_TERMINATORS.get(self.csv_line_terminator.lower())
        if terminator is None:
            raise InvalidSettingValueError(
                "csv_line_terminator", self.csv_line_terminator, "expected 'lf' or 'crlf'"
            )
        self.csv_line_terminator = terminator
        if self.json_indent < 0:
            raise InvalidSettingValueError("json_indent", self.json_indent, "must be >= 0")
        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown level")


__all__ = ["ExportSettings", "Settings"]
