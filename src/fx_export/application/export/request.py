"""Application export – ExportConfig, FieldDescriptor and friends.

An :class:`ExportConfig` is the full set of user choices driving one export.
It is frozen: list inputs are normalised to tuples, and
:meth:`ExportConfig.with_changes` returns a new instance.
"""
from __future__ import annotations

import dataclasses
import enum
from collections.abc import Iterable, Iterator, Mapping
from datetime import date, datetime, timedelta
from types import MappingProxyType
from typing import Any

from fx_export.kernel.errors import ConfigInvalidError, UnsupportedFormatError

__all__ = [
    "DATE_PRESETS",
    "DateRange",
    "ExportArtifact",
    "ExportConfig",
    "ExportFilters",
    "ExportFormat",
    "FieldCatalog",
    "FieldDescriptor",
    "FieldType",
]


class ExportFormat(str, enum.Enum):
    """Artifact kinds the engine can emit."""

    TEXT = "text"
    STRUCTURED = "structured"
    WORKBOOK = "workbook"
    VECTOR = "vector"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]

    @classmethod
    def parse(cls, value: "ExportFormat | str") -> "ExportFormat":
        """Resolve an enum value or one of the legacy names (csv, json, excel, pdf)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        try:
            return cls(_ALIASES.get(key, key))
        except ValueError:
            raise UnsupportedFormatError(value, supported=tuple(f.value for f in cls)) from None


_EXTENSIONS = {
    ExportFormat.TEXT: ".csv",
    ExportFormat.STRUCTURED: ".json",
    ExportFormat.WORKBOOK: ".xlsx",
    ExportFormat.VECTOR: ".pdf",
}

_MIME_TYPES = {
    ExportFormat.TEXT: "text/csv",
    ExportFormat.STRUCTURED: "application/json",
    ExportFormat.WORKBOOK: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.VECTOR: "application/pdf",
}

_ALIASES = {"csv": "text", "json": "structured", "excel": "workbook", "xlsx": "workbook", "pdf": "vector"}


class FieldType(str, enum.Enum):
    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    """Defines one exportable field, as supplied by a field catalog."""

    key: str            # record key to read from each row
    label: str          # column header / document key
    type: FieldType = FieldType.STRING
    format: str = ""    # hint: currency, percentage, integer, decimal, datetime, status
    summary_only: bool = False  # aggregate shown in report summaries, not per row

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", FieldType(self.type))


class FieldCatalog(Mapping[str, FieldDescriptor]):
    """Immutable key → :class:`FieldDescriptor` lookup.

    Keys missing from the catalog resolve to a string field labelled with the
    key itself, so a projection never fails on an unknown field.
    """

    def __init__(self, descriptors: Iterable[FieldDescriptor]) -> None:
        self._by_key = MappingProxyType({d.key: d for d in descriptors})

    def __getitem__(self, key: str) -> FieldDescriptor:
        return self._by_key[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_key)

    def __len__(self) -> int:
        return len(self._by_key)

    def resolve(self, key: str) -> FieldDescriptor:
        return self._by_key.get(key) or FieldDescriptor(key=key, label=key)

    def label(self, key: str) -> str:
        return self.resolve(key).label


# ---------------------------------------------------------------------------
# Date range
# ---------------------------------------------------------------------------

DATE_PRESETS: tuple[str, ...] = (
    "today",
    "yesterday",
    "last7days",
    "last30days",
    "last90days",
    "thismonth",
    "lastmonth",
    "thisyear",
    "custom",
)


def _as_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclasses.dataclass(frozen=True)
class DateRange:
    start: date | None = None
    end: date | None = None
    preset: str | None = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "start", _as_date(self.start))
            object.__setattr__(self, "end", _as_date(self.end))
        except ValueError as exc:
            raise ConfigInvalidError(
                f"Invalid date in range: {exc}",
                errors=[{"field": "date_range", "message": str(exc)}],
            ) from exc

    @classmethod
    def from_preset(cls, preset: str, today: date) -> "DateRange":
        """Compute the concrete range a preset denotes relative to *today*."""
        if preset == "today":
            start = end = today
        elif preset == "yesterday":
            start = end = today - timedelta(days=1)
        elif preset in ("last7days", "last30days", "last90days"):
            start, end = today - timedelta(days=int(preset[4:-4])), today
        elif preset == "thismonth":
            start, end = today.replace(day=1), today
        elif preset == "lastmonth":
            end = today.replace(day=1) - timedelta(days=1)
            start = end.replace(day=1)
        elif preset == "thisyear":
            start, end = today.replace(month=1, day=1), today
        else:
            raise ConfigInvalidError(
                f"Unknown date preset: {preset!r}",
                errors=[{"field": "date_range.preset", "message": f"expected one of {DATE_PRESETS}"}],
            )
        return cls(start=start, end=end, preset=preset)

    @property
    def is_set(self) -> bool:
        return self.start is not None or self.end is not None

    def describe(self) -> str:
        start = self.start.isoformat() if self.start else "N/A"
        end = self.end.isoformat() if self.end else "N/A"
        return f"{start} - {end}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
            "preset": self.preset,
        }


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class ExportFilters:
    """Filters the caller already applied; echoed into metadata, never re-applied."""

    collaborator: str | None = None
    client: str | None = None
    status: str | None = None
    min_amount: float | None = None
    max_amount: float | None = None

    def applied(self) -> dict[str, Any]:
        return {k: v for k, v in dataclasses.asdict(self).items() if v is not None and v != ""}


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class ExportConfig:
    """Describes one export to be performed."""

    format: ExportFormat
    fields: tuple[str, ...]
    date_range: DateRange = dataclasses.field(default_factory=DateRange)
    filters: ExportFilters = dataclasses.field(default_factory=ExportFilters)
    include_headers: bool = True
    include_metadata: bool = True
    custom_filename: str | None = None
    data_type: str = "transactions"

    def __post_init__(self) -> None:
        object.__setattr__(self, "format", ExportFormat.parse(self.format))
        object.__setattr__(self, "fields", tuple(self.fields))

    def validate(self, catalog: FieldCatalog | None = None) -> None:
        """Raise :class:`ConfigInvalidError` unless the config can be encoded.

        With a *catalog*, distinct fields that resolve to the same column
        label are rejected as well.
        """
        errors: list[dict[str, Any]] = []
        if not self.fields:
            errors.append({"field": "fields", "message": "at least one field is required"})
        duplicates = sorted({f for f in self.fields if self.fields.count(f) > 1})
        if duplicates:
            errors.append({"field": "fields", "message": f"duplicate fields: {', '.join(duplicates)}"})
        elif catalog is not None:
            labels = [catalog.label(f) for f in self.fields]
            clashes = sorted({label for label in labels if labels.count(label) > 1})
            if clashes:
                errors.append({"field": "fields", "message": f"duplicate labels: {', '.join(clashes)}"})
        start, end = self.date_range.start, self.date_range.end
        if start is not None and end is not None and start > end:
            errors.append(
                {"field": "date_range", "message": f"start {start.isoformat()} is after end {end.isoformat()}"}
            )
        if errors:
            raise ConfigInvalidError("Export configuration is invalid", errors=errors)

    def with_changes(self, **changes: Any) -> "ExportConfig":
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "data_type": self.data_type,
            "format": self.format.value,
            "date_range": self.date_range.to_dict(),
            "filters": self.filters.applied(),
            "fields": list(self.fields),
            "include_headers": self.include_headers,
            "include_metadata": self.include_metadata,
            "custom_filename": self.custom_filename,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ExportConfig":
        return cls(
            format=payload["format"],
            fields=tuple(payload.get("fields") or ()),
            date_range=DateRange(**(payload.get("date_range") or {})),
            filters=ExportFilters(**(payload.get("filters") or {})),
            include_headers=bool(payload.get("include_headers", True)),
            include_metadata=bool(payload.get("include_metadata", True)),
            custom_filename=payload.get("custom_filename"),
            data_type=payload.get("data_type", "transactions"),
        )


@dataclasses.dataclass(frozen=True)
class ExportArtifact:
    """What an export hands to the download/persist collaborator."""

    content: bytes
    filename: str
    mime_type: str
    record_count: int
