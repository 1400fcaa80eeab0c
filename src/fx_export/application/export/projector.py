"""Application export – FieldProjector.

Maps a record and a field selection to an ordered list of ``(label, value)``
pairs.  Value formatting is looked up in a registry keyed by
``(kind, Presentation)``; the lookup happens once per export, when the
projector is built, and the resulting plan is applied to every row.

The projector is total: a missing or unparsable value becomes the zero
value of its kind instead of raising.
"""
from __future__ import annotations

import dataclasses
import enum
import math
from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from fx_export.application.export.request import FieldCatalog, FieldDescriptor, FieldType


class Presentation(str, enum.Enum):
    PLAIN = "plain"            # delimited text
    STRUCTURED = "structured"  # JSON and workbook cells
    DISPLAY = "display"        # vector document


@dataclasses.dataclass(frozen=True)
class FormatOptions:
    currency_symbol: str = "$"
    date_format: str = "%d/%m/%Y"


Formatter = Callable[[Any, FormatOptions], Any]

_NUMERIC_HINTS = frozenset({"currency", "percentage", "integer", "decimal"})
DATETIME_HINT = "datetime"


def formatter_kind(descriptor: FieldDescriptor) -> str:
    """Return the registry kind for *descriptor* (e.g. ``"currency"``, ``"date"``)."""
    if descriptor.type is FieldType.NUMBER:
        return descriptor.format if descriptor.format in _NUMERIC_HINTS else "number"
    if descriptor.type is FieldType.DATE:
        return "datetime" if descriptor.format == DATETIME_HINT else "date"
    if descriptor.type is FieldType.BOOLEAN:
        return "boolean"
    return "string"


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def to_number(value: Any) -> int | float:
    """Coerce *value* to a finite number; anything else becomes ``0``."""
    if value is None or isinstance(value, bool):
        return int(value or 0)
    if isinstance(value, int):
        return value
    if isinstance(value, (float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip().replace(",", ""))
        except ValueError:
            return 0
    else:
        return 0
    return number if math.isfinite(number) else 0


def to_date(value: Any) -> date | None:
    """Coerce *value* to a :class:`date`; ``None`` when it cannot be parsed."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def to_datetime(value: Any) -> datetime | None:
    """Like :func:`to_date` but keeps the time of day (midnight for bare dates)."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "y")
    return bool(value)


def _grouped(number: float, decimals: int) -> str:
    return f"{number:,.{decimals}f}"


def display_currency(value: Any, opts: FormatOptions) -> str:
    """Currency for display, e.g. ``-$1,234.50``."""
    number = to_number(value)
    sign = "-" if number < 0 else ""
    return f"{sign}{opts.currency_symbol}{_grouped(abs(number), 2)}"


def _number_plain(value: Any, _: FormatOptions) -> str:
    number = to_number(value)
    if isinstance(number, float) and number.is_integer():
        number = int(number)
    return str(number)


def _number_display(value: Any, _: FormatOptions) -> str:
    number = to_number(value)
    return f"{number:,}" if isinstance(number, int) else _grouped(number, 2)


def _date_value(value: Any, opts: FormatOptions, presentation: Presentation) -> str:
    parsed = to_date(value)
    if parsed is None:
        return ""
    if presentation is Presentation.DISPLAY:
        return parsed.strftime(opts.date_format)
    return parsed.isoformat()


def _datetime_value(value: Any, opts: FormatOptions, presentation: Presentation) -> str:
    parsed = to_datetime(value)
    if parsed is None:
        return ""
    if presentation is Presentation.DISPLAY:
        return parsed.strftime(f"{opts.date_format} %H:%M")
    return parsed.isoformat(timespec="seconds")


def _text(value: Any, _: FormatOptions) -> str:
    return "" if value is None else str(value)


_REGISTRY: dict[tuple[str, Presentation], Formatter] = {
    ("currency", Presentation.PLAIN): lambda v, o: f"{to_number(v):.2f}",
    ("currency", Presentation.STRUCTURED): lambda v, o: round(float(to_number(v)), 2),
    ("currency", Presentation.DISPLAY): display_currency,
    ("percentage", Presentation.PLAIN): lambda v, o: f"{to_number(v):.2f}",
    ("percentage", Presentation.STRUCTURED): lambda v, o: float(to_number(v)),
    ("percentage", Presentation.DISPLAY): lambda v, o: f"{to_number(v):.2f}%",
    ("integer", Presentation.PLAIN): lambda v, o: str(int(round(to_number(v)))),
    ("integer", Presentation.STRUCTURED): lambda v, o: int(round(to_number(v))),
    ("integer", Presentation.DISPLAY): lambda v, o: f"{int(round(to_number(v))):,}",
    ("decimal", Presentation.PLAIN): lambda v, o: f"{to_number(v):.2f}",
    ("decimal", Presentation.STRUCTURED): lambda v, o: round(float(to_number(v)), 2),
    ("decimal", Presentation.DISPLAY): lambda v, o: _grouped(to_number(v), 2),
    ("number", Presentation.PLAIN): _number_plain,
    ("number", Presentation.STRUCTURED): lambda v, o: to_number(v),
    ("number", Presentation.DISPLAY): _number_display,
    ("date", Presentation.PLAIN): lambda v, o: _date_value(v, o, Presentation.PLAIN),
    ("date", Presentation.STRUCTURED): lambda v, o: _date_value(v, o, Presentation.STRUCTURED),
    ("date", Presentation.DISPLAY): lambda v, o: _date_value(v, o, Presentation.DISPLAY),
    ("datetime", Presentation.PLAIN): lambda v, o: _datetime_value(v, o, Presentation.PLAIN),
    ("datetime", Presentation.STRUCTURED): lambda v, o: _datetime_value(v, o, Presentation.STRUCTURED),
    ("datetime", Presentation.DISPLAY): lambda v, o: _datetime_value(v, o, Presentation.DISPLAY),
    ("boolean", Presentation.PLAIN): lambda v, o: "true" if to_bool(v) else "false",
    ("boolean", Presentation.STRUCTURED): lambda v, o: to_bool(v),
    ("boolean", Presentation.DISPLAY): lambda v, o: "Yes" if to_bool(v) else "No",
    ("string", Presentation.PLAIN): _text,
    ("string", Presentation.STRUCTURED): _text,
    ("string", Presentation.DISPLAY): _text,
}

_ZERO: dict[str, dict[Presentation, Any]] = {
    "currency": {Presentation.PLAIN: "0.00", Presentation.STRUCTURED: 0.0},
    "percentage": {Presentation.PLAIN: "0.00", Presentation.STRUCTURED: 0.0},
    "integer": {Presentation.PLAIN: "0", Presentation.STRUCTURED: 0},
    "decimal": {Presentation.PLAIN: "0.00", Presentation.STRUCTURED: 0.0},
    "number": {Presentation.PLAIN: "0", Presentation.STRUCTURED: 0},
    "boolean": {Presentation.PLAIN: "false", Presentation.STRUCTURED: False},
}


def zero_value(kind: str, presentation: Presentation) -> Any:
    """The value a field of *kind* takes when its input cannot be formatted."""
    return _ZERO.get(kind, {}).get(presentation, "")


@dataclasses.dataclass(frozen=True)
class PlannedField:
    descriptor: FieldDescriptor
    kind: str
    formatter: Formatter

    @property
    def key(self) -> str:
        return self.descriptor.key

    @property
    def label(self) -> str:
        return self.descriptor.label


class FieldProjector:
    """Project records onto a fixed, ordered field selection.

    Parameters
    ----------
    fields:
        Field keys in output order.
    catalog:
        Descriptor lookup; unknown keys project as plain strings.
    presentation:
        Which encoder family the values are for.
    skip_summary_only:
        Drop descriptors flagged ``summary_only`` from the plan.
    """

    def __init__(
        self,
        fields: Sequence[str],
        catalog: FieldCatalog,
        presentation: Presentation,
        options: FormatOptions | None = None,
        *,
        skip_summary_only: bool = False,
    ) -> None:
        self._presentation = presentation
        self._options = options or FormatOptions()
        plan = []
        for key in fields:
            descriptor = catalog.resolve(key)
            if skip_summary_only and descriptor.summary_only:
                continue
            kind = formatter_kind(descriptor)
            plan.append(PlannedField(descriptor, kind, _REGISTRY[(kind, presentation)]))
        self._plan: tuple[PlannedField, ...] = tuple(plan)

    @property
    def plan(self) -> tuple[PlannedField, ...]:
        return self._plan

    @property
    def labels(self) -> list[str]:
        return [p.label for p in self._plan]

    def value(self, planned: PlannedField, record: Mapping[str, Any]) -> Any:
        try:
            raw = record.get(planned.key)
            return planned.formatter(raw, self._options)
        except (AttributeError, TypeError, ValueError, OverflowError):
            return zero_value(planned.kind, self._presentation)

    def project(self, record: Mapping[str, Any]) -> list[tuple[str, Any]]:
        return [(p.label, self.value(p, record)) for p in self._plan]

    def values(self, record: Mapping[str, Any]) -> list[Any]:
        return [self.value(p, record) for p in self._plan]


def project(
    record: Mapping[str, Any],
    fields: Sequence[str],
    catalog: FieldCatalog,
    presentation: Presentation,
    options: FormatOptions | None = None,
) -> list[tuple[str, Any]]:
    """One-off projection of a single record."""
    return FieldProjector(fields, catalog, presentation, options).project(record)


__all__ = [
    "DATETIME_HINT",
    "FieldProjector",
    "FormatOptions",
    "Formatter",
    "PlannedField",
    "Presentation",
    "display_currency",
    "formatter_kind",
    "project",
    "to_bool",
    "to_date",
    "to_datetime",
    "to_number",
    "zero_value",
]
