"""Application export – StructuredDocumentEncoder."""
from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from fx_export.application.export.projector import FieldProjector, FormatOptions, Presentation
from fx_export.application.export.request import ExportConfig, FieldCatalog
from fx_export.kernel.time import Clock, SystemClock

__all__ = ["StructuredDocumentEncoder"]


class StructuredDocumentEncoder:
    """Emits ``{"data": [...], "metadata": {...}}`` as pretty-printed JSON.

    Output is a pure function of the input and the clock reading, so two
    encodes under a :class:`~fx_export.kernel.time.FrozenClock` are
    byte-identical.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        *,
        indent: int = 2,
        options: FormatOptions | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._indent = indent
        self._options = options

    def build_document(
        self,
        config: ExportConfig,
        rows: Sequence[Mapping[str, Any]],
        catalog: FieldCatalog,
    ) -> dict[str, Any]:
        projector = FieldProjector(
            config.fields, catalog, Presentation.STRUCTURED, self._options, skip_summary_only=True
        )
        document: dict[str, Any] = {"data": [dict(projector.project(row)) for row in rows]}
        if config.include_metadata:
            document["metadata"] = {
                "generated_at": self._clock.now().isoformat(timespec="seconds"),
                "total_records": len(rows),
                "fields": list(config.fields),
                "filters": config.filters.applied(),
                "date_range": config.date_range.to_dict(),
            }
        return document

    def encode(
        self,
        config: ExportConfig,
        rows: Sequence[Mapping[str, Any]],
        catalog: FieldCatalog,
    ) -> bytes:
        document = self.build_document(config, rows, catalog)
        text = json.dumps(document, indent=self._indent, ensure_ascii=False, allow_nan=False)
        return (text + "\n").encode("utf-8")
