"""Application export – ExportService dispatches to the correct encoder."""
from __future__ import annotations

import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol

from fx_export.application.export.catalog import catalog_for
from fx_export.application.export.csv_export import DelimitedTextEncoder
from fx_export.application.export.excel_export import WorkbookEncoder
from fx_export.application.export.json_export import StructuredDocumentEncoder
from fx_export.application.export.pdf import VectorDocumentEncoder
from fx_export.application.export.projector import FormatOptions
from fx_export.application.export.request import ExportArtifact, ExportConfig, ExportFormat, FieldCatalog
from fx_export.config.settings import ExportSettings, load_settings
from fx_export.kernel.errors import EncodeFailedError, UnsupportedFormatError
from fx_export.kernel.time import Clock, SystemClock
from fx_export.observability.logging import JsonLoggerFactory, get_logger

__all__ = ["Encoder", "ExportService", "ProgressCallback"]

logger = get_logger(__name__)

#: Advisory progress sink, called with 0, 10, 40, 90 and 100.
ProgressCallback = Callable[[int], None]


class Encoder(Protocol):
    def encode(
        self,
        config: ExportConfig,
        rows: Sequence[Mapping[str, Any]],
        catalog: FieldCatalog,
    ) -> bytes: ...


class ExportService:
    """Validates an :class:`ExportConfig` and dispatches it to an encoder.

    Encoders are built from :class:`ExportSettings` unless an explicit
    *encoders* mapping is given.
    """

    def __init__(
        self,
        settings: ExportSettings | None = None,
        *,
        clock: Clock | None = None,
        encoders: Mapping[ExportFormat, Encoder] | None = None,
    ) -> None:
        self._settings = settings or ExportSettings()
        self._clock = clock or SystemClock()
        self._encoders = dict(encoders) if encoders is not None else self._default_encoders()

    @classmethod
    def from_environment(
        cls,
        env_file: str = ".env",
        *,
        clock: Clock | None = None,
        configure_logging: bool = True,
    ) -> "ExportService":
        """Build a service from ``.env`` plus ``FX_EXPORT_*`` variables.

        When *configure_logging* is set, JSON logging is installed at the
        configured ``log_level``.
        """
        settings = load_settings(env_file)
        if configure_logging:
            JsonLoggerFactory.configure(settings.log_level)
        return cls(settings, clock=clock)

    @property
    def settings(self) -> ExportSettings:
        return self._settings

    def _default_encoders(self) -> dict[ExportFormat, Encoder]:
        s = self._settings
        options = FormatOptions(currency_symbol=s.currency_symbol, date_format=s.date_format)
        return {
            ExportFormat.TEXT: DelimitedTextEncoder(
                s.csv_delimiter, s.csv_line_terminator, bom=s.csv_bom, options=options
            ),
            ExportFormat.STRUCTURED: StructuredDocumentEncoder(
                self._clock, indent=s.json_indent, options=options
            ),
            ExportFormat.WORKBOOK: WorkbookEncoder(clock=self._clock, creator=s.company_name, options=options),
            ExportFormat.VECTOR: VectorDocumentEncoder(
                self._clock, title=s.report_title or None, company_name=s.company_name, options=options
            ),
        }

    def filename_for(self, config: ExportConfig) -> str:
        extension = config.format.extension
        base = (config.custom_filename or "").strip()
        if not base:
            base = f"{config.data_type}_{self._clock.today().isoformat()}"
        if base.lower().endswith(extension):
            return base
        return base + extension

    def export(
        self,
        config: ExportConfig,
        rows: Sequence[Mapping[str, Any]],
        catalog: FieldCatalog | None = None,
        *,
        progress: ProgressCallback | None = None,
    ) -> ExportArtifact:
        """Encode *rows* and return the artifact.

        Raises
        ------
        ConfigInvalidError
            Before any encode work when the config is invalid.
        UnsupportedFormatError
            When no encoder is registered for ``config.format``.
        EncodeFailedError
            When the encoder fails; the original exception is chained.
        """
        notify = progress or (lambda _: None)
        notify(0)
        catalog = catalog if catalog is not None else catalog_for(config.data_type)
        config.validate(catalog)
        encoder = self._encoders.get(config.format)
        if encoder is None:
            raise UnsupportedFormatError(
                config.format.value, supported=tuple(f.value for f in self._encoders)
            )
        notify(10)

        log = logger.bind(format=config.format.value, data_type=config.data_type)
        log.info("export_started", records=len(rows), fields=list(config.fields))
        start = time.monotonic()
        notify(40)
        try:
            content = encoder.encode(config, rows, catalog)
        except Exception as exc:
            failure = EncodeFailedError(config.format.value, cause=exc)
            log.error("export_failed", exc_info=exc, **failure.log_context())
            raise failure from exc
        notify(90)

        artifact = ExportArtifact(
            content=content,
            filename=self.filename_for(config),
            mime_type=config.format.mime_type,
            record_count=len(rows),
        )
        duration_ms = (time.monotonic() - start) * 1000
        log.info(
            "export_completed",
            filename=artifact.filename,
            size_bytes=len(content),
            duration_ms=round(duration_ms, 2),
        )
        notify(100)
        return artifact
