"""Application export – multi-format report export engine."""
from fx_export.application.export.catalog import (
    CATALOGS,
    CLIENT_FIELDS,
    DEFAULT_FIELDS,
    LOG_FIELDS,
    TRANSACTION_FIELDS,
    catalog_for,
)
from fx_export.application.export.csv_export import DelimitedTextEncoder
from fx_export.application.export.excel_export import WorkbookEncoder
from fx_export.application.export.export_service import ExportService
from fx_export.application.export.json_export import StructuredDocumentEncoder
from fx_export.application.export.pdf import VectorDocumentEncoder
from fx_export.application.export.projector import FieldProjector, FormatOptions, Presentation
from fx_export.application.export.request import (
    DateRange,
    ExportArtifact,
    ExportConfig,
    ExportFilters,
    ExportFormat,
    FieldCatalog,
    FieldDescriptor,
    FieldType,
)
from fx_export.application.export.saved_configs import (
    InMemorySavedConfigStore,
    SavedConfigStore,
    SavedExportConfig,
)

__all__ = [
    "CATALOGS",
    "CLIENT_FIELDS",
    "DEFAULT_FIELDS",
    "DateRange",
    "DelimitedTextEncoder",
    "ExportArtifact",
    "ExportConfig",
    "ExportFilters",
    "ExportFormat",
    "ExportService",
    "FieldCatalog",
    "FieldDescriptor",
    "FieldProjector",
    "FieldType",
    "FormatOptions",
    "InMemorySavedConfigStore",
    "LOG_FIELDS",
    "Presentation",
    "SavedConfigStore",
    "SavedExportConfig",
    "StructuredDocumentEncoder",
    "TRANSACTION_FIELDS",
    "VectorDocumentEncoder",
    "WorkbookEncoder",
    "catalog_for",
]
