"""
fx_export – report export engine for the currency-exchange back office.

Import path convention::

    from fx_export.application.export import ExportConfig, ExportFormat, ExportService
    from fx_export.kernel.errors import ConfigInvalidError, EncodeFailedError
    from fx_export.config.settings import ExportSettings, load_settings
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
