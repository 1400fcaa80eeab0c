"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from fx_export.config.settings.models import ExportSettings, Settings
from fx_export.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from fx_export.config.validation.errors import (
    ConfigError,
    MissingRequiredSettingError,
)
from fx_export.observability.logging import get_logger

T = TypeVar("T", bound=Settings)

logger = get_logger(__name__)


class SettingsFactory:
    """Merge outputs from multiple loaders, apply overrides, and construct
    a settings dataclass in one step.

    Loaders are applied in order; later loaders override earlier ones for
    overlapping fields.  *overrides* (if provided) take the highest priority.
    A loader that fails is skipped so that the remaining loaders may still
    contribute values.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """
        Parameters
        ----------
        settings_cls:
            The :class:`~fx_export.config.settings.models.Settings` subclass to
            construct.
        loaders:
            Ordered sequence of loaders.  Later loaders win on field conflicts.
        overrides:
            Explicit key-value pairs applied after all loaders, useful for
            tests and local development.

        Raises
        ------
        MissingRequiredSettingError
            When a required field (no default) is absent after all sources
            have been merged.
        ConfigError
            On any other construction failure.
        """
        merged: dict[str, Any] = {}

        for loader in loaders or []:
            try:
                instance = loader.load(settings_cls)
            except ConfigError as exc:
                logger.warning(
                    "settings_loader_skipped",
                    loader=type(loader).__name__,
                    **exc.log_context(),
                )
                continue
            for field in dataclasses.fields(instance):  # type: ignore[arg-type]
                default = field.default
                value = getattr(instance, field.name)
                # A later loader only wins where it carries a non-default value.
                if field.name in merged and value == default:
                    continue
                merged[field.name] = value

        if overrides:
            merged.update(overrides)

        for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
            if field.name in merged:
                continue
            if (
                field.default is dataclasses.MISSING
                and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
            ):
                raise MissingRequiredSettingError(field.name)

        try:
            return settings_cls(**merged)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}") from exc


def load_settings(
    env_file: str = ".env",
    overrides: dict[str, Any] | None = None,
) -> ExportSettings:
    """Build :class:`ExportSettings` from ``.env`` then the process environment."""
    return SettingsFactory.create(
        ExportSettings,
        loaders=[DotenvSettingsLoader(env_file), EnvSettingsLoader()],
        overrides=overrides,
    )


__all__ = ["SettingsFactory", "load_settings"]
