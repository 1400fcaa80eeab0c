"""Application export – saved export configurations.

Users keep named export presets per data type.  :class:`SavedConfigStore`
is the port; :class:`InMemorySavedConfigStore` keeps one JSON document per
data type under the key ``export_configurations_<data_type>``.
"""
from __future__ import annotations

import abc
import dataclasses
import json
import uuid
from datetime import datetime
from typing import Any

from fx_export.application.export.request import ExportConfig
from fx_export.kernel.errors import ConfigInvalidError, NotFoundError, SerializationError
from fx_export.kernel.time import Clock, SystemClock

__all__ = [
    "DESCRIPTION_MAX_LENGTH",
    "InMemorySavedConfigStore",
    "NAME_MAX_LENGTH",
    "SavedConfigStore",
    "SavedExportConfig",
    "storage_key",
]

NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200


def storage_key(data_type: str) -> str:
    return f"export_configurations_{data_type}"


@dataclasses.dataclass(frozen=True)
class SavedExportConfig:
    id: str
    name: str
    config: ExportConfig
    created_at: datetime
    description: str = ""
    last_used: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name.strip())
        object.__setattr__(self, "description", self.description.strip())
        errors = []
        if not self.name:
            errors.append({"field": "name", "message": "name is required"})
        elif len(self.name) > NAME_MAX_LENGTH:
            errors.append({"field": "name", "message": f"at most {NAME_MAX_LENGTH} characters"})
        if len(self.description) > DESCRIPTION_MAX_LENGTH:
            errors.append({"field": "description", "message": f"at most {DESCRIPTION_MAX_LENGTH} characters"})
        if errors:
            raise ConfigInvalidError("Saved configuration is invalid", errors=errors)

    @classmethod
    def create(
        cls,
        name: str,
        config: ExportConfig,
        *,
        description: str = "",
        clock: Clock | None = None,
    ) -> "SavedExportConfig":
        now = (clock or SystemClock()).now()
        return cls(id=uuid.uuid4().hex, name=name, config=config, created_at=now, description=description)

    @property
    def recency(self) -> datetime:
        return self.last_used or self.created_at

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "config": self.config.to_dict(),
            "created_at": self.created_at.isoformat(),
            "last_used": self.last_used.isoformat() if self.last_used else None,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "SavedExportConfig":
        last_used = payload.get("last_used")
        return cls(
            id=payload["id"],
            name=payload["name"],
            description=payload.get("description") or "",
            config=ExportConfig.from_dict(payload["config"]),
            created_at=datetime.fromisoformat(payload["created_at"]),
            last_used=datetime.fromisoformat(last_used) if last_used else None,
        )


class SavedConfigStore(abc.ABC):
    """Port: persistence for saved export configurations."""

    @abc.abstractmethod
    def save(self, data_type: str, saved: SavedExportConfig) -> SavedExportConfig:
        """Insert *saved*, or replace the entry with the same id."""

    @abc.abstractmethod
    def list(self, data_type: str) -> list[SavedExportConfig]:
        """Return entries most recently used (or created) first."""

    @abc.abstractmethod
    def delete(self, data_type: str, config_id: str) -> None:
        """Remove an entry; raise :class:`NotFoundError` for unknown ids."""

    @abc.abstractmethod
    def touch_last_used(self, data_type: str, config_id: str) -> SavedExportConfig:
        """Stamp an entry as used now and return the updated entry."""


class InMemorySavedConfigStore(SavedConfigStore):
    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._documents: dict[str, str] = {}

    def _read(self, data_type: str) -> list[SavedExportConfig]:
        raw = self._documents.get(storage_key(data_type))
        if raw is None:
            return []
        try:
            return [SavedExportConfig.from_dict(item) for item in json.loads(raw)]
        except (ValueError, KeyError, TypeError) as exc:
            raise SerializationError(
                f"Stored configurations for {data_type!r} are unreadable",
                payload_type=storage_key(data_type),
                cause=exc,
            ) from exc

    def _write(self, data_type: str, entries: list[SavedExportConfig]) -> None:
        self._documents[storage_key(data_type)] = json.dumps(
            [entry.to_dict() for entry in entries], ensure_ascii=False
        )

    def raw(self, data_type: str) -> str | None:
        """The stored JSON document for *data_type*, if any."""
        return self._documents.get(storage_key(data_type))

    def save(self, data_type: str, saved: SavedExportConfig) -> SavedExportConfig:
        entries = [e for e in self._read(data_type) if e.id != saved.id]
        entries.append(saved)
        self._write(data_type, entries)
        return saved

    def list(self, data_type: str) -> list[SavedExportConfig]:
        return sorted(self._read(data_type), key=lambda e: e.recency, reverse=True)

    def delete(self, data_type: str, config_id: str) -> None:
        entries = self._read(data_type)
        remaining = [e for e in entries if e.id != config_id]
        if len(remaining) == len(entries):
            raise NotFoundError("Saved export configuration", config_id)
        self._write(data_type, remaining)

    def touch_last_used(self, data_type: str, config_id: str) -> SavedExportConfig:
        entries = self._read(data_type)
        for index, entry in enumerate(entries):
            if entry.id == config_id:
                updated = dataclasses.replace(entry, last_used=self._clock.now())
                entries[index] = updated
                self._write(data_type, entries)
                return updated
        raise NotFoundError("Saved export configuration", config_id)
