"""Shared fixtures for the fx-export test suite."""
from __future__ import annotations

from typing import Any

import pytest

from fx_export.application.export import ExportConfig, ExportFormat
from fx_export.kernel.time import FrozenClock


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock.at(2024, 3, 15, 10, 30)


@pytest.fixture
def transactions() -> list[dict[str, Any]]:
    return [
        {
            "id": 1,
            "date": "2024-01-10",
            "client": "Ana Gómez",
            "collaborator": "Patty",
            "usd_total": 100.0,
            "commission": 5.0,
            "usd_net": 95.0,
            "amount_gs": 730000,
            "rate_used": 7300.0,
            "status": "completed",
            "chat_id": "chat-1",
            "house_profit": 3.0,
            "collaborator_profit": 2.0,
        },
        {
            "id": 2,
            "date": "2024-02-11",
            "client": "Luis, Jr.",
            "collaborator": "Andrés",
            "usd_total": 150.0,
            "commission": 10.0,
            "usd_net": 135.0,
            "amount_gs": 1095000,
            "rate_used": 7300.0,
            "status": "pending",
            "chat_id": "chat-2",
            "house_profit": 9.0,
            "collaborator_profit": 6.0,
        },
        {
            "id": 3,
            "date": "2024-02-20",
            "client": "Ana Gómez",
            "collaborator": "Patty",
            "usd_total": 50.0,
            "commission": 4.0,
            "usd_net": 48.0,
            "amount_gs": 365000,
            "rate_used": 7300.0,
            "status": "failed",
            "chat_id": "chat-3",
            "house_profit": 1.2,
            "collaborator_profit": 0.8,
        },
    ]


@pytest.fixture
def make_config():
    def _make(export_format: ExportFormat | str = ExportFormat.TEXT, **kwargs: Any) -> ExportConfig:
        kwargs.setdefault("fields", ("id", "date", "client", "usd_total", "status"))
        return ExportConfig(format=export_format, **kwargs)

    return _make
