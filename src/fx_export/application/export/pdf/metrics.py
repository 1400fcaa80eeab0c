"""Vector document – derived report metrics.

:func:`summarize` folds the exported rows into a :class:`ReportSummary`
for the executive summary section.  Every series it produces is bounded:
the last six months and the top five collaborators and clients.
"""
from __future__ import annotations

import dataclasses
import math
from collections import Counter, defaultdict
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from fx_export.application.export.pdf.geometry import ChartSeriesPoint
from fx_export.application.export.projector import to_date, to_number

MAX_MONTHS = 6
TOP_N = 5

# Placeholder business figures shown on the operational efficiency card.
# They are not derived from the dataset.
OPERATIONAL_EFFICIENCY: Mapping[str, str] = MappingProxyType(
    {
        "Average process time": "2.3 min",
        "Success rate": "98.2%",
        "Errors per day": "0.8",
        "Cost per transaction": "$0.45",
    }
)


def growth_percentage(previous: float, last: float) -> float:
    """Month-over-month growth in percent; ``0`` when there is no baseline."""
    if previous == 0:
        return 0.0
    return (last - previous) / previous * 100


def format_growth(value: float) -> str:
    if value == 0 or not math.isfinite(value):
        return "0%"
    return f"{value:+.1f}%"


def series_growth(values: Sequence[float]) -> float:
    """Growth between the last two values of *values*."""
    if len(values) < 2:
        return 0.0
    return growth_percentage(values[-2], values[-1])


@dataclasses.dataclass(frozen=True)
class ReportSummary:
    total_transactions: int
    usd_total: float
    usd_net: float
    commissions: float
    average_transaction: float
    house_profit_total: float
    collaborator_profit_total: float
    monthly_volume: tuple[ChartSeriesPoint, ...]
    collaborator_commissions: tuple[ChartSeriesPoint, ...]
    collaborator_share: tuple[ChartSeriesPoint, ...]  # percent of transactions
    top_clients: tuple[ChartSeriesPoint, ...]
    collaborators: tuple[str, ...]
    unique_clients: int

    @property
    def monthly_growth(self) -> float:
        return series_growth([p.value for p in self.monthly_volume])

    @property
    def monthly_growth_label(self) -> str:
        return format_growth(self.monthly_growth)

    def totals(self) -> dict[str, float]:
        """Aggregate values keyed like the summary-only catalog fields."""
        return {
            "usd_total": self.usd_total,
            "usd_net": self.usd_net,
            "house_profit_total": self.house_profit_total,
            "collaborator_profit_total": self.collaborator_profit_total,
        }


def _top(values: Mapping[str, float], limit: int = TOP_N) -> tuple[ChartSeriesPoint, ...]:
    ranked = sorted(values.items(), key=lambda item: (-item[1], item[0]))
    return tuple(ChartSeriesPoint(name, value) for name, value in ranked[:limit])


def summarize(rows: Sequence[Mapping[str, Any]]) -> ReportSummary:
    usd_total = usd_net = commissions = house = collaborator_profit = 0.0
    by_month: dict[tuple[int, int], float] = defaultdict(float)
    by_collaborator_commission: dict[str, float] = defaultdict(float)
    by_client_volume: dict[str, float] = defaultdict(float)
    collaborator_counts: Counter[str] = Counter()

    for row in rows:
        amount = float(to_number(row.get("usd_total")))
        commission = amount * float(to_number(row.get("commission"))) / 100
        usd_total += amount
        usd_net += float(to_number(row.get("usd_net")))
        commissions += commission
        house += float(to_number(row.get("house_profit")))
        collaborator_profit += float(to_number(row.get("collaborator_profit")))

        when = to_date(row.get("date"))
        if when is not None:
            by_month[(when.year, when.month)] += amount
        collaborator = str(row.get("collaborator") or "").strip()
        if collaborator:
            collaborator_counts[collaborator] += 1
            by_collaborator_commission[collaborator] += commission
        client = str(row.get("client") or "").strip()
        if client:
            by_client_volume[client] += amount

    months = sorted(by_month)[-MAX_MONTHS:]
    monthly = tuple(
        ChartSeriesPoint(f"{year}-{month:02d}", round(by_month[(year, month)], 2)) for year, month in months
    )
    total_count = len(rows)
    share = {
        name: count / total_count * 100 for name, count in collaborator_counts.items()
    } if total_count else {}

    return ReportSummary(
        total_transactions=total_count,
        usd_total=round(usd_total, 2),
        usd_net=round(usd_net, 2),
        commissions=round(commissions, 2),
        average_transaction=round(usd_total / total_count, 2) if total_count else 0.0,
        house_profit_total=round(house, 2),
        collaborator_profit_total=round(collaborator_profit, 2),
        monthly_volume=monthly,
        collaborator_commissions=_top(by_collaborator_commission),
        collaborator_share=_top(share),
        top_clients=_top(by_client_volume),
        collaborators=tuple(sorted(collaborator_counts)),
        unique_clients=len(by_client_volume),
    )


__all__ = [
    "MAX_MONTHS",
    "OPERATIONAL_EFFICIENCY",
    "ReportSummary",
    "TOP_N",
    "format_growth",
    "growth_percentage",
    "series_growth",
    "summarize",
]
