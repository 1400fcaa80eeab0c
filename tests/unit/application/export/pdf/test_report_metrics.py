"""Unit tests for derived report metrics."""
from __future__ import annotations

import pytest

from fx_export.application.export.pdf.metrics import (
    MAX_MONTHS,
    OPERATIONAL_EFFICIENCY,
    TOP_N,
    format_growth,
    growth_percentage,
    series_growth,
    summarize,
)


class TestGrowth:
    def test_growth_from_previous(self) -> None:
        assert growth_percentage(100, 150) == pytest.approx(50.0)
        assert format_growth(series_growth([100, 150])) == "+50.0%"

    def test_zero_previous_is_zero(self) -> None:
        assert growth_percentage(0, 150) == 0
        assert format_growth(series_growth([0, 150])) == "0%"

    def test_decline(self) -> None:
        assert format_growth(growth_percentage(200, 150)) == "-25.0%"

    def test_short_series(self) -> None:
        assert series_growth([]) == 0
        assert series_growth([42]) == 0


class TestSummarize:
    def test_totals(self, transactions) -> None:
        summary = summarize(transactions)
        assert summary.total_transactions == 3
        assert summary.usd_total == 300.0
        assert summary.usd_net == 278.0
        # 100*5% + 150*10% + 50*4%
        assert summary.commissions == pytest.approx(22.0)
        assert summary.average_transaction == 100.0
        assert summary.house_profit_total == pytest.approx(13.2)
        assert summary.collaborator_profit_total == pytest.approx(8.8)
        assert summary.unique_clients == 2
        assert summary.collaborators == ("Andrés", "Patty")

    def test_monthly_series_and_growth(self, transactions) -> None:
        summary = summarize(transactions)
        assert [tuple(p) for p in summary.monthly_volume] == [("2024-01", 100.0), ("2024-02", 200.0)]
        assert summary.monthly_growth_label == "+100.0%"

    def test_collaborator_rankings(self, transactions) -> None:
        summary = summarize(transactions)
        assert [p.label for p in summary.collaborator_commissions] == ["Andrés", "Patty"]
        share = dict(summary.collaborator_share)
        assert share["Patty"] == pytest.approx(200 / 3)
        assert summary.top_clients[0].label == "Ana Gómez"

    def test_series_are_bounded(self) -> None:
        rows = [
            {"date": f"2023-{month:02d}-01", "usd_total": month, "collaborator": f"c{month}", "client": f"k{month}"}
            for month in range(1, 13)
        ]
        summary = summarize(rows)
        assert len(summary.monthly_volume) == MAX_MONTHS
        assert summary.monthly_volume[-1].label == "2023-12"
        assert len(summary.collaborator_commissions) <= TOP_N
        assert len(summary.collaborator_share) == TOP_N
        assert len(summary.top_clients) == TOP_N
        assert summary.top_clients[0].label == "k12"

    def test_empty(self) -> None:
        summary = summarize([])
        assert summary.total_transactions == 0
        assert summary.average_transaction == 0.0
        assert summary.monthly_volume == ()
        assert summary.monthly_growth_label == "0%"

    def test_totals_keyed_like_summary_fields(self, transactions) -> None:
        totals = summarize(transactions).totals()
        assert {"house_profit_total", "collaborator_profit_total"} <= set(totals)


def test_operational_efficiency_placeholders_are_labelled() -> None:
    assert set(OPERATIONAL_EFFICIENCY) == {
        "Average process time",
        "Success rate",
        "Errors per day",
        "Cost per transaction",
    }
