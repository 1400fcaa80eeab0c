"""Unit tests for VectorDocumentEncoder and ReportLabPainter."""
from __future__ import annotations

import re

import pytest
from structlog.testing import capture_logs

from fx_export.application.export import CLIENT_FIELDS, TRANSACTION_FIELDS, ExportFormat, VectorDocumentEncoder
from fx_export.application.export.pdf import DisplayList, Paint, ReportLabPainter
from fx_export.application.export.pdf.pdf_export import CHART_UNAVAILABLE
from fx_export.kernel.time import FrozenClock

FIELDS = ("id", "date", "client", "collaborator", "usd_total", "status")


def _texts(pages: tuple[DisplayList, ...]) -> list[str]:
    return [text for page in pages for text in page.texts()]


def _page_count(pdf: bytes) -> int:
    return len(re.findall(rb"/Type /Page\b", pdf))


@pytest.fixture
def encoder(clock) -> VectorDocumentEncoder:
    return VectorDocumentEncoder(clock, title="Transactions Report", company_name="Cambios SA")


class TestLayout:
    def test_sections_present(self, encoder, make_config, transactions) -> None:
        texts = _texts(encoder.layout(make_config(ExportFormat.VECTOR, fields=FIELDS), transactions, TRANSACTION_FIELDS))
        for expected in (
            "Transactions Report",
            "Cambios SA",
            "Report information",
            "Transaction data",
            "Executive summary",
            "Monthly volume (USD)",
            "Commission by collaborator",
            "Collaborator share",
            "Monthly trend",
            "Operational efficiency",
            "Participants",
        ):
            assert expected in texts

    def test_table_values_use_display_formatting(self, encoder, make_config, transactions) -> None:
        texts = _texts(encoder.layout(make_config(ExportFormat.VECTOR, fields=FIELDS), transactions, TRANSACTION_FIELDS))
        assert "$150.00" in texts
        assert "10/01/2024" in texts
        assert "completed" in texts

    def test_growth_shown(self, encoder, make_config, transactions) -> None:
        texts = _texts(encoder.layout(make_config(ExportFormat.VECTOR, fields=FIELDS), transactions, TRANSACTION_FIELDS))
        assert "Month-over-month growth: +100.0%" in texts

    def test_metadata_cards_optional(self, encoder, make_config, transactions) -> None:
        cfg = make_config(ExportFormat.VECTOR, fields=FIELDS, include_metadata=False)
        assert "Report information" not in _texts(encoder.layout(cfg, transactions, TRANSACTION_FIELDS))

    def test_summary_only_fields_become_cards(self, encoder, make_config, transactions) -> None:
        cfg = make_config(ExportFormat.VECTOR, fields=("id", "house_profit_total"))
        texts = _texts(encoder.layout(cfg, transactions, TRANSACTION_FIELDS))
        assert "House Profit Total" in texts
        assert "$13.20" in texts

    def test_long_table_paginates_with_repeated_header(self, encoder, make_config, transactions) -> None:
        rows = [dict(transactions[i % 3], id=i) for i in range(60)]
        pages = encoder.layout(make_config(ExportFormat.VECTOR, fields=FIELDS), rows, TRANSACTION_FIELDS)
        total = len(pages)
        assert total > 2
        for number, page in enumerate(pages, start=1):
            assert page.texts()[-1] == f"Page {number} of {total}"
        # every page that carries table rows starts with the column header
        assert pages[1].texts()[0] == "ID"

    def test_no_rows(self, encoder, make_config) -> None:
        texts = _texts(encoder.layout(make_config(ExportFormat.VECTOR, fields=FIELDS), [], TRANSACTION_FIELDS))
        assert "No records to display" in texts
        assert "No data available" in texts

    def test_malformed_chart_degrades_to_placeholder(self, encoder, make_config, transactions) -> None:
        rows = [dict(transactions[0], usd_total=-100.0)] + transactions[1:]
        with capture_logs() as logs:
            texts = _texts(encoder.layout(make_config(ExportFormat.VECTOR, fields=FIELDS), rows, TRANSACTION_FIELDS))
        assert CHART_UNAVAILABLE in texts
        failures = [entry for entry in logs if entry["event"] == "chart_block_failed"]
        assert failures
        assert failures[0]["chart"] == "Monthly volume (USD)"
        assert ("2024-01", -100.0) in failures[0]["series"]


class TestDataTypes:
    CLIENTS = [
        {"id": 1, "name": "Ana", "phone": "555-0101", "total_transactions": 4, "total_volume": 820.5},
        {"id": 2, "name": "Luis", "phone": "555-0102", "total_transactions": 1, "total_volume": 90.0},
    ]

    def _client_config(self, make_config):
        return make_config(
            ExportFormat.VECTOR, data_type="clients", fields=("name", "phone", "total_volume")
        )

    def test_title_follows_data_type(self, clock, make_config) -> None:
        encoder = VectorDocumentEncoder(clock)
        texts = _texts(encoder.layout(self._client_config(make_config), self.CLIENTS, CLIENT_FIELDS))
        assert "Clients Report" in texts
        assert "Client data" in texts
        assert "Transactions Report" not in texts

    def test_explicit_title_wins(self, clock, make_config) -> None:
        encoder = VectorDocumentEncoder(clock, title="Monthly close")
        assert encoder.title_for(self._client_config(make_config)) == "Monthly close"

    def test_no_transaction_summary_for_clients(self, clock, make_config) -> None:
        encoder = VectorDocumentEncoder(clock)
        texts = _texts(encoder.layout(self._client_config(make_config), self.CLIENTS, CLIENT_FIELDS))
        assert "Executive summary" not in texts
        assert "Monthly volume (USD)" not in texts
        assert "$820.50" in texts
        assert texts[-1] == "Page 1 of 1"

    def test_clients_pdf_encodes(self, clock, make_config) -> None:
        data = VectorDocumentEncoder(clock).encode(self._client_config(make_config), self.CLIENTS, CLIENT_FIELDS)
        assert data.startswith(b"%PDF")
        assert _page_count(data) == 1


class TestEncode:
    def test_pdf_bytes(self, encoder, make_config, transactions) -> None:
        data = encoder.encode(make_config(ExportFormat.VECTOR, fields=FIELDS), transactions, TRANSACTION_FIELDS)
        assert data.startswith(b"%PDF")
        assert data.rstrip().endswith(b"%%EOF")

    def test_page_count_matches_layout(self, encoder, make_config, transactions) -> None:
        rows = [dict(transactions[i % 3], id=i) for i in range(60)]
        cfg = make_config(ExportFormat.VECTOR, fields=FIELDS)
        pages = encoder.layout(cfg, rows, TRANSACTION_FIELDS)
        assert _page_count(encoder.encode(cfg, rows, TRANSACTION_FIELDS)) == len(pages)

    def test_deterministic(self, make_config, transactions) -> None:
        cfg = make_config(ExportFormat.VECTOR, fields=FIELDS)
        first = VectorDocumentEncoder(FrozenClock.at(2024, 1, 1)).encode(cfg, transactions, TRANSACTION_FIELDS)
        second = VectorDocumentEncoder(FrozenClock.at(2024, 1, 1)).encode(cfg, transactions, TRANSACTION_FIELDS)
        assert first == second


class TestReportLabPainter:
    def test_replays_every_op_kind(self) -> None:
        page = DisplayList()
        paint = Paint(fill=None)
        page.rect(10, 10, 50, 20, paint.with_(stroke=None))
        page.line(10, 40, 100, 40, Paint(stroke=None))
        page.polygon([(10, 50), (20, 60), (10, 60)], paint)
        page.circle(50, 80, 5, paint)
        for align in ("left", "center", "right"):
            page.text(100, 100, f"aligned {align}", paint, align=align)
        data = ReportLabPainter(title="t").render([page, DisplayList()])
        assert data.startswith(b"%PDF")
        assert _page_count(data) == 2
