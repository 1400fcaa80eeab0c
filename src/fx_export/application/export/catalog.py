"""Application export – default field catalogs per data type."""
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from fx_export.application.export.request import FieldCatalog, FieldDescriptor, FieldType
from fx_export.kernel.errors import ConfigInvalidError

_N = FieldType.NUMBER
_D = FieldType.DATE

TRANSACTION_FIELDS = FieldCatalog(
    [
        FieldDescriptor("id", "ID", _N, "integer"),
        FieldDescriptor("date", "Date", _D),
        FieldDescriptor("client", "Client"),
        FieldDescriptor("collaborator", "Collaborator"),
        FieldDescriptor("usd_total", "USD Total", _N, "currency"),
        FieldDescriptor("commission", "Commission %", _N, "percentage"),
        FieldDescriptor("usd_net", "USD Net", _N, "currency"),
        FieldDescriptor("amount_gs", "Amount Gs", _N, "integer"),
        FieldDescriptor("rate_used", "Rate Used", _N, "decimal"),
        FieldDescriptor("status", "Status", format="status"),
        FieldDescriptor("chat_id", "Chat ID"),
        FieldDescriptor("house_profit", "House Profit", _N, "currency"),
        FieldDescriptor("collaborator_profit", "Collaborator Profit", _N, "currency"),
        FieldDescriptor("house_profit_total", "House Profit Total", _N, "currency", summary_only=True),
        FieldDescriptor(
            "collaborator_profit_total", "Collaborator Profit Total", _N, "currency", summary_only=True
        ),
    ]
)

REPORT_FIELDS = FieldCatalog(
    [
        FieldDescriptor("period", "Period"),
        FieldDescriptor("total_transactions", "Total Transactions", _N, "integer"),
        FieldDescriptor("total_volume_usd", "Total Volume USD", _N, "currency"),
        FieldDescriptor("total_commissions", "Total Commissions", _N, "currency"),
        FieldDescriptor("average_transaction", "Average Transaction", _N, "currency"),
        FieldDescriptor("top_collaborator", "Top Collaborator"),
        FieldDescriptor("top_client", "Top Client"),
        FieldDescriptor("monthly_growth", "Monthly Growth"),
    ]
)

COLLABORATOR_FIELDS = FieldCatalog(
    [
        FieldDescriptor("id", "ID", _N, "integer"),
        FieldDescriptor("name", "Name"),
        FieldDescriptor("base_commission", "Base Commission %", _N, "percentage"),
        FieldDescriptor("total_transactions", "Total Transactions", _N, "integer"),
        FieldDescriptor("total_commissions", "Total Commissions", _N, "currency"),
        FieldDescriptor("status", "Status", format="status"),
    ]
)

CLIENT_FIELDS = FieldCatalog(
    [
        FieldDescriptor("id", "ID", _N, "integer"),
        FieldDescriptor("name", "Name"),
        FieldDescriptor("phone", "Phone"),
        FieldDescriptor("total_transactions", "Total Transactions", _N, "integer"),
        FieldDescriptor("total_volume", "Total Volume", _N, "currency"),
        FieldDescriptor("last_transaction", "Last Transaction", _D),
    ]
)

LOG_FIELDS = FieldCatalog(
    [
        FieldDescriptor("timestamp", "Timestamp", _D, "datetime"),
        FieldDescriptor("level", "Level"),
        FieldDescriptor("source", "Source"),
        FieldDescriptor("message", "Message"),
    ]
)

CATALOGS: Mapping[str, FieldCatalog] = MappingProxyType(
    {
        "transactions": TRANSACTION_FIELDS,
        "reports": REPORT_FIELDS,
        "collaborators": COLLABORATOR_FIELDS,
        "clients": CLIENT_FIELDS,
        "logs": LOG_FIELDS,
    }
)

DEFAULT_FIELDS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "transactions": ("id", "date", "client", "collaborator", "usd_total", "commission", "usd_net", "status"),
        "reports": ("period", "total_transactions", "total_volume_usd", "total_commissions"),
        "collaborators": ("name", "base_commission", "total_transactions", "total_commissions"),
        "clients": ("name", "phone", "total_transactions", "total_volume"),
        "logs": ("timestamp", "level", "source", "message"),
    }
)

# Spreadsheet column widths in character units; unlisted fields use DEFAULT_COLUMN_WIDTH.
DEFAULT_COLUMN_WIDTH = 15
COLUMN_WIDTHS: Mapping[str, int] = MappingProxyType(
    {
        "id": 8,
        "date": 18,
        "client": 25,
        "collaborator": 18,
        "usd_total": 15,
        "commission": 12,
        "usd_net": 15,
        "amount_gs": 18,
        "rate_used": 12,
        "status": 12,
        "chat_id": 20,
        "house_profit": 18,
        "collaborator_profit": 20,
    }
)


def catalog_for(data_type: str) -> FieldCatalog:
    try:
        return CATALOGS[data_type]
    except KeyError:
        raise ConfigInvalidError(
            f"Unknown data type: {data_type!r}",
            errors=[{"field": "data_type", "message": f"expected one of {sorted(CATALOGS)}"}],
        ) from None


__all__ = [
    "CATALOGS",
    "CLIENT_FIELDS",
    "COLLABORATOR_FIELDS",
    "COLUMN_WIDTHS",
    "DEFAULT_COLUMN_WIDTH",
    "DEFAULT_FIELDS",
    "LOG_FIELDS",
    "REPORT_FIELDS",
    "TRANSACTION_FIELDS",
    "catalog_for",
]
