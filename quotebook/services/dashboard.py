from __future__ import annotations
from typing import Dict, Iterable

from quotebook.models.invoice import Invoice
from quotebook.models.quote import Quote


def dashboard_kpis(quotes: Iterable[Quote], invoices: Iterable[Invoice]) -> Dict[str, int]:
    quotes = list(quotes)
    invoices = list(invoices)
    return {
        "total_quotes": len(quotes),
        "open_quotes": sum(1 for q in quotes if q.status == "Sent"),
        "outstanding_deposits": sum(1 for i in invoices if i.status == "Sent" and i.deposit_required),
        "overdue_invoices": sum(1 for i in invoices if i.status == "Overdue"),
    }
