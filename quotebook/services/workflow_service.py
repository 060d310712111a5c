from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from quotebook.models.invoice import Invoice
from quotebook.services.errors import QuoteAlreadyConverted, QuoteNotAccepted
from quotebook.services.invoice_service import InvoiceService, convert_quote_to_invoice
from quotebook.services.quote_service import QuoteService

logger = logging.getLogger(__name__)


class WorkflowService:
    """Enchaînements devis -> facture (garde-fous côté appelant)."""

    def __init__(self, quotes: QuoteService, invoices: Optional[InvoiceService] = None):
        self.quotes = quotes
        self.invoices = invoices or InvoiceService()

    @property
    def settings_service(self):
        return self.quotes.settings_service

    def convert_to_invoice(
        self,
        quote_id: str,
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> Invoice:
        # 1) devis accepté et jamais converti
        q = self.quotes.require(quote_id)
        if q.status != "Accepted":
            raise QuoteNotAccepted(q.id, q.status)
        if q.is_converted:
            raise QuoteAlreadyConverted(q.id, q.converted_invoice_id)

        # 2) facture + compteur
        inv, new_settings = convert_quote_to_invoice(q, self.settings_service.settings, today=today, now=now)
        self.invoices.add_converted(inv)
        self.settings_service.replace(new_settings)

        # 3) lien devis -> facture
        q.converted_invoice_id = inv.id
        self.quotes.repo.update(q)
        logger.info("Devis %s converti en %s", q.quote_number, inv.invoice_number)
        return inv
