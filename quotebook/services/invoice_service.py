# quotebook/services/invoice_service.py
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple, get_args

from pydantic import ValidationError

from quotebook.models.common import gen_id, utcnow
from quotebook.models.invoice import Invoice, InvoiceStatus
from quotebook.models.quote import Quote
from quotebook.models.settings import CompanySettings
from quotebook.services import numbering
from quotebook.services.errors import FrozenInvoiceItems, InvoiceNotFound
from quotebook.services.formatting import add_days, today as _today
from quotebook.storage.repo import InMemoryRepository

logger = logging.getLogger(__name__)

DUE_DAYS = 5
INVOICE_STATUSES: Tuple[str, ...] = get_args(InvoiceStatus)


# ---------- Conversion devis -> facture ----------
def convert_quote_to_invoice(
    quote: Quote,
    settings: CompanySettings,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
) -> Tuple[Invoice, CompanySettings]:
    """
    Nouvelle facture à partir d'un devis.
    - Totaux recopiés tels quels (pas de recalcul)
    - Coordonnées bancaires figées au moment de l'émission
    - Ne contrôle pas le statut du devis et ne le marque pas (voir WorkflowService)
    """
    d = today or _today()
    ts = now or utcnow()
    inv = Invoice(
        id=gen_id(),
        invoice_number=numbering.next_invoice_number(settings, year=d.year),
        created_by_user_id=quote.created_by_user_id,
        date_issued=d,
        due_date=add_days(d, DUE_DAYS),
        client_id=quote.client_id,
        items=[it.model_copy() for it in quote.items],
        subtotal_excl_vat=quote.subtotal_excl_vat,
        vat_amount=quote.vat_amount,
        total_incl_vat=quote.total_incl_vat,
        deposit_required=quote.deposit_amount > 0,
        deposit_amount=quote.deposit_amount,
        balance_remaining=quote.balance_remaining,
        status="Sent",
        payment_instructions=settings.payment_instructions.model_copy(),
        created_from_quote_id=quote.id,
        created_at=ts,
        updated_at=ts,
    )
    logger.info("Facture %s émise depuis le devis %s", inv.invoice_number, quote.quote_number)
    return inv, numbering.advance_invoice_counter(settings)


# ---------- Enregistrement ----------
def save_invoice(
    invoice: Invoice,
    invoices: Sequence[Invoice],
    now: Optional[datetime] = None,
) -> List[Invoice]:
    """Remplace la facture de même id; aucune création hors conversion."""
    out = list(invoices)
    for idx, existing in enumerate(out):
        if existing.id == invoice.id:
            saved = invoice.model_copy(deep=True)
            saved.touch(now)
            out[idx] = saved
            return out
    logger.warning("Facture %s inconnue, non enregistrée", invoice.id)
    return out


def set_invoice_status(invoice: Invoice, status: InvoiceStatus) -> Invoice:
    # statut libre: seule l'appartenance est contrôlée
    if status not in INVOICE_STATUSES:
        raise ValueError(f"unknown invoice status {status!r}")
    invoice.status = status
    return invoice


def _same_items(a: Invoice, b: Invoice) -> bool:
    return [it.model_dump() for it in a.items] == [it.model_dump() for it in b.items]


# ---------- Service ----------
class InvoiceService:
    def __init__(self, repo: Optional[InMemoryRepository[Invoice]] = None):
        self.repo: InMemoryRepository[Invoice] = repo or InMemoryRepository(entity_name="invoice")

    # ----------- CRUD/list -----------
    def list_invoices(self) -> List[Invoice]:
        return self.repo.list_all()

    def list_by_quote(self, quote_id: str) -> List[Invoice]:
        return self.repo.find(lambda x: x.created_from_quote_id == quote_id)

    def list_by_client(self, client_id: str) -> List[Invoice]:
        return self.repo.find(lambda x: x.client_id == client_id)

    def get_by_id(self, invoice_id: str) -> Optional[Invoice]:
        return self.repo.get_by_id(invoice_id)

    def seed(self, rows: Sequence[Dict[str, Any] | Invoice]) -> List[Invoice]:
        """Factures pré-existantes (reprise de données)."""
        out: List[Invoice] = []
        for d in rows:
            try:
                inv = d if isinstance(d, Invoice) else Invoice.model_validate(d)
            except ValidationError as e:
                logger.warning("Facture ignorée (invalide): %s", e)
                continue
            self.repo.upsert(inv)
            out.append(inv)
        return out

    def add_converted(self, inv: Invoice) -> Invoice:
        self.repo.add(inv)
        return inv

    def save(self, inv: Invoice, now: Optional[datetime] = None) -> Invoice:
        """
        Met à jour une facture existante (statut, dates, notes).
        Les lignes sont figées après émission.
        """
        current = self.repo.get_by_id(inv.id)
        if current is None:
            raise InvoiceNotFound(inv.id)
        if not _same_items(current, inv):
            raise FrozenInvoiceItems(inv.id)
        inv.touch(now)
        self.repo.update(inv)
        logger.info("Facture %s mise à jour (%s)", inv.invoice_number, inv.status)
        return inv

    def set_status(self, invoice_id: str, status: InvoiceStatus) -> Invoice:
        inv = self.repo.get_by_id(invoice_id)
        if inv is None:
            raise InvoiceNotFound(invoice_id)
        return self.save(set_invoice_status(inv, status))
