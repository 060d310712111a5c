from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from quotebook.models.common import ZERO, gen_id
from quotebook.models.item import Item, ItemType
from quotebook.models.package import Package
from quotebook.models.quote import Quote, QuoteStatus
from quotebook.models.settings import CompanySettings
from quotebook.services import numbering
from quotebook.services.errors import InvalidStatusTransition, QuoteNotFound
from quotebook.services.formatting import add_days, parse_decimal, today as _today
from quotebook.services.packages import expand_package
from quotebook.services.settings_service import SettingsService
from quotebook.services.totals import apply_totals
from quotebook.storage.repo import InMemoryRepository

logger = logging.getLogger(__name__)

VALIDITY_DAYS = 30
DEFAULT_DEPOSIT_PCT = 40

# Draft -> Sent -> {Accepted, Declined, Expired}
QUOTE_TRANSITIONS: Dict[str, Tuple[str, ...]] = {
    "Draft": ("Sent",),
    "Sent": ("Accepted", "Declined", "Expired"),
    "Accepted": (),
    "Declined": (),
    "Expired": (),
}


# ---------- Création / enregistrement ---------- #

def create_draft_quote(
    settings: CompanySettings,
    terms_text: Optional[str] = None,
    today: Optional[date] = None,
    created_by_user_id: Optional[str] = None,
) -> Quote:
    """
    Nouveau devis brouillon.
    Le numéro vient du compteur courant, qui n'avance qu'à l'enregistrement.
    """
    d = today or _today()
    return Quote(
        id=gen_id(),
        quote_number=numbering.next_quote_number(settings, year=d.year),
        created_by_user_id=created_by_user_id,
        date_issued=d,
        valid_until=add_days(d, VALIDITY_DAYS),
        status="Draft",
        items=[],
        deposit_percentage=DEFAULT_DEPOSIT_PCT,
        terms_text=settings.terms_text if terms_text is None else terms_text,
    )


def save_quote(
    quote: Quote,
    quotes: Sequence[Quote],
    settings: CompanySettings,
    now: Optional[datetime] = None,
) -> Tuple[List[Quote], CompanySettings]:
    """
    Id connu -> remplace et met à jour updated_at.
    Sinon -> ajoute et avance next_quote_number de 1.
    """
    out = list(quotes)
    for idx, existing in enumerate(out):
        if existing.id == quote.id:
            saved = quote.model_copy(deep=True)
            saved.touch(now)
            out[idx] = saved
            return out, settings
    out.append(quote.model_copy(deep=True))
    logger.info("Devis %s créé", quote.quote_number)
    return out, numbering.advance_quote_counter(settings)


def transition_quote(quote: Quote, status: QuoteStatus) -> Quote:
    if status == quote.status:
        return quote
    if status not in QUOTE_TRANSITIONS.get(quote.status, ()):
        raise InvalidStatusTransition(quote.status, status)
    quote.status = status
    return quote


# ---------- Édition ---------- #

class QuoteEditor:
    """
    Mutations unitaires d'un devis.
    Chaque changement de lignes, de TVA ou d'acompte recalcule les totaux.
    """

    def __init__(
        self,
        quote: Quote,
        settings: CompanySettings,
        settings_service: Optional[SettingsService] = None,
    ) -> None:
        self.quote = quote
        self.settings_service = settings_service
        self.vat_percentage = settings.vat_percentage
        self._recalc()

    def _recalc(self) -> Quote:
        return apply_totals(self.quote, self.vat_percentage)

    def _item(self, index: int) -> Item:
        return self.quote.items[index]

    def _set_items(self, items: List[Item]) -> Quote:
        self.quote.items = items
        return self._recalc()

    # ----- lignes ----- #

    def add_item(self, item: Optional[Item] = None) -> Item:
        new = item or Item(description="", unit_price=ZERO, qty=1, taxable=True, item_type="Fixed", unit="unit")
        self._set_items([*self.quote.items, new])
        return new

    def remove_item(self, index: int) -> Quote:
        items = list(self.quote.items)
        del items[index]
        return self._set_items(items)

    def set_item_description(self, index: int, description: str) -> Quote:
        self._item(index).description = description
        return self.quote

    def set_item_unit(self, index: int, unit: str) -> Quote:
        self._item(index).unit = unit
        return self.quote

    def set_item_qty(self, index: int, qty: Any) -> Quote:
        self._item(index).qty = qty
        return self._recalc()

    def set_item_unit_price(self, index: int, unit_price: Any) -> Quote:
        self._item(index).unit_price = unit_price
        return self._recalc()

    def set_item_taxable(self, index: int, taxable: bool) -> Quote:
        self._item(index).taxable = bool(taxable)
        return self._recalc()

    def set_item_type(self, index: int, item_type: ItemType) -> Quote:
        self._item(index).item_type = item_type
        return self.quote

    def apply_package(self, package: Package) -> Quote:
        return self._set_items(expand_package(package, self.quote.items))

    # ----- champs ----- #

    def set_client(self, client_id: Optional[str]) -> Quote:
        self.quote.client_id = client_id or None
        return self.quote

    def set_deposit_percentage(self, pct: Any) -> Quote:
        self.quote.deposit_percentage = pct
        return self._recalc()

    def set_vat_percentage(self, pct: Any) -> Quote:
        # changement de configuration: le taux vaut aussi pour l'enregistrement
        if self.settings_service is not None:
            self.vat_percentage = self.settings_service.update(vat_percentage=parse_decimal(pct)).vat_percentage
        else:
            self.vat_percentage = parse_decimal(pct)
        return self._recalc()

    def set_date_issued(self, d: date) -> Quote:
        self.quote.date_issued = d
        return self.quote

    def set_valid_until(self, d: date) -> Quote:
        self.quote.valid_until = d
        return self.quote

    def set_notes(self, notes: str) -> Quote:
        self.quote.notes = notes or ""
        return self.quote

    def set_terms(self, terms_text: str) -> Quote:
        self.quote.terms_text = terms_text or ""
        return self.quote

    def set_status(self, status: QuoteStatus) -> Quote:
        return transition_quote(self.quote, status)


# ---------- Service ---------- #

class QuoteService:
    def __init__(
        self,
        settings_service: Optional[SettingsService] = None,
        repo: Optional[InMemoryRepository[Quote]] = None,
    ) -> None:
        self.settings_service = settings_service or SettingsService()
        self.repo: InMemoryRepository[Quote] = repo or InMemoryRepository(entity_name="quote")

    @property
    def settings(self) -> CompanySettings:
        return self.settings_service.settings

    def new_quote(self, today: Optional[date] = None, created_by_user_id: Optional[str] = None) -> Quote:
        return create_draft_quote(self.settings, today=today, created_by_user_id=created_by_user_id)

    def editor(self, quote: Quote) -> QuoteEditor:
        return QuoteEditor(quote, self.settings, self.settings_service)

    def save(self, quote: Quote, now: Optional[datetime] = None) -> Quote:
        apply_totals(quote, self.settings.vat_percentage)
        if self.repo.exists(quote.id):
            quote.touch(now)
            self.repo.update(quote)
            logger.info("Devis %s mis à jour", quote.quote_number)
            return quote
        self.repo.add(quote)
        self.settings_service.advance_quote_counter()
        logger.info("Devis %s créé", quote.quote_number)
        return quote

    def import_quotes(self, rows: Sequence[Dict[str, Any]]) -> List[Quote]:
        """Chargement de devis existants (sans toucher aux compteurs)."""
        out: List[Quote] = []
        for d in rows:
            try:
                q = Quote.model_validate(d)
            except ValidationError as e:
                logger.warning("Devis ignoré (invalide): %s", e)
                continue
            # totaux toujours dérivés des lignes, jamais repris tels quels
            apply_totals(q, self.settings.vat_percentage)
            self.repo.upsert(q)
            out.append(q)
        return out

    def get_by_id(self, quote_id: str) -> Optional[Quote]:
        return self.repo.get_by_id(quote_id)

    def require(self, quote_id: str) -> Quote:
        q = self.repo.get_by_id(quote_id)
        if q is None:
            raise QuoteNotFound(quote_id)
        return q

    def set_status(self, quote_id: str, status: QuoteStatus) -> Quote:
        q = transition_quote(self.require(quote_id), status)
        return self.save(q)

    def list_quotes(self) -> List[Quote]:
        return self.repo.list_all()

    def list_by_client(self, client_id: str) -> List[Quote]:
        return self.repo.find(lambda q: q.client_id == client_id)
