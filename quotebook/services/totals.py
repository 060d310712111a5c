from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict

from quotebook.models.common import ZERO
from quotebook.models.item import PackageItem
from quotebook.models.quote import Quote
from quotebook.services.formatting import parse_decimal

_HUNDRED = Decimal(100)


class Totals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal_excl_vat: Decimal = ZERO
    taxable_base: Decimal = ZERO
    vat_amount: Decimal = ZERO
    total_incl_vat: Decimal = ZERO
    deposit_amount: Decimal = ZERO
    balance_remaining: Decimal = ZERO


def calculate_totals(items: Iterable[PackageItem], vat_percentage: Any, deposit_percentage: Any) -> Totals:
    """
    Totaux d'un document à partir de ses lignes.
    Aucun arrondi intermédiaire: l'arrondi se fait à l'affichage (formatting).
    """
    vat_pct = parse_decimal(vat_percentage)
    deposit_pct = parse_decimal(deposit_percentage)

    subtotal = ZERO
    taxable = ZERO
    for it in items:
        amount = it.qty * it.unit_price
        subtotal += amount
        if it.taxable:
            taxable += amount

    vat = taxable * vat_pct / _HUNDRED
    total = subtotal + vat
    deposit = total * deposit_pct / _HUNDRED
    return Totals(
        subtotal_excl_vat=subtotal,
        taxable_base=taxable,
        vat_amount=vat,
        total_incl_vat=total,
        deposit_amount=deposit,
        balance_remaining=total - deposit,
    )


def apply_totals(quote: Quote, vat_percentage: Any) -> Quote:
    """Recalcule et recopie les totaux sur le devis (en place)."""
    t = calculate_totals(quote.items, vat_percentage, quote.deposit_percentage)
    quote.subtotal_excl_vat = t.subtotal_excl_vat
    quote.vat_amount = t.vat_amount
    quote.total_incl_vat = t.total_incl_vat
    quote.deposit_amount = t.deposit_amount
    quote.balance_remaining = t.balance_remaining
    return quote
