from __future__ import annotations

import logging
from typing import Optional

from quotebook.models.settings import CompanySettings
from quotebook.services.formatting import today

logger = logging.getLogger(__name__)

YEAR_TOKEN = "{YYYY}"
SEQ_TOKEN = "{seq:04d}"


def generate_number(fmt: str, sequence: int, year: Optional[int] = None) -> str:
    """
    'QT-{YYYY}-{seq:04d}', 7 -> 'QT-2024-0007'.
    Chaque jeton est remplacé une seule fois; le reste est recopié tel quel.
    """
    y = year if year is not None else today().year
    return (fmt or "").replace(YEAR_TOKEN, f"{y:04d}", 1).replace(SEQ_TOKEN, f"{int(sequence):04d}", 1)


# ---------- Compteurs (settings) ---------- #

def next_quote_number(settings: CompanySettings, year: Optional[int] = None) -> str:
    return generate_number(settings.numbering_format_quote, settings.next_quote_number, year)


def next_invoice_number(settings: CompanySettings, year: Optional[int] = None) -> str:
    return generate_number(settings.numbering_format_invoice, settings.next_invoice_number, year)


def advance_quote_counter(settings: CompanySettings) -> CompanySettings:
    n = settings.next_quote_number + 1
    logger.info("Compteur devis -> %s", n)
    return settings.model_copy(update={"next_quote_number": n})


def advance_invoice_counter(settings: CompanySettings) -> CompanySettings:
    n = settings.next_invoice_number + 1
    logger.info("Compteur factures -> %s", n)
    return settings.model_copy(update={"next_invoice_number": n})
