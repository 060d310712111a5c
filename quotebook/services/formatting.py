from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

logger = logging.getLogger(__name__)

_CURRENCY_SYMBOLS = {"ZAR": "R", "USD": "$", "EUR": "€", "GBP": "£"}
_CENT = Decimal("0.01")


# ---------- Nombres ---------- #

def parse_decimal(val: Any) -> Decimal:
    """
    Conversion "souple" -> Decimal, pour la saisie en direct.
    Accepte int/float/Decimal/str ("1 500,50", "R 99.90"); sinon 0.
    """
    if val is None or val == "" or isinstance(val, bool):
        return Decimal(0)
    if isinstance(val, Decimal):
        return val if val.is_finite() else Decimal(0)
    if isinstance(val, int):
        return Decimal(val)
    if isinstance(val, float):
        try:
            d = Decimal(str(val))
        except InvalidOperation:
            return Decimal(0)
        return d if d.is_finite() else Decimal(0)
    # notation standard d'abord ("1e3", "-2.5"), nettoyage ensuite
    try:
        d = Decimal(str(val).strip())
    except InvalidOperation:
        pass
    else:
        return d if d.is_finite() else Decimal(0)
    s = re.sub(r"[^0-9,.\-]", "", str(val))
    s = s.replace(",", ".")
    # "1.500.50" -> garde seulement le dernier séparateur
    if s.count(".") > 1:
        head, _, tail = s.rpartition(".")
        s = head.replace(".", "") + "." + tail
    try:
        d = Decimal(s)
    except (InvalidOperation, ValueError):
        logger.debug("Valeur numérique illisible %r -> 0", val)
        return Decimal(0)
    return d if d.is_finite() else Decimal(0)


# ---------- Formats ---------- #

def format_currency(amount: Any, currency: str = "ZAR") -> str:
    """Arrondi à l'affichage uniquement (2 décimales, half-up)."""
    d = parse_decimal(amount).quantize(_CENT, rounding=ROUND_HALF_UP)
    symbol = _CURRENCY_SYMBOLS.get(currency.upper(), currency.upper())
    sign = "-" if d < 0 else ""
    return f"{sign}{symbol} {abs(d):,.2f}"


# ---------- Dates ---------- #

def today() -> date:
    return date.today()


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def _parse_date(s: Any) -> date:
    if isinstance(s, datetime):
        return s.date()
    if isinstance(s, date):
        return s
    return datetime.fromisoformat(str(s).strip().replace("Z", "+00:00")).date()


def iso_date(value: Any) -> str:
    """'2024-11-20T10:00:00Z' -> '2024-11-20'."""
    return _parse_date(value).isoformat()


def format_date(value: Any) -> str:
    try:
        return iso_date(value)
    except ValueError:
        return ""
