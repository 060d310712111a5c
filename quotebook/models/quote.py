from __future__ import annotations
from pydantic import ConfigDict, Field, field_validator
from typing import Any, List, Literal, Optional
from datetime import date
from decimal import Decimal

from quotebook.services.formatting import parse_decimal
from .common import ZERO, TimeStamped, gen_id
from .item import Item

QuoteStatus = Literal["Draft", "Sent", "Accepted", "Declined", "Expired"]


class Quote(TimeStamped):
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    id: str = Field(default_factory=gen_id)
    quote_number: str
    created_by_user_id: Optional[str] = None
    client_id: Optional[str] = None
    status: QuoteStatus = "Draft"

    date_issued: date
    valid_until: date
    items: List[Item] = Field(default_factory=list)

    # calculés (services.totals), jamais saisis
    subtotal_excl_vat: Decimal = ZERO
    vat_amount: Decimal = ZERO
    total_incl_vat: Decimal = ZERO
    deposit_percentage: Decimal = Decimal(40)
    deposit_amount: Decimal = ZERO
    balance_remaining: Decimal = ZERO

    terms_text: str = ""
    notes: str = ""

    # rempli par WorkflowService lors de la conversion
    converted_invoice_id: Optional[str] = None

    @field_validator("deposit_percentage", mode="before")
    @classmethod
    def _coerce_pct(cls, v: Any) -> Decimal:
        return max(ZERO, min(Decimal(100), parse_decimal(v)))

    @property
    def is_converted(self) -> bool:
        return self.converted_invoice_id is not None
