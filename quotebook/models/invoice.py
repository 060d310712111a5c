from __future__ import annotations
from pydantic import ConfigDict, Field
from typing import List, Literal, Optional
from datetime import date
from decimal import Decimal

from .common import ZERO, TimeStamped, gen_id
from .item import Item
from .settings import PaymentInstructions

InvoiceStatus = Literal["Draft", "Sent", "PartiallyPaid", "Paid", "Overdue"]


class Invoice(TimeStamped):
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    id: str = Field(default_factory=gen_id)
    invoice_number: str
    created_by_user_id: Optional[str] = None
    client_id: Optional[str] = None
    status: InvoiceStatus = "Draft"

    date_issued: date
    due_date: date
    items: List[Item] = Field(default_factory=list)

    # snapshot à la conversion, pas de recalcul
    subtotal_excl_vat: Decimal = ZERO
    vat_amount: Decimal = ZERO
    total_incl_vat: Decimal = ZERO
    deposit_required: bool = False
    deposit_amount: Decimal = ZERO
    balance_remaining: Decimal = ZERO

    payment_instructions: PaymentInstructions = Field(default_factory=PaymentInstructions)
    created_from_quote_id: Optional[str] = None
    notes: str = ""
