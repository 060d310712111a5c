from __future__ import annotations
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

from quotebook.services.formatting import parse_decimal


class PaymentInstructions(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    bank: str = ""
    account_name: str = ""
    account_number: str = ""
    branch_code: str = ""
    swift: str = ""


class CompanySettings(BaseModel):
    """
    Configuration de l'entreprise.
    - Passée explicitement à chaque opération (pas de singleton)
    - Les compteurs avancent via services.numbering (copie, jamais en place)
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = "cs1"
    company_name: str = ""
    address: str = ""
    email: EmailStr | None = None
    phone: str = ""
    logo_url: str | None = None
    currency: str = "ZAR"
    vat_percentage: Decimal = Decimal(15)
    numbering_format_quote: str = "QT-{YYYY}-{seq:04d}"
    numbering_format_invoice: str = "INV-{YYYY}-{seq:04d}"
    next_quote_number: int = 1
    next_invoice_number: int = 1
    terms_text: str = ""
    payment_instructions: PaymentInstructions = PaymentInstructions()

    @field_validator("vat_percentage", mode="before")
    @classmethod
    def _coerce_vat(cls, v: Any) -> Decimal:
        return parse_decimal(v)
