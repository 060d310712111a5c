from __future__ import annotations
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from quotebook.services.formatting import parse_decimal
from .common import ZERO, gen_id

ItemType = Literal["Fixed", "Recurring", "Hourly"]


class PackageItem(BaseModel):
    """Ligne de catalogue, sans identifiant (copiée dans un document)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    description: str = ""
    unit: str = "unit"
    qty: Decimal = Decimal(1)
    unit_price: Decimal = ZERO
    taxable: bool = True
    item_type: ItemType = "Fixed"

    @field_validator("qty", "unit_price", mode="before")
    @classmethod
    def _coerce_number(cls, v: Any) -> Decimal:
        # saisie en direct: une valeur illisible vaut 0
        return parse_decimal(v)

    @property
    def amount(self) -> Decimal:
        return self.qty * self.unit_price


class Item(PackageItem):
    model_config = ConfigDict(extra="ignore", frozen=False, validate_assignment=True)

    id: str = Field(default_factory=gen_id)
