from __future__ import annotations
from decimal import Decimal
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from .common import ZERO, gen_id
from .item import PackageItem


class Package(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(default_factory=gen_id)
    name: str
    description: str = ""
    # affichage seulement: l'expansion copie les items, pas ce prix
    price_incl_vat: Decimal = ZERO
    price_excl_vat: Decimal = ZERO
    items: Tuple[PackageItem, ...] = ()
