# tests/conftest.py
import os, sys
from datetime import date
from decimal import Decimal

# racine du projet (dossier contenant "quotebook") en tête de sys.path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import pytest

from quotebook.data.defaults import DEFAULT_SETTINGS
from quotebook.models.client import Client
from quotebook.models.item import Item
from quotebook.models.quote import Quote


@pytest.fixture
def settings():
    return DEFAULT_SETTINGS.model_copy(update={"next_quote_number": 2, "next_invoice_number": 2})


@pytest.fixture
def client():
    return Client(
        id="client1",
        name="Contas",
        company="Contas Inc.",
        email="billing@contas.com",
        billing_address="Waterfall Ridge, Vorna Valley, Midrand",
        delivery_address="Waterfall Ridge, Vorna Valley, Midrand",
        phone="+27 11 555 1234",
        vat_number="4123456789",
    )


@pytest.fixture
def items():
    return [
        Item(id="item1", description="Development server", unit_price=Decimal("1500.00"), qty=1),
        Item(id="item2", description="Project Management Module", unit_price=Decimal("15000.00"), qty=1),
    ]


@pytest.fixture
def accepted_quote(items):
    return Quote(
        id="quote1",
        quote_number="QT-2024-0001",
        created_by_user_id="user2",
        date_issued=date(2024, 11, 20),
        valid_until=date(2024, 12, 20),
        client_id="client1",
        items=items,
        subtotal_excl_vat=Decimal("16500.00"),
        vat_amount=Decimal("2475.00"),
        total_incl_vat=Decimal("18975.00"),
        deposit_percentage=40,
        deposit_amount=Decimal("7590.00"),
        balance_remaining=Decimal("11385.00"),
        status="Accepted",
        notes="Initial quote for project kickoff.",
    )
