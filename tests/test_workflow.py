from datetime import date
from decimal import Decimal

import pytest

from quotebook.models.item import Item
from quotebook.services.dashboard import dashboard_kpis
from quotebook.services.errors import QuoteAlreadyConverted, QuoteNotAccepted, QuoteNotFound
from quotebook.services.quote_service import QuoteService
from quotebook.services.settings_service import SettingsService
from quotebook.services.workflow_service import WorkflowService

TODAY = date(2024, 11, 22)


@pytest.fixture
def workflow(settings):
    return WorkflowService(QuoteService(SettingsService(settings)))


def _accepted(workflow):
    quotes = workflow.quotes
    q = quotes.new_quote(today=TODAY)
    ed = quotes.editor(q)
    ed.set_client("client1")
    ed.add_item(Item(description="Development server", qty=1, unit_price="1500"))
    ed.add_item(Item(description="Project Management Module", qty=1, unit_price="15000"))
    quotes.save(q)
    quotes.set_status(q.id, "Sent")
    quotes.set_status(q.id, "Accepted")
    return q


def test_convert_accepted_quote(workflow):
    q = _accepted(workflow)
    inv = workflow.convert_to_invoice(q.id, today=TODAY)

    assert inv.invoice_number == "INV-2024-0002"
    assert inv.total_incl_vat == Decimal("18975")
    assert inv.deposit_amount == Decimal("7590")
    assert inv.deposit_required is True
    assert inv.created_from_quote_id == q.id
    assert workflow.settings_service.settings.next_invoice_number == 3
    assert workflow.invoices.get_by_id(inv.id) is not None

    stored = workflow.quotes.get_by_id(q.id)
    assert stored.status == "Accepted"
    assert stored.converted_invoice_id == inv.id


def test_quote_is_converted_once(workflow):
    q = _accepted(workflow)
    workflow.convert_to_invoice(q.id, today=TODAY)
    with pytest.raises(QuoteAlreadyConverted):
        workflow.convert_to_invoice(q.id, today=TODAY)
    assert len(workflow.invoices.list_invoices()) == 1
    assert workflow.settings_service.settings.next_invoice_number == 3


def test_only_accepted_quotes_convert(workflow):
    q = workflow.quotes.new_quote(today=TODAY)
    workflow.quotes.save(q)
    with pytest.raises(QuoteNotAccepted):
        workflow.convert_to_invoice(q.id, today=TODAY)
    with pytest.raises(QuoteNotFound):
        workflow.convert_to_invoice("missing")
    assert workflow.invoices.list_invoices() == []


def test_dashboard(workflow):
    q = _accepted(workflow)
    sent = workflow.quotes.new_quote(today=TODAY)
    workflow.quotes.save(sent)
    workflow.quotes.set_status(sent.id, "Sent")
    inv = workflow.convert_to_invoice(q.id, today=TODAY)

    kpis = dashboard_kpis(workflow.quotes.list_quotes(), workflow.invoices.list_invoices())
    assert kpis == {"total_quotes": 2, "open_quotes": 1, "outstanding_deposits": 1, "overdue_invoices": 0}

    workflow.invoices.set_status(inv.id, "Overdue")
    kpis = dashboard_kpis(workflow.quotes.list_quotes(), workflow.invoices.list_invoices())
    assert kpis["overdue_invoices"] == 1
    assert kpis["outstanding_deposits"] == 0


def test_imported_quote_converts_with_recomputed_totals(workflow, accepted_quote):
    row = accepted_quote.model_dump()
    row.update(total_incl_vat="1", deposit_amount="0")
    workflow.quotes.import_quotes([row])

    inv = workflow.convert_to_invoice("quote1", today=TODAY)
    assert inv.total_incl_vat == Decimal("18975")
    assert inv.deposit_required is True
    assert workflow.quotes.get_by_id("quote1").is_converted
