# quotebook/services/document_service.py
from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

from quotebook.models.client import Client
from quotebook.models.invoice import Invoice
from quotebook.models.quote import Quote
from quotebook.models.settings import CompanySettings
from quotebook.services.errors import ClientUnknown
from quotebook.services.formatting import format_currency, format_date

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

Document = Union[Quote, Invoice]


def _slug(text: str) -> str:
    text = (text or "").strip()
    text = re.sub(r'[\\/:*?"<>|\n\r\t]', "_", text)
    return text or "document"


def _doc_type(doc: Document) -> str:
    return "Invoice" if isinstance(doc, Invoice) else "Quote"


def _doc_number(doc: Document) -> str:
    return doc.invoice_number if isinstance(doc, Invoice) else doc.quote_number


def export_filename(doc: Document) -> str:
    """'Quote-QT-2024-0001.pdf' / 'Invoice-INV-2024-0001.pdf'."""
    return f"{_doc_type(doc)}-{_slug(_doc_number(doc))}.pdf"


def deposit_due(doc: Document):
    # facture: acompte seulement s'il est exigé; devis: toujours affiché
    if isinstance(doc, Invoice):
        return doc.deposit_amount if doc.deposit_required else None
    return doc.deposit_amount


def build_document_context(doc: Document, settings: CompanySettings, client: Optional[Client]) -> Dict[str, Any]:
    """
    Contexte de la facture/du devis pour le rendu à mise en page fixe.
    Sans client connu, seul ce rendu est bloqué (ClientUnknown).
    """
    if client is None:
        raise ClientUnknown(doc.client_id)

    cur = settings.currency
    is_invoice = isinstance(doc, Invoice)
    due = deposit_due(doc)

    ctx: Dict[str, Any] = {
        "type": _doc_type(doc),
        "number": _doc_number(doc),
        "date_issued": format_date(doc.date_issued),
        "second_date_label": "Due Date" if is_invoice else "Valid Until",
        "second_date": format_date(doc.due_date if is_invoice else doc.valid_until),
        "status": doc.status,
        "currency": cur,
        "company": {
            "name": settings.company_name,
            "address": settings.address,
            "email": settings.email or "",
            "phone": settings.phone,
            "logo_url": settings.logo_url,
        },
        "client": {
            "name": client.name,
            "company": client.company or "",
            "billing_address": client.billing_address or "",
            "vat_number": client.vat_number,
        },
        "items": [
            {
                "description": it.description,
                "unit": it.unit,
                "qty": f"{it.qty.normalize():f}",
                "unit_price": format_currency(it.unit_price, cur),
                "amount": format_currency(it.amount, cur),
            }
            for it in doc.items
        ],
        "vat_percentage": f"{settings.vat_percentage.normalize():f}",
        "subtotal": format_currency(doc.subtotal_excl_vat, cur),
        "vat_amount": format_currency(doc.vat_amount, cur),
        "total": format_currency(doc.total_incl_vat, cur),
        "deposit_due": format_currency(due, cur) if due is not None and due > 0 else None,
        "payment_instructions": doc.payment_instructions.model_dump() if is_invoice else None,
        "terms_text": settings.terms_text if is_invoice else (doc.terms_text or settings.terms_text),
    }
    return ctx


def render_document_html(doc: Document, settings: CompanySettings, client: Optional[Client]) -> str:
    """
    Rend le HTML du document en mémoire via Jinja2: templates/document.html
    La rastérisation/export reste à l'appelant.
    """
    from jinja2 import Environment, FileSystemLoader, select_autoescape

    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )
    tpl = env.get_template("document.html")
    return tpl.render(**build_document_context(doc, settings, client))
