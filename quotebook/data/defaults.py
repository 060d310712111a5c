from __future__ import annotations
from decimal import Decimal

from quotebook.models.item import PackageItem
from quotebook.models.package import Package
from quotebook.models.settings import CompanySettings, PaymentInstructions

DEFAULT_TERMS = (
    "Work performed will be strictly in accordance with the approved Spec Sheet provided by the client. "
    "A 40% deposit is due within 3 business days of invoice receipt and work will only commence upon "
    "confirmation of deposit. Final balance is due within 3 business days of project completion notification. "
    "Change requests outside the approved Spec Sheet will be quoted and billed separately. Three months of "
    "post-delivery support is included; thereafter support will incur charges based on query complexity."
)

DEFAULT_SETTINGS = CompanySettings(
    id="cs1",
    company_name="Innovation Imperial",
    address="123 Tech Avenue, Silicon Valley, 94043",
    email="contact@innovationimperial.com",
    phone="+1 (555) 123-4567",
    logo_url="https://picsum.photos/seed/logo/200/50",
    currency="ZAR",
    vat_percentage=Decimal(15),
    numbering_format_quote="QT-{YYYY}-{seq:04d}",
    numbering_format_invoice="INV-{YYYY}-{seq:04d}",
    next_quote_number=1,
    next_invoice_number=1,
    terms_text=DEFAULT_TERMS,
    payment_instructions=PaymentInstructions(
        bank="FNB",
        account_name="Sage Capital Labs",
        account_number="63053388782",
        branch_code="250655",
        swift="FIRNZAJJXXX",
    ),
)


def _fixed(description: str, unit_price: str) -> PackageItem:
    return PackageItem(description=description, unit_price=Decimal(unit_price), qty=1, unit="unit")


DEFAULT_PACKAGES = (
    Package(
        id="pkg1",
        name="Starter Website Package",
        description="1 x Landing page, Basic CMS setup, 1 month basic support, Development server.",
        price_incl_vat=Decimal("10000.00"),
        price_excl_vat=Decimal("8695.65"),
        items=(
            _fixed("Landing Page Design & Development", "6521.74"),
            _fixed("Basic CMS Setup", "1304.35"),
            _fixed("1 Month Basic Support", "869.56"),
        ),
    ),
    Package(
        id="pkg2",
        name="Growth Website + PM",
        description=(
            "Up to 5 pages, CMS, Product/Service listing, Project Management module, "
            "Dev + Production server, 3 months support."
        ),
        price_incl_vat=Decimal("25000.00"),
        price_excl_vat=Decimal("21739.13"),
        items=(
            _fixed("Website Design & Development (up to 5 pages)", "15217.39"),
            _fixed("Product/Service Listing Module", "3478.26"),
            _fixed("Project Management Module", "2173.91"),
            _fixed("3 Months Growth Support", "869.57"),
        ),
    ),
    Package(
        id="pkg3",
        name="Full Platform + Integration",
        description=(
            "Custom storefront or web app, advanced integration, deployment, "
            "3 months support + 6 months option, SLA add-on."
        ),
        price_incl_vat=Decimal("50000.00"),
        price_excl_vat=Decimal("43478.26"),
        items=(
            _fixed("Custom Web Application Development", "30434.78"),
            _fixed("Advanced API Integration", "8695.65"),
            _fixed("Deployment & Configuration", "2173.91"),
            _fixed("3 Months Enterprise Support", "2173.92"),
        ),
    ),
)
