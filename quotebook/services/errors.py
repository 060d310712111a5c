from __future__ import annotations


class QuotebookError(ValueError):
    pass


class QuoteNotFound(QuotebookError):
    def __init__(self, quote_id: str):
        super().__init__(f"quote with id={quote_id} not found")
        self.quote_id = quote_id


class InvoiceNotFound(QuotebookError):
    def __init__(self, invoice_id: str):
        super().__init__(f"invoice with id={invoice_id} not found")
        self.invoice_id = invoice_id


class InvalidStatusTransition(QuotebookError):
    def __init__(self, current: str, target: str):
        super().__init__(f"cannot move quote from {current} to {target}")
        self.current = current
        self.target = target


class QuoteNotAccepted(QuotebookError):
    def __init__(self, quote_id: str, status: str):
        super().__init__(f"quote {quote_id} is {status}, only Accepted quotes can be invoiced")
        self.quote_id = quote_id
        self.status = status


class QuoteAlreadyConverted(QuotebookError):
    def __init__(self, quote_id: str, invoice_id: str):
        super().__init__(f"quote {quote_id} already converted to invoice {invoice_id}")
        self.quote_id = quote_id
        self.invoice_id = invoice_id


class FrozenInvoiceItems(QuotebookError):
    def __init__(self, invoice_id: str):
        super().__init__(f"items of invoice {invoice_id} are frozen after issue")
        self.invoice_id = invoice_id


class ClientUnknown(QuotebookError):
    def __init__(self, client_id: str | None):
        super().__init__(f"client {client_id or '(none)'} is unknown")
        self.client_id = client_id
