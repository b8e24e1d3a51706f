from .auth import User, parse_permissions
from .settings import CompanySettings
from .customers import Customer
from .inventory import Item
from .documents import Invoice, InvoiceItem, Quotation, QuotationItem
from .activity import LogEntry

# Creation order for the schema bootstrap: referenced tables first.
SCHEMA_ORDER = [
    User, CompanySettings, Customer, Item,
    Invoice, InvoiceItem, LogEntry, Quotation, QuotationItem,
]

__all__ = [
    'User', 'parse_permissions', 'CompanySettings', 'Customer', 'Item',
    'Invoice', 'InvoiceItem', 'Quotation', 'QuotationItem', 'LogEntry',
    'SCHEMA_ORDER',
]
