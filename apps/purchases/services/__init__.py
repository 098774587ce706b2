"""Services for loyalty purchases: money formatting, discounts, ledger, registration."""

from . import ledger
from .currency import (
    ParsedAmount,
    format_currency,
    parse_raw_digits,
    to_decimal,
)
from .discounts import (
    DiscountQuote,
    compute_discount,
    is_discount_eligible,
)
from .ledger import (
    create_purchase,
    list_purchases,
    list_recent_purchases,
    get_client_purchase_total,
    get_purchase_by_id,
    get_purchase_summary,
)
from .registration import (
    Notice,
    PurchaseRegistration,
    RegistrationState,
)

__all__ = [
    'ledger',
    # Currency
    'ParsedAmount',
    'format_currency',
    'parse_raw_digits',
    'to_decimal',
    # Discounts
    'DiscountQuote',
    'compute_discount',
    'is_discount_eligible',
    # Ledger
    'create_purchase',
    'list_purchases',
    'list_recent_purchases',
    'get_client_purchase_total',
    'get_purchase_by_id',
    'get_purchase_summary',
    # Registration
    'Notice',
    'PurchaseRegistration',
    'RegistrationState',
]
