"""
Currency formatting for the purchase desk.

The amount field is typed as a run of digits in cents: ``150000`` is
``R$ 1.500,00``. Every keystroke re-parses the whole buffer, so the display
never drifts from the digits the operator actually typed.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, localcontext
from typing import Union

from django.conf import settings
from django.utils import numberformat

CENTS = Decimal('0.01')

_NON_DIGITS = re.compile(r"[^0-9]")


def _to_cents(amount: Decimal, rounding=None) -> Decimal:
    """Quantize to cents with enough precision for any number of digits."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        return amount.quantize(CENTS, rounding=rounding or ctx.rounding)


@dataclass(frozen=True)
class ParsedAmount:
    """Display string and canonical decimal string of a raw amount input."""

    display: str
    canonical: str

    @property
    def is_empty(self) -> bool:
        return self.canonical == ''

    def as_decimal(self) -> Decimal:
        return to_decimal(self.canonical)


def format_currency(value: Union[Decimal, int, float, str]) -> str:
    """
    Format a money value for display, e.g. ``R$ 1.500,00``.

    The value is rounded half-up to cents before formatting. Symbol and
    separators come from the CURRENCY_* settings.
    """
    amount = _to_cents(Decimal(str(value)), ROUND_HALF_UP)
    number = numberformat.format(
        amount,
        decimal_sep=getattr(settings, 'CURRENCY_DECIMAL_SEPARATOR', ','),
        decimal_pos=2,
        grouping=3,
        thousand_sep=getattr(settings, 'CURRENCY_THOUSAND_SEPARATOR', '.'),
        force_grouping=True,
    )
    symbol = getattr(settings, 'CURRENCY_SYMBOL', 'R$')
    # Non-breaking space between symbol and number, as browsers render pt-BR
    return f"{symbol}\u00a0{number}"


def parse_raw_digits(raw_input: str) -> ParsedAmount:
    """
    Interpret free text as an amount in cents.

    Every non-digit is dropped; what remains is a count of cents. An input
    with no digits at all means "no amount entered" and yields two empty
    strings rather than zero. Never raises.

    Example::

        >>> parse_raw_digits('150000')
        ParsedAmount(display='R$\\xa01.500,00', canonical='1500.00')
        >>> parse_raw_digits('abc')
        ParsedAmount(display='', canonical='')
    """
    digits = _NON_DIGITS.sub('', raw_input or '')
    if not digits:
        return ParsedAmount(display='', canonical='')

    # Built from the digit string so no length overflows a decimal context
    digits = digits.lstrip('0').rjust(3, '0')
    canonical = f"{digits[:-2]}.{digits[-2:]}"
    return ParsedAmount(display=format_currency(Decimal(canonical)), canonical=canonical)


def to_decimal(canonical: str) -> Decimal:
    """Convert a canonical amount string to Decimal (ValueError when blank or malformed)."""
    try:
        return _to_cents(Decimal(canonical))
    except (InvalidOperation, TypeError):
        raise ValueError(f"Not a canonical amount: {canonical!r}")
