"""
Discount suggestions for clients holding the product-discount benefit.

Given a purchase amount, the desk shows the 3%-off price, the 8%-off price
and a random whole-unit price between them to open a negotiation with.

Naming: ``least_discounted`` is the 3%-off price (the larger number) and
``most_discounted`` the 8%-off price (the smaller number). Older screens
called these "minimum" and "maximum" discount.
"""

import math
import random
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Union

from django.conf import settings

from apps.clients.models import Benefit
from .currency import format_currency

Number = Union[Decimal, int, float, str]


@dataclass(frozen=True)
class DiscountQuote:
    """Transient price band for one purchase amount. Never persisted."""

    least_discounted: Decimal
    most_discounted: Decimal
    span: int
    suggested: int

    def as_display(self) -> dict:
        """Each value formatted on its own for the discount panel."""
        return {
            'least_discounted': format_currency(self.least_discounted),
            'most_discounted': format_currency(self.most_discounted),
            'suggested': format_currency(self.suggested),
        }


def is_discount_eligible(benefits: Optional[Iterable[str]]) -> bool:
    """True iff the benefit selection includes the product discount."""
    return Benefit.PRODUCT_DISCOUNT in list(benefits or [])


def compute_discount(
    amount: Number,
    eligible: bool,
    *,
    rng: Optional[random.Random] = None,
) -> Optional[DiscountQuote]:
    """
    Compute the discount band and a suggested price.

    Args:
        amount: Purchase amount in major units
        eligible: Whether the client holds the product-discount benefit
        rng: Random source for the suggestion; the module-level generator
            when omitted, so repeated calls give different suggestions

    Returns:
        DiscountQuote, or None when the client is not eligible

    The suggestion is ``floor(most) + floor(random() * span)`` where
    ``span = floor(least - most)``. For small amounts the span is zero and
    the suggestion is ``floor(most)``.
    """
    if not eligible:
        return None

    amount = Decimal(str(amount))
    least_rate = getattr(settings, 'DISCOUNT_LEAST_RATE', Decimal('0.97'))
    most_rate = getattr(settings, 'DISCOUNT_MOST_RATE', Decimal('0.92'))

    least_discounted = amount * least_rate
    most_discounted = amount * most_rate
    span = math.floor(least_discounted - most_discounted)

    floor_most = math.floor(most_discounted)
    if span <= 0:
        suggested = floor_most
    else:
        source = rng if rng is not None else random
        suggested = floor_most + math.floor(source.random() * span)

    return DiscountQuote(
        least_discounted=least_discounted,
        most_discounted=most_discounted,
        span=span,
        suggested=suggested,
    )
