"""
Tests for the discount band.

``least_discounted`` is the 3%-off price and ``most_discounted`` the
8%-off price; the older "minimum"/"maximum" names map to these two.
"""

import math
import random
import pytest
from decimal import Decimal

from apps.clients.models import Benefit
from apps.purchases.services import (
    DiscountQuote,
    compute_discount,
    is_discount_eligible,
)

NBSP = '\u00a0'


class FixedRandom:
    """Random source returning a constant."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


class TestEligibility:
    def test_product_discount_benefit_is_eligible(self):
        assert is_discount_eligible([
            Benefit.FREE_SHIPPING, Benefit.PRODUCT_DISCOUNT, Benefit.POINTS_PROGRAM
        ])

    def test_other_benefits_are_not_eligible(self):
        assert not is_discount_eligible([
            Benefit.FREE_SHIPPING, Benefit.POINTS_PROGRAM, Benefit.PRIORITY_SERVICE
        ])

    def test_missing_benefits_are_not_eligible(self):
        assert not is_discount_eligible(None)
        assert not is_discount_eligible([])


class TestComputeDiscount:
    """Tests for compute_discount."""

    def test_ineligible_returns_none(self):
        assert compute_discount(Decimal('1000.00'), False) is None

    @pytest.mark.parametrize('amount', ['0.01', '10.00', '1000.00', '98765.43'])
    def test_ineligible_returns_none_for_any_amount(self, amount):
        assert compute_discount(Decimal(amount), False) is None

    def test_band_for_one_thousand(self, seeded_rng):
        """1000.00 gives 970.00 (3% off) and 920.00 (8% off), span 50."""
        quote = compute_discount(Decimal('1000.00'), True, rng=seeded_rng)

        assert quote.least_discounted == Decimal('970.00')
        assert quote.most_discounted == Decimal('920.00')
        assert quote.span == 50
        assert 920 <= quote.suggested < 970

    def test_least_discounted_is_the_larger_price(self):
        """The 3%-off price is numerically above the 8%-off price."""
        quote = compute_discount(Decimal('1000.00'), True, rng=FixedRandom(0.5))

        assert quote.most_discounted < quote.least_discounted < Decimal('1000.00')

    def test_suggestion_lower_edge(self):
        quote = compute_discount(Decimal('1000.00'), True, rng=FixedRandom(0.0))

        assert quote.suggested == 920

    def test_suggestion_upper_edge(self):
        """random() < 1 keeps the suggestion below the 3%-off price."""
        quote = compute_discount(Decimal('1000.00'), True, rng=FixedRandom(0.999999))

        assert quote.suggested == 969

    def test_degenerate_band(self):
        """10.00 gives a band narrower than one unit: suggestion is floor(9.20)."""
        quote = compute_discount(Decimal('10.00'), True, rng=FixedRandom(0.99))

        assert quote.least_discounted == Decimal('9.70')
        assert quote.most_discounted == Decimal('9.20')
        assert quote.span == 0
        assert quote.suggested == 9

    def test_degenerate_band_ignores_random_source(self):
        """With a zero span the random source is never consulted."""

        class ExplodingRandom:
            def random(self):
                raise AssertionError('random source should not be used')

        quote = compute_discount(Decimal('12.00'), True, rng=ExplodingRandom())

        assert quote.suggested == math.floor(Decimal('12.00') * Decimal('0.92'))

    def test_suggestion_keeps_no_cents(self):
        quote = compute_discount(Decimal('1234.56'), True, rng=FixedRandom(0.3))

        assert isinstance(quote.suggested, int)

    @pytest.mark.parametrize('amount', [
        '0.01', '1.00', '12.49', '12.50', '13.00', '99.99', '150.00',
        '1000.00', '1500.00', '4321.09', '250000.00',
    ])
    def test_band_properties(self, amount):
        """most < least < amount and floor(most) <= suggested < floor(most) + max(span, 1)."""
        amount = Decimal(amount)
        rng = random.Random(7)

        for _ in range(25):
            quote = compute_discount(amount, True, rng=rng)
            floor_most = math.floor(quote.most_discounted)

            assert quote.most_discounted < quote.least_discounted < amount
            assert quote.span >= 0
            assert floor_most <= quote.suggested < floor_most + max(quote.span, 1)
            assert quote.suggested <= quote.least_discounted

    def test_same_seed_same_suggestion(self):
        first = compute_discount(Decimal('5000.00'), True, rng=random.Random(42))
        second = compute_discount(Decimal('5000.00'), True, rng=random.Random(42))

        assert first == second

    def test_unseeded_suggestions_vary(self):
        """Without an injected source suggestions are not fixed."""
        suggestions = {
            compute_discount(Decimal('100000.00'), True).suggested
            for _ in range(50)
        }

        assert len(suggestions) > 1

    def test_accepts_canonical_string(self):
        quote = compute_discount('1000.00', True, rng=FixedRandom(0.0))

        assert quote.least_discounted == Decimal('970.00')


class TestDiscountQuoteDisplay:
    def test_each_value_formatted(self):
        quote = DiscountQuote(
            least_discounted=Decimal('1197.5232'),
            most_discounted=Decimal('1135.7952'),
            span=61,
            suggested=1150,
        )

        assert quote.as_display() == {
            'least_discounted': f'R${NBSP}1.197,52',
            'most_discounted': f'R${NBSP}1.135,80',
            'suggested': f'R${NBSP}1.150,00',
        }
