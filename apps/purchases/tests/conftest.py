import pytest
import random
from decimal import Decimal
from types import SimpleNamespace
from rest_framework.test import APIClient
from apps.clients.models import Client, Benefit
from apps.purchases.models import Purchase


@pytest.fixture
def api_client():
    """Return an API client for the desk operator."""
    return APIClient()


@pytest.fixture
def seeded_rng():
    """Reproducible random source for discount suggestions."""
    return random.Random(20240611)


@pytest.fixture
def eligible_client(db):
    """Client holding the product-discount benefit."""
    return Client.objects.create(
        name='Condomínio Solar',
        city='Sorocaba',
        neighborhood='Campolim',
        street='Avenida Antônio Carlos Comitre',
        street_number='510',
        phone='(15) 3222-0101',
        tax_id='22.333.444/0001-55',
        benefits=[
            Benefit.PRODUCT_DISCOUNT,
            Benefit.FREE_SHIPPING,
            Benefit.POOL_TECHNICAL_SUPPORT,
        ],
    )


@pytest.fixture
def ineligible_client(db):
    """Client without the product-discount benefit."""
    return Client.objects.create(
        name='Academia Onda',
        city='Sorocaba',
        neighborhood='Centro',
        street='Rua XV de Novembro',
        street_number='33',
        phone='(15) 3211-4040',
        tax_id='66.777.888/0001-99',
        benefits=[
            Benefit.FREE_SHIPPING,
            Benefit.POINTS_PROGRAM,
            Benefit.PRIORITY_SERVICE,
        ],
    )


@pytest.fixture
def recorded_purchase(db, eligible_client):
    """A purchase already in the ledger."""
    return Purchase.objects.create(
        client_name=eligible_client.name,
        client_tax_id=eligible_client.tax_id,
        amount=Decimal('780.50'),
    )


class FakeLedger:
    """In-memory ledger that records every write attempt."""

    def __init__(self, error=None):
        self.calls = []
        self.error = error
        self.on_create = None

    def create_purchase(self, **fields):
        self.calls.append(fields)
        if self.on_create is not None:
            self.on_create()
        if self.error is not None:
            raise self.error
        return SimpleNamespace(id=len(self.calls), **fields)


@pytest.fixture
def fake_ledger():
    return FakeLedger()


@pytest.fixture
def desk_client():
    """Client record as the workflow sees it (no database needed)."""
    return SimpleNamespace(
        name='Condomínio Solar',
        tax_id='22.333.444/0001-55',
        benefits=['product_discount', 'free_shipping', 'pool_technical_support'],
    )


@pytest.fixture
def desk_client_without_discount():
    return SimpleNamespace(
        name='Academia Onda',
        tax_id='66.777.888/0001-99',
        benefits=['free_shipping', 'points_program', 'priority_service'],
    )
