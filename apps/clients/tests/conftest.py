import pytest
from rest_framework.test import APIClient
from apps.clients.models import Client, Benefit


@pytest.fixture
def api_client():
    """Return an API client for the desk operator."""
    return APIClient()


@pytest.fixture
def client_payload():
    """Valid registration payload."""
    return {
        'name': 'Aqua Clean Ltda',
        'city': 'Campinas',
        'neighborhood': 'Cambuí',
        'street': 'Rua Coronel Quirino',
        'street_number': '1200',
        'phone': '(19) 3232-1000',
        'tax_id': '12.345.678/0001-90',
        'benefits': [
            Benefit.PRODUCT_DISCOUNT,
            Benefit.FREE_SHIPPING,
            Benefit.PRIORITY_SERVICE,
        ],
    }


@pytest.fixture
def discount_client(db):
    """Client holding the product-discount benefit."""
    return Client.objects.create(
        name='Piscinas Azul',
        city='Santos',
        neighborhood='Gonzaga',
        street='Avenida Ana Costa',
        street_number='450',
        phone='(13) 3284-5500',
        tax_id='11.222.333/0001-44',
        benefits=[
            Benefit.PRODUCT_DISCOUNT,
            Benefit.POINTS_PROGRAM,
            Benefit.POOL_TECHNICAL_SUPPORT,
        ],
    )


@pytest.fixture
def plain_client(db):
    """Client without the product-discount benefit."""
    return Client.objects.create(
        name='Hotel Maré Alta',
        city='Guarujá',
        neighborhood='Pitangueiras',
        street='Rua Mário Ribeiro',
        street_number='78',
        phone='(13) 3386-2000',
        tax_id='55.666.777/0001-88',
        benefits=[
            Benefit.FREE_SHIPPING,
            Benefit.POINTS_PROGRAM,
            Benefit.PRIORITY_SERVICE,
        ],
    )
