"""Client registration and editing service."""

import logging
from django.core.exceptions import ValidationError
from django.db import transaction, IntegrityError
from uuid import UUID
from typing import Any, Dict, List

from ..models import Client, validate_benefits
from .exceptions import (
    ClientNotFoundError,
    ClientValidationError,
    DuplicateTaxIdError,
    InvalidBenefitsError,
)

logger = logging.getLogger(__name__)

TEXT_FIELDS = ['name', 'city', 'neighborhood', 'street', 'street_number', 'phone', 'tax_id']
EDITABLE_FIELDS = TEXT_FIELDS + ['benefits']


def _check_benefits(benefits: List[str]) -> None:
    errors = validate_benefits(benefits)
    if errors:
        raise InvalidBenefitsError(' '.join(errors))


def _check_tax_id_free(tax_id: str, exclude_id: UUID = None) -> None:
    queryset = Client.objects.filter(tax_id=tax_id)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateTaxIdError(f"A client with tax id '{tax_id}' already exists")


def _validate_and_save(client: Client) -> Client:
    """Run model validation and persist, mapping failures to domain errors."""
    try:
        client.full_clean(exclude=['tax_id_digits'], validate_unique=False)
    except ValidationError as e:
        errors = e.message_dict
        message = '; '.join(
            f"{field}: {' '.join(messages)}" for field, messages in errors.items()
        )
        raise ClientValidationError(message, errors=errors)

    try:
        with transaction.atomic():
            client.save()
    except IntegrityError:
        raise DuplicateTaxIdError(f"A client with tax id '{client.tax_id}' already exists")

    return client


@transaction.atomic
def create_client(
    *,
    name: str,
    city: str,
    neighborhood: str,
    street: str,
    street_number: str,
    phone: str,
    tax_id: str,
    benefits: List[str],
) -> Client:
    """
    Register a new loyalty client.

    Args:
        name: Client (company) name
        city: City
        neighborhood: Neighborhood
        street: Street
        street_number: Street number
        phone: Contact phone
        tax_id: Tax id (unique across clients)
        benefits: Exactly three distinct Benefit values

    Returns:
        Created Client instance

    Raises:
        InvalidBenefitsError: If the benefit selection is invalid
        DuplicateTaxIdError: If the tax id is already registered
        ClientValidationError: If a required field is blank
    """
    fields = {
        'name': name,
        'city': city,
        'neighborhood': neighborhood,
        'street': street,
        'street_number': street_number,
        'phone': phone,
        'tax_id': tax_id,
    }
    fields = {key: (value or '').strip() for key, value in fields.items()}
    benefits = list(benefits or [])

    _check_benefits(benefits)
    _check_tax_id_free(fields['tax_id'])

    client = _validate_and_save(Client(benefits=benefits, **fields))
    logger.info("Registered client %s (%s)", client.id, client.tax_id)
    return client


@transaction.atomic
def update_client(
    *,
    client_id: UUID,
    data: Dict[str, Any]
) -> Client:
    """
    Edit an existing client.

    Only the fields present in ``data`` change; the same rules as
    registration apply to the resulting record.

    Raises:
        ClientNotFoundError: If client doesn't exist
        InvalidBenefitsError: If the new benefit selection is invalid
        DuplicateTaxIdError: If the new tax id belongs to another client
        ClientValidationError: If a required field becomes blank
    """
    try:
        client = (
            Client.objects
            .select_for_update()
            .get(id=client_id)
        )
    except Client.DoesNotExist:
        raise ClientNotFoundError(f"Client {client_id} not found")

    for field, value in data.items():
        if field not in EDITABLE_FIELDS:
            continue
        if field in TEXT_FIELDS:
            value = (value or '').strip()
        setattr(client, field, value)

    if 'benefits' in data:
        _check_benefits(client.benefits)
    if 'tax_id' in data:
        _check_tax_id_free(client.tax_id, exclude_id=client.id)

    client = _validate_and_save(client)
    logger.info("Updated client %s", client.id)
    return client


def get_client_by_id(*, client_id: UUID) -> Client:
    """
    Get client by ID.

    Raises:
        ClientNotFoundError: If client doesn't exist
    """
    try:
        return Client.objects.get(id=client_id)
    except (Client.DoesNotExist, ValidationError):
        raise ClientNotFoundError(f"Client {client_id} not found")


def get_client_by_tax_id(*, tax_id: str) -> Client:
    """
    Get client by tax id, comparing digits only.

    ``12.345.678/0001-90`` and ``12345678000190`` find the same client.

    Raises:
        ClientNotFoundError: If no client matches
    """
    digits = Client.digits_only(tax_id)
    client = Client.objects.filter(tax_id_digits=digits).first() if digits else None
    if client is None:
        raise ClientNotFoundError(f"Client with tax id '{tax_id}' not found")
    return client


def get_client_by_name(*, name: str) -> Client:
    """
    Get client by name, case-insensitive exact match.

    Raises:
        ClientNotFoundError: If no client matches
    """
    client = Client.objects.filter(name__iexact=(name or '').strip()).first()
    if client is None:
        raise ClientNotFoundError(f"Client '{name}' not found")
    return client
