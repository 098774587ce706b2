"""
Purchase ledger: the append-only store of loyalty purchases.

Records are created once and never updated or deleted. The purchase
timestamp is assigned here, not by the caller.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction, DatabaseError
from django.db.models import QuerySet, Sum
from django.utils import timezone

from ..models import Purchase
from ..exceptions import CollaboratorUnavailableError, ValidationRejectedError

logger = logging.getLogger(__name__)


def _recent_limit() -> int:
    return getattr(settings, 'RECENT_PURCHASES_LIMIT', 10)


def create_purchase(
    *,
    client_name: str,
    client_tax_id: str,
    amount: Union[Decimal, str],
) -> Purchase:
    """
    Record a purchase.

    Args:
        client_name: Client name, copied into the record
        client_tax_id: Client tax id, copied into the record
        amount: Non-negative amount in major units (canonical decimal string
            or Decimal)

    Returns:
        The created Purchase

    Raises:
        ValidationRejectedError: If a field is missing or the amount is not
            a valid non-negative number
        CollaboratorUnavailableError: If the database cannot be reached

    The write is atomic: the purchase is either fully stored or not at all.
    """
    purchase = Purchase(
        client_name=(client_name or '').strip(),
        client_tax_id=(client_tax_id or '').strip(),
        purchased_at=timezone.now(),
        amount=amount,
    )

    try:
        purchase.full_clean()
    except ValidationError as e:
        message = '; '.join(
            f"{field}: {' '.join(messages)}" for field, messages in e.message_dict.items()
        )
        logger.warning("Purchase rejected for %r: %s", client_name, message)
        raise ValidationRejectedError(message)

    try:
        with transaction.atomic():
            purchase.save(force_insert=True)
    except DatabaseError as e:
        logger.error("Could not store purchase for %r: %s", client_name, e)
        raise CollaboratorUnavailableError(f"Could not store purchase: {e}")

    logger.info(
        "Recorded purchase %s: %s (%s) %s",
        purchase.id, purchase.client_name, purchase.client_tax_id, purchase.amount
    )
    return purchase


def list_purchases(
    *,
    client_name: Optional[str] = None,
    limit: Optional[int] = None,
) -> QuerySet[Purchase]:
    """
    List purchases, newest first.

    Args:
        client_name: Only purchases recorded under exactly this client name
        limit: Maximum number of purchases to return (all when None)
    """
    queryset = Purchase.objects.order_by('-purchased_at')

    if client_name:
        queryset = queryset.filter(client_name=client_name)

    if limit is not None:
        queryset = queryset[:limit]

    return queryset


def get_client_purchase_total(*, client_name: str) -> Decimal:
    """Sum of every purchase recorded under exactly this client name (0 when none)."""
    total = Purchase.objects.filter(client_name=client_name).aggregate(total=Sum('amount'))['total']
    return total if total is not None else Decimal('0.00')


def list_recent_purchases() -> QuerySet[Purchase]:
    """The landing-page feed: the last RECENT_PURCHASES_LIMIT purchases."""
    return list_purchases(limit=_recent_limit())


def get_purchase_by_id(*, purchase_id) -> Optional[Purchase]:
    """Return the purchase or None when it does not exist."""
    try:
        return Purchase.objects.filter(id=purchase_id).first()
    except ValidationError:
        return None


def get_purchase_summary(*, today: Optional[date] = None) -> dict:
    """
    Landing-page figures computed over the recent purchase feed.

    Returns:
        dict with:
            - purchases: the recent purchases (newest first)
            - count: how many purchases are in the feed
            - today_total: sum of feed purchases made today (local time)
            - average: mean amount of the feed (0 when empty)
    """
    today = today or timezone.localdate()
    purchases = list(list_recent_purchases())

    total = sum((p.amount for p in purchases), Decimal('0.00'))
    today_total = sum(
        (p.amount for p in purchases if timezone.localtime(p.purchased_at).date() == today),
        Decimal('0.00')
    )
    average = (total / len(purchases)).quantize(Decimal('0.01')) if purchases else Decimal('0.00')

    return {
        'purchases': purchases,
        'count': len(purchases),
        'today_total': today_total,
        'average': average,
    }
