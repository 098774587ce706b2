"""Client listing and search service."""

from django.db.models import Q, QuerySet
from typing import Optional

from ..models import Client


def list_clients() -> QuerySet[Client]:
    """Return every client, newest registration first."""
    return Client.objects.order_by('-registered_at')


def search_clients(search: Optional[str] = None) -> QuerySet[Client]:
    """
    Search clients the way the purchase desk filters its client table.

    Args:
        search: Case-insensitive substring of the name, or a raw substring
            of the tax id as stored

    Returns:
        Filtered QuerySet of Client, newest registration first
    """
    queryset = list_clients()

    if search:
        queryset = queryset.filter(
            Q(name__icontains=search) |
            Q(tax_id__contains=search)
        )

    return queryset
