"""Services for the loyalty client directory."""

from .exceptions import (
    ClientsServiceError,
    ClientNotFoundError,
    DuplicateTaxIdError,
    InvalidBenefitsError,
    ClientValidationError,
)
from .client_management import (
    create_client,
    update_client,
    get_client_by_id,
    get_client_by_tax_id,
    get_client_by_name,
)
from .client_search import (
    list_clients,
    search_clients,
)

__all__ = [
    # Exceptions
    'ClientsServiceError',
    'ClientNotFoundError',
    'DuplicateTaxIdError',
    'InvalidBenefitsError',
    'ClientValidationError',
    # Client Management
    'create_client',
    'update_client',
    'get_client_by_id',
    'get_client_by_tax_id',
    'get_client_by_name',
    # Client Search
    'list_clients',
    'search_clients',
]
