"""Domain-specific exceptions for clients services."""


class ClientsServiceError(Exception):
    """Base exception for clients services."""
    pass


class ClientNotFoundError(ClientsServiceError):
    """Raised when client does not exist."""
    pass


class DuplicateTaxIdError(ClientsServiceError):
    """Raised when another client already holds the tax id."""
    pass


class InvalidBenefitsError(ClientsServiceError):
    """Raised when the benefit selection is not exactly three known, distinct benefits."""
    pass


class ClientValidationError(ClientsServiceError):
    """Raised when required client fields are missing or invalid."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors or {}
