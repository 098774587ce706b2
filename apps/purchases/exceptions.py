"""
Domain exceptions for purchases app.

Every failure of a purchase submission falls in one of three kinds:
input missing before any I/O, storage unreachable, or the ledger rejecting
the record. The registration workflow turns all of them into notices.
"""
from rest_framework.exceptions import APIException


class PurchaseServiceError(Exception):
    """Base exception for purchase service errors."""

    default_message = 'Failed to register purchase'
    code = 'purchase_error'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or ''


class InputEmptyError(PurchaseServiceError):
    """Raised when no client is selected or no amount was entered."""
    default_message = 'Required input is missing'
    code = 'input_empty'


class CollaboratorUnavailableError(PurchaseServiceError):
    """Raised when the client directory or purchase ledger cannot be reached."""
    default_message = 'Purchase storage is unavailable'
    code = 'collaborator_unavailable'


class ValidationRejectedError(PurchaseServiceError):
    """Raised when the ledger rejects a record as invalid."""
    default_message = 'Purchase record was rejected'
    code = 'validation_rejected'


class SubmissionInProgressError(PurchaseServiceError):
    """Raised when a submission is attempted while another is running."""
    default_message = 'A submission is already in progress'
    code = 'submission_in_progress'


class PurchaseNotFoundError(APIException):
    """Purchase record not found."""
    status_code = 404
    default_detail = 'Purchase record not found.'
    default_code = 'purchase_not_found'


class ClientNotFoundAPIError(APIException):
    """Selected client does not exist."""
    status_code = 404
    default_detail = 'Client not found.'
    default_code = 'client_not_found'
