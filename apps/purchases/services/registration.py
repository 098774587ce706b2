"""
Purchase registration workflow.

Drives one purchase entry at the desk: pick a client, type the amount,
look at the discount suggestion, submit. The workflow talks to two
collaborators it is given at construction: a client directory (for search)
and a purchase ledger (for the write).

States::

    IDLE -> CLIENT_SELECTED -> AMOUNT_ENTERED -> SUBMITTING -> SUCCESS
                                     ^                |
                                     +---- FAILED ----+

A failed submission keeps the selected client and the typed amount so the
operator can retry straight away. Nothing is retried automatically.
"""

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from django.conf import settings

from .currency import ParsedAmount, parse_raw_digits
from .discounts import DiscountQuote, compute_discount, is_discount_eligible
from ..exceptions import (
    PurchaseServiceError,
    InputEmptyError,
    SubmissionInProgressError,
)

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = 'Failed to register purchase'
SUCCESS_MESSAGE = 'Purchase registered successfully!'


class RegistrationState(str, Enum):
    IDLE = 'idle'
    CLIENT_SELECTED = 'client_selected'
    AMOUNT_ENTERED = 'amount_entered'
    SUBMITTING = 'submitting'
    SUCCESS = 'success'
    FAILED = 'failed'


@dataclass(frozen=True)
class Notice:
    """User-visible outcome of a workflow step."""

    level: str
    message: str
    code: str
    redirect_to: Optional[str] = None
    redirect_delay: float = 0.0
    purchase: object = None

    @property
    def ok(self) -> bool:
        return self.level == 'success'


class PurchaseRegistration:
    """
    One operator's purchase entry.

    Args:
        ledger: Object with ``create_purchase(client_name=, client_tax_id=, amount=)``
        directory: Object with ``search_clients(search)``; only needed for
            :meth:`search_clients`
        rng: Random source for discount suggestions
        redirect_delay: Seconds to keep the confirmation on screen before
            leaving the form; PURCHASE_REDIRECT_DELAY when omitted

    Example::

        from apps.purchases.services import ledger
        from apps.clients import services as directory

        registration = PurchaseRegistration(ledger, directory=directory)
        registration.select_client(client)
        registration.enter_amount('150000')   # R$ 1.500,00
        notice = registration.submit()
    """

    def __init__(self, ledger, *, directory=None, rng=None, redirect_delay=None):
        self.ledger = ledger
        self.directory = directory
        self.rng = rng
        if redirect_delay is None:
            redirect_delay = getattr(settings, 'PURCHASE_REDIRECT_DELAY', 1.0)
        self.redirect_delay = redirect_delay

        self.state = RegistrationState.IDLE
        self.client = None
        self.amount = ParsedAmount(display='', canonical='')
        self.last_notice: Optional[Notice] = None
        self._submit_lock = threading.Lock()

    # -- input -------------------------------------------------------------

    def search_clients(self, term: str):
        """Candidate clients for the search box."""
        if self.directory is None:
            raise RuntimeError('PurchaseRegistration was created without a client directory')
        return self.directory.search_clients(term)

    def select_client(self, client) -> None:
        self.client = client
        self._settle()

    def enter_amount(self, raw_input: str) -> ParsedAmount:
        """Re-parse the whole amount buffer (called on every edit)."""
        self.amount = parse_raw_digits(raw_input)
        self._settle()
        return self.amount

    def quote(self) -> Optional[DiscountQuote]:
        """Discount band for the current client and amount, if any."""
        if self.client is None or self.amount.is_empty:
            return None
        eligible = is_discount_eligible(getattr(self.client, 'benefits', None))
        return compute_discount(self.amount.as_decimal(), eligible, rng=self.rng)

    # -- submission --------------------------------------------------------

    def submit(self) -> Notice:
        """
        Submit the purchase to the ledger.

        Preconditions are checked in order (client selected, amount entered)
        and fail without touching the ledger or changing state. While a
        submission is running, further calls are refused.
        """
        if not self._submit_lock.acquire(blocking=False):
            return self._notify_error(SubmissionInProgressError())

        try:
            if self.state is RegistrationState.SUCCESS:
                return self._notify(Notice(
                    level='error',
                    message='This purchase was already registered',
                    code='already_submitted',
                ))

            try:
                self._check_ready()
            except InputEmptyError as e:
                return self._notify_error(e)

            return self._write()
        finally:
            self._submit_lock.release()

    def _check_ready(self) -> None:
        if self.client is None:
            raise InputEmptyError('Select a client')
        if self.amount.is_empty:
            raise InputEmptyError('Enter the purchase amount')

    def _write(self) -> Notice:
        self.state = RegistrationState.SUBMITTING
        try:
            purchase = self.ledger.create_purchase(
                client_name=self.client.name,
                client_tax_id=self.client.tax_id,
                amount=self.amount.canonical,
            )
        except PurchaseServiceError as e:
            logger.warning("Purchase submission for %r failed: %s", self.client.name, e)
            notice = self._notify_error(e, fallback=GENERIC_FAILURE_MESSAGE)
            self.state = RegistrationState.FAILED
            self._settle()
            return notice
        except Exception:
            self.state = RegistrationState.FAILED
            self._settle()
            raise

        self.state = RegistrationState.SUCCESS
        return self._notify(Notice(
            level='success',
            message=SUCCESS_MESSAGE,
            code='purchase_registered',
            redirect_to=getattr(settings, 'PURCHASE_REDIRECT_TO', '/'),
            redirect_delay=self.redirect_delay,
            purchase=purchase,
        ))

    # -- helpers -----------------------------------------------------------

    def _settle(self) -> None:
        """Derive the resting state from what has been entered."""
        if self.state is RegistrationState.SUBMITTING:
            return
        if self.client is not None and not self.amount.is_empty:
            self.state = RegistrationState.AMOUNT_ENTERED
        elif self.client is not None:
            self.state = RegistrationState.CLIENT_SELECTED
        else:
            self.state = RegistrationState.IDLE

    def _notify_error(self, error: PurchaseServiceError, fallback: Optional[str] = None) -> Notice:
        return self._notify(Notice(
            level='error',
            message=error.message or fallback or str(error),
            code=error.code,
        ))

    def _notify(self, notice: Notice) -> Notice:
        self.last_notice = notice
        return notice
