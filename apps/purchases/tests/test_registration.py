"""
Tests for the purchase registration workflow.

The workflow runs against an in-memory ledger so every write attempt
can be counted.
"""

import pytest
from decimal import Decimal

from apps.purchases.exceptions import (
    CollaboratorUnavailableError,
    ValidationRejectedError,
)
from apps.purchases.services import (
    DiscountQuote,
    PurchaseRegistration,
    RegistrationState,
)
from apps.purchases.services.registration import GENERIC_FAILURE_MESSAGE
from .conftest import FakeLedger


class TestInput:
    """Client selection and amount entry."""

    def test_starts_idle(self, fake_ledger):
        registration = PurchaseRegistration(fake_ledger)

        assert registration.state is RegistrationState.IDLE
        assert registration.client is None
        assert registration.amount.is_empty

    def test_select_client(self, fake_ledger, desk_client):
        registration = PurchaseRegistration(fake_ledger)
        registration.select_client(desk_client)

        assert registration.state is RegistrationState.CLIENT_SELECTED

    def test_enter_amount(self, fake_ledger, desk_client):
        registration = PurchaseRegistration(fake_ledger)
        registration.select_client(desk_client)

        parsed = registration.enter_amount('150000')

        assert parsed.canonical == '1500.00'
        assert registration.state is RegistrationState.AMOUNT_ENTERED

    def test_amount_recomputed_from_scratch(self, fake_ledger, desk_client):
        """Each edit re-parses the whole buffer."""
        registration = PurchaseRegistration(fake_ledger)
        registration.select_client(desk_client)

        registration.enter_amount('1')
        registration.enter_amount('12')
        registration.enter_amount('123')
        assert registration.amount.canonical == '1.23'

        registration.enter_amount('12')
        assert registration.amount.canonical == '0.12'

    def test_clearing_amount_goes_back_to_client_selected(self, fake_ledger, desk_client):
        registration = PurchaseRegistration(fake_ledger)
        registration.select_client(desk_client)
        registration.enter_amount('500')

        registration.enter_amount('')

        assert registration.state is RegistrationState.CLIENT_SELECTED
        assert registration.amount.is_empty

    def test_search_uses_directory(self, fake_ledger):
        class Directory:
            def search_clients(self, search):
                return [f'match for {search}']

        registration = PurchaseRegistration(fake_ledger, directory=Directory())

        assert registration.search_clients('solar') == ['match for solar']

    def test_search_without_directory(self, fake_ledger):
        registration = PurchaseRegistration(fake_ledger)

        with pytest.raises(RuntimeError):
            registration.search_clients('solar')


class TestQuote:
    """Discount preview for the selected client."""

    def test_quote_for_eligible_client(self, fake_ledger, desk_client, seeded_rng):
        registration = PurchaseRegistration(fake_ledger, rng=seeded_rng)
        registration.select_client(desk_client)
        registration.enter_amount('100000')

        quote = registration.quote()

        assert isinstance(quote, DiscountQuote)
        assert quote.least_discounted == Decimal('970.00')
        assert quote.most_discounted == Decimal('920.00')
        assert 920 <= quote.suggested < 970

    def test_no_quote_for_ineligible_client(self, fake_ledger, desk_client_without_discount):
        registration = PurchaseRegistration(fake_ledger)
        registration.select_client(desk_client_without_discount)
        registration.enter_amount('100000')

        assert registration.quote() is None

    def test_no_quote_without_amount(self, fake_ledger, desk_client):
        registration = PurchaseRegistration(fake_ledger)
        registration.select_client(desk_client)

        assert registration.quote() is None

    def test_no_quote_without_client(self, fake_ledger):
        registration = PurchaseRegistration(fake_ledger)
        registration.enter_amount('100000')

        assert registration.quote() is None


class TestSubmitPreconditions:
    """Input checks that never reach the ledger."""

    def test_submit_without_client(self, fake_ledger):
        registration = PurchaseRegistration(fake_ledger)
        registration.enter_amount('150000')

        notice = registration.submit()

        assert not notice.ok
        assert notice.code == 'input_empty'
        assert notice.message == 'Select a client'
        assert fake_ledger.calls == []

    def test_client_checked_before_amount(self, fake_ledger):
        """With nothing entered, the missing client is reported first."""
        registration = PurchaseRegistration(fake_ledger)

        notice = registration.submit()

        assert notice.message == 'Select a client'
        assert registration.state is RegistrationState.IDLE

    def test_submit_without_amount(self, fake_ledger, desk_client):
        registration = PurchaseRegistration(fake_ledger)
        registration.select_client(desk_client)

        notice = registration.submit()

        assert notice.code == 'input_empty'
        assert notice.message == 'Enter the purchase amount'
        assert registration.state is RegistrationState.CLIENT_SELECTED
        assert fake_ledger.calls == []


class TestSubmit:
    """Ledger write and its outcomes."""

    def _ready(self, ledger, client, raw='150000'):
        registration = PurchaseRegistration(ledger)
        registration.select_client(client)
        registration.enter_amount(raw)
        return registration

    def test_successful_purchase(self, fake_ledger, desk_client):
        registration = self._ready(fake_ledger, desk_client)

        notice = registration.submit()

        assert notice.ok
        assert notice.code == 'purchase_registered'
        assert notice.redirect_to == '/'
        assert notice.redirect_delay == 0
        assert notice.purchase.amount == '1500.00'
        assert registration.state is RegistrationState.SUCCESS
        assert fake_ledger.calls == [{
            'client_name': 'Condomínio Solar',
            'client_tax_id': '22.333.444/0001-55',
            'amount': '1500.00',
        }]

    def test_redirect_delay_can_be_set(self, fake_ledger, desk_client):
        registration = PurchaseRegistration(fake_ledger, redirect_delay=1.0)
        registration.select_client(desk_client)
        registration.enter_amount('100')

        assert registration.submit().redirect_delay == 1.0

    def test_state_is_submitting_during_write(self, fake_ledger, desk_client):
        registration = self._ready(fake_ledger, desk_client)
        seen = []
        fake_ledger.on_create = lambda: seen.append(registration.state)

        registration.submit()

        assert seen == [RegistrationState.SUBMITTING]

    def test_double_submit_is_refused(self, fake_ledger, desk_client):
        """A second submit while the first is in flight never reaches the ledger."""
        registration = self._ready(fake_ledger, desk_client)
        inner = []
        fake_ledger.on_create = lambda: inner.append(registration.submit())

        notice = registration.submit()

        assert notice.ok
        assert inner[0].code == 'submission_in_progress'
        assert len(fake_ledger.calls) == 1

    def test_editing_during_write_keeps_submitting_state(self, fake_ledger, desk_client):
        registration = self._ready(fake_ledger, desk_client)
        seen = []

        def edit_amount():
            registration.enter_amount('999')
            seen.append(registration.state)

        fake_ledger.on_create = edit_amount

        registration.submit()

        assert seen == [RegistrationState.SUBMITTING]
        assert fake_ledger.calls[0]['amount'] == '1500.00'

    def test_submit_after_success_is_refused(self, fake_ledger, desk_client):
        registration = self._ready(fake_ledger, desk_client)
        registration.submit()

        notice = registration.submit()

        assert notice.code == 'already_submitted'
        assert len(fake_ledger.calls) == 1

    def test_ledger_message_shown_verbatim(self, desk_client):
        ledger = FakeLedger(error=ValidationRejectedError('amount: Ensure this value is greater than or equal to 0.00.'))
        registration = self._ready(ledger, desk_client)

        notice = registration.submit()

        assert not notice.ok
        assert notice.code == 'validation_rejected'
        assert notice.message == 'amount: Ensure this value is greater than or equal to 0.00.'

    def test_generic_message_when_ledger_gives_none(self, desk_client):
        ledger = FakeLedger(error=CollaboratorUnavailableError())
        registration = self._ready(ledger, desk_client)

        notice = registration.submit()

        assert notice.code == 'collaborator_unavailable'
        assert notice.message == GENERIC_FAILURE_MESSAGE

    def test_failure_keeps_input_for_retry(self, desk_client):
        ledger = FakeLedger(error=CollaboratorUnavailableError('connection refused'))
        registration = self._ready(ledger, desk_client)

        registration.submit()

        assert registration.state is RegistrationState.AMOUNT_ENTERED
        assert registration.client is desk_client
        assert registration.amount.canonical == '1500.00'
        assert registration.last_notice.message == 'connection refused'

        ledger.error = None
        notice = registration.submit()

        assert notice.ok
        assert len(ledger.calls) == 2

    def test_no_automatic_retry(self, desk_client):
        ledger = FakeLedger(error=CollaboratorUnavailableError('timeout'))
        registration = self._ready(ledger, desk_client)

        registration.submit()

        assert len(ledger.calls) == 1

    def test_unexpected_error_propagates(self, desk_client):
        ledger = FakeLedger(error=KeyError('boom'))
        registration = self._ready(ledger, desk_client)

        with pytest.raises(KeyError):
            registration.submit()

        assert registration.state is RegistrationState.AMOUNT_ENTERED

        ledger.error = None
        assert registration.submit().ok
