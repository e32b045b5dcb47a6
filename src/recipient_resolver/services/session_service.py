"""Recipient session — state of the recipient step of a payment flow.

Holds the query, the search results and the chosen destination, and gates
progression on the destination validator's outcome.  All mutation happens
on one event loop; late async results are checked against the current
query or destination before they are applied.
"""

from collections.abc import Callable
from decimal import Decimal
from enum import StrEnum

from loguru import logger

from recipient_resolver.core.config import Settings
from recipient_resolver.lib.directory import BackendDirectory, BaseDirectory
from recipient_resolver.lib.ledger import BaseLedgerInfoSource, DestinationInfo, RippledLedgerInfoSource
from recipient_resolver.lib.store import BaseAccountStore
from recipient_resolver.schemas.decision import DecisionAction, DecisionCategory, DecisionKind, DecisionOutcome
from recipient_resolver.schemas.recipient import (
    Candidate,
    CandidateSection,
    Destination,
    ScanResult,
    SearchState,
    SectionKind,
)
from recipient_resolver.services.describe_service import AccountDescriber
from recipient_resolver.services.local_search_service import account_candidate, contact_candidate
from recipient_resolver.services.remote_search_service import DEFAULT_MIN_QUERY_LENGTH, RemoteCandidateSource
from recipient_resolver.services.search_service import DEFAULT_DEBOUNCE_SECONDS, SearchAggregator
from recipient_resolver.services.validation_service import (
    DEFAULT_ACTIVATION_RESERVE,
    DestinationValidator,
    resolve_tag,
)


class SessionPhase(StrEnum):
    """Where the recipient step currently stands."""

    SELECTING = "selecting"
    VALIDATING = "validating"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    AWAITING_TAG = "awaiting_tag"
    BLOCKED = "blocked"
    COMPLETE = "complete"


class NoDestinationError(Exception):
    """Raised when proceeding without a selected destination."""


class ValidationInProgressError(Exception):
    """Raised when a validation is started while another is in flight."""


class InvalidSessionActionError(Exception):
    """Raised when an action is not offered in the current phase."""


_PHASE_BY_CATEGORY: dict[DecisionCategory, SessionPhase] = {
    DecisionCategory.APPROVE: SessionPhase.COMPLETE,
    DecisionCategory.WARN: SessionPhase.AWAITING_CONFIRMATION,
    DecisionCategory.SUSPEND: SessionPhase.AWAITING_TAG,
    DecisionCategory.REJECT: SessionPhase.BLOCKED,
    # Lookup failures are retryable straight away
    DecisionCategory.FAIL: SessionPhase.SELECTING,
}

# Outcomes whose "back" keeps the current selection
_BACK_KEEPS_SELECTION = frozenset({DecisionKind.SELF_SEND})


class RecipientSession:
    """One recipient-resolution session.

    Contacts and accounts are snapshotted from the store when the session
    starts.
    """

    def __init__(
        self,
        *,
        source_address: str,
        store: BaseAccountStore,
        directory: BaseDirectory | None,
        ledger: BaseLedgerInfoSource,
        amount: Decimal | str | float | None = None,
        is_iou: bool = False,
        min_remote_query_length: int = DEFAULT_MIN_QUERY_LENGTH,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        activation_reserve: Decimal = DEFAULT_ACTIVATION_RESERVE,
        on_search_change: Callable[[SearchState], None] | None = None,
    ) -> None:
        self.source_address = source_address
        self.amount = amount
        self.is_iou = is_iou

        self._contacts = tuple(store.list_contacts())
        self._accounts = tuple(store.list_owned_accounts())

        self._aggregator = SearchAggregator(
            self._contacts,
            self._accounts,
            RemoteCandidateSource(directory, min_query_length=min_remote_query_length),
            AccountDescriber(self._contacts, self._accounts, directory),
            exclude_address=source_address,
            debounce_seconds=debounce_seconds,
            on_change=on_search_change,
        )
        self._validator = DestinationValidator(ledger, activation_reserve=activation_reserve)

        self._destination: Destination | None = None
        self._destination_info: DestinationInfo | None = None
        self._outcome: DecisionOutcome | None = None
        self._phase = SessionPhase.SELECTING

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        source_address: str,
        store: BaseAccountStore,
        amount: Decimal | str | float | None = None,
        is_iou: bool = False,
        directory: BaseDirectory | None = None,
        ledger: BaseLedgerInfoSource | None = None,
    ) -> "RecipientSession":
        """Build a session wired to the configured backend and ledger node."""
        if directory is None:
            directory = BackendDirectory(base_url=settings.backend_base_url, timeout=settings.backend_timeout)
        if ledger is None:
            ledger = RippledLedgerInfoSource(
                node_url=settings.ledger_node_url,
                advisory_url=settings.backend_base_url,
                timeout=settings.ledger_timeout,
            )
        return cls(
            source_address=source_address,
            store=store,
            directory=directory,
            ledger=ledger,
            amount=amount,
            is_iou=is_iou,
            min_remote_query_length=settings.remote_search_min_length,
            debounce_seconds=settings.search_debounce_seconds,
            activation_reserve=settings.activation_reserve,
        )

    # --- State ---

    @property
    def search_state(self) -> SearchState:
        return self._aggregator.state

    @property
    def query(self) -> str:
        return self._aggregator.state.query

    @property
    def destination(self) -> Destination | None:
        return self._destination

    @property
    def destination_info(self) -> DestinationInfo | None:
        return self._destination_info

    @property
    def outcome(self) -> DecisionOutcome | None:
        return self._outcome

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def can_proceed(self) -> bool:
        return self._destination is not None and self._phase is SessionPhase.SELECTING

    @property
    def is_complete(self) -> bool:
        return self._phase is SessionPhase.COMPLETE

    # --- Search ---

    async def on_text_changed(self, text: str) -> SearchState:
        """Handle typed or pasted input."""
        return await self._aggregator.on_query_changed(text)

    async def on_scan(self, scan: ScanResult) -> Destination | None:
        """Handle a scanned destination.

        When the scanned text is an address it becomes the destination as
        soon as its display info is resolved, without a separate selection.
        Otherwise it is searched like typed text.

        Returns:
            The promoted destination, or None if nothing was promoted.
        """
        await self._aggregator.on_query_changed(scan.to, tag_hint=scan.tag)
        sequence = self._aggregator.sequence
        state = await self._aggregator.wait_until_settled()

        if state.resolved is None or self._aggregator.sequence != sequence:
            return None

        logger.info("Promoting scanned address to destination")
        self._set_destination(state.resolved.to_destination())
        return self._destination

    async def wait_for_search(self) -> SearchState:
        return await self._aggregator.wait_until_settled()

    def select(self, candidate: Candidate) -> Destination | None:
        """Select a candidate, or deselect it if it is already the destination."""
        current = self._destination
        if current is not None and current.address == candidate.address and current.name == candidate.name:
            self._set_destination(None)
        else:
            self._set_destination(candidate.to_destination())
        return self._destination

    def clear_search(self) -> None:
        """Forget the query, the results and the destination."""
        self._aggregator.clear()
        self._set_destination(None)

    def sections(self) -> list[CandidateSection]:
        """Candidate groups for the current query (default listing when empty)."""
        if not self.query:
            return self.default_sections()

        results = self.search_state.results
        return [
            CandidateSection(
                kind=SectionKind.SEARCH_RESULTS,
                candidates=results,
                empty_message_key=None if results else "send.noSearchResult",
            )
        ]

    def default_sections(self) -> list[CandidateSection]:
        """Own accounts (minus the sender) and contacts."""
        sections: list[CandidateSection] = []

        own = tuple(account_candidate(a) for a in self._accounts if a.address != self.source_address)
        if own:
            sections.append(CandidateSection(kind=SectionKind.MY_ACCOUNTS, candidates=own))

        contacts = tuple(contact_candidate(c) for c in self._contacts)
        sections.append(
            CandidateSection(
                kind=SectionKind.CONTACTS,
                candidates=contacts,
                empty_message_key=None if contacts else "send.noContact",
            )
        )
        return sections

    # --- Validation ---

    async def proceed(self) -> DecisionOutcome:
        """Validate the current destination and move to the resulting phase.

        Raises:
            NoDestinationError: If no destination is selected.
            ValidationInProgressError: If a validation is already running.
        """
        if self._phase is SessionPhase.VALIDATING:
            msg = "A destination validation is already in progress"
            raise ValidationInProgressError(msg)
        if self._destination is None:
            msg = "Select a destination before continuing"
            raise NoDestinationError(msg)

        destination = self._destination
        self._phase = SessionPhase.VALIDATING
        try:
            outcome = await self._validator.validate(destination, self.source_address, self.amount, self.is_iou)
        finally:
            self._phase = SessionPhase.SELECTING

        if self._destination != destination:
            # Selection changed mid-flight; the outcome belongs to the old one
            return outcome

        self._outcome = outcome
        if outcome.info is not None:
            self._destination_info = outcome.info
        self._phase = _PHASE_BY_CATEGORY[outcome.category]
        return outcome

    def confirm(self) -> None:
        """Accept a continuable warning."""
        if self._phase is not SessionPhase.AWAITING_CONFIRMATION or not self._outcome_allows(DecisionAction.CONTINUE):
            msg = "No warning awaiting confirmation"
            raise InvalidSessionActionError(msg)
        self._phase = SessionPhase.COMPLETE

    def go_back(self) -> None:
        """Acknowledge a rejection or decline a warning.

        Most outcomes send the user back to an empty search; a self-send
        rejection keeps the selection so it can be changed.
        """
        if self._phase not in (SessionPhase.BLOCKED, SessionPhase.AWAITING_CONFIRMATION, SessionPhase.AWAITING_TAG):
            msg = "Nothing to go back from"
            raise InvalidSessionActionError(msg)

        outcome = self._outcome
        if outcome is not None and outcome.kind in _BACK_KEEPS_SELECTION:
            self._outcome = None
            self._phase = SessionPhase.SELECTING
            return
        if self._phase is SessionPhase.AWAITING_TAG:
            self.cancel_tag()
            return
        self.clear_search()

    def supply_tag(self, tag: int | str) -> Destination:
        """Merge a tag into the destination and complete the step.

        The destination is not re-validated.

        Raises:
            InvalidSessionActionError: If no tag was requested.
            ValueError: If the tag is not a positive unsigned 32-bit integer.
        """
        if self._phase is not SessionPhase.AWAITING_TAG or self._destination is None:
            msg = "No destination tag was requested"
            raise InvalidSessionActionError(msg)

        self._destination = resolve_tag(self._destination, tag)
        self._phase = SessionPhase.COMPLETE
        return self._destination

    def cancel_tag(self) -> None:
        """Abandon tag entry and return to selection with the destination kept."""
        if self._phase is not SessionPhase.AWAITING_TAG:
            msg = "No destination tag was requested"
            raise InvalidSessionActionError(msg)
        self._outcome = None
        self._phase = SessionPhase.SELECTING

    def _outcome_allows(self, action: DecisionAction) -> bool:
        return self._outcome is not None and action in self._outcome.actions

    def _set_destination(self, destination: Destination | None) -> None:
        if destination == self._destination:
            return
        self._destination = destination
        self._destination_info = None
        self._outcome = None
        if self._phase is not SessionPhase.VALIDATING:
            self._phase = SessionPhase.SELECTING

