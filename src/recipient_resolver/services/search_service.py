"""Search aggregator — merges address decoding, local and remote candidates.

One aggregator serves one recipient session.  Each query change bumps a
sequence number; asynchronous work started for a query only publishes its
result while that query's sequence number is still the latest.  The
remote search is delayed by a single-slot debounce timer which a newer
query cancels outright.  A remote call that is already in flight when the
query changes is left to finish and its result is discarded.
"""

import asyncio
from collections.abc import Callable, Coroutine, Iterable, Sequence
from typing import Any

from loguru import logger

from recipient_resolver.lib.codec import AddressClassification, classify
from recipient_resolver.lib.directory import AccountDescription
from recipient_resolver.lib.store import Contact, OwnedAccount
from recipient_resolver.schemas.recipient import Candidate, CandidateSource, SearchState
from recipient_resolver.services.describe_service import AccountDescriber
from recipient_resolver.services.local_search_service import search_local
from recipient_resolver.services.remote_search_service import RemoteCandidateSource

DEFAULT_DEBOUNCE_SECONDS = 0.5

StateListener = Callable[[SearchState], None]


def clean_query(text: str) -> str:
    """Remove all whitespace, including inside the text (pasted addresses often wrap)."""
    return "".join(text.split())


def dedupe_by_address(candidates: Iterable[Candidate]) -> tuple[Candidate, ...]:
    """Keep the first candidate seen for each address."""
    seen: set[str] = set()
    unique: list[Candidate] = []
    for candidate in candidates:
        if candidate.address in seen:
            continue
        seen.add(candidate.address)
        unique.append(candidate)
    return tuple(unique)


class SearchAggregator:
    """Turns query text into a de-duplicated candidate list.

    Address-shaped input resolves directly to a single candidate; anything
    else runs the local search immediately and, for long enough queries, a
    debounced remote search whose results are appended after the local
    ones.

    Methods that start work must be called from within a running event loop.
    """

    def __init__(
        self,
        contacts: Sequence[Contact],
        accounts: Sequence[OwnedAccount],
        remote: RemoteCandidateSource,
        describer: AccountDescriber,
        *,
        exclude_address: str | None = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        on_change: StateListener | None = None,
    ) -> None:
        self._contacts = tuple(contacts)
        self._accounts = tuple(accounts)
        self._remote = remote
        self._describer = describer
        self._exclude_address = exclude_address
        self._debounce_seconds = debounce_seconds
        self._on_change = on_change

        self._state = SearchState()
        self._sequence = 0
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._settled = asyncio.Event()
        self._settled.set()

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def sequence(self) -> int:
        """Sequence number of the latest query; stale work compares against it."""
        return self._sequence

    async def on_query_changed(self, text: str, *, tag_hint: int | None = None) -> SearchState:
        """Start a search for new query text.

        Returns as soon as the synchronous part is published: the local
        results for plain text, or a searching state for a direct address
        resolution.  Use ``wait_until_settled`` to await the rest.

        Args:
            text: Raw input text.
            tag_hint: Destination tag supplied alongside the text (scans).

        Returns:
            The state published for this query so far.
        """
        query = clean_query(text)
        sequence = self._invalidate()

        if not query:
            self._publish(SearchState())
            return self._state

        classification = classify(query, tag_hint)
        if classification.is_address:
            self._publish(SearchState(query=query, is_searching=True))
            self._spawn(self._resolve_direct(sequence, query, classification))
            return self._state

        local = search_local(self._contacts, self._accounts, query, self._exclude_address)

        if not self._remote.should_search(query):
            self._publish(SearchState(query=query, results=dedupe_by_address(local)))
            return self._state

        self._publish(SearchState(query=query, results=dedupe_by_address(local), is_searching=True))
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._debounce_seconds, self._fire_remote, sequence, query, local)
        return self._state

    def clear(self) -> SearchState:
        """Drop the query and results; in-flight work for earlier queries becomes inert."""
        self._invalidate()
        self._publish(SearchState())
        return self._state

    async def wait_until_settled(self) -> SearchState:
        """Wait until no lookup is outstanding for the latest query."""
        await self._settled.wait()
        return self._state

    def _invalidate(self) -> int:
        self._sequence += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        return self._sequence

    def _is_current(self, sequence: int) -> bool:
        return sequence == self._sequence

    def _publish(self, state: SearchState) -> None:
        self._state = state
        if state.is_searching:
            self._settled.clear()
        else:
            self._settled.set()
        if self._on_change is not None:
            self._on_change(state)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _fire_remote(self, sequence: int, query: str, local: list[Candidate]) -> None:
        self._timer = None
        if not self._is_current(sequence):
            return
        self._spawn(self._search_remote(sequence, query, local))

    async def _search_remote(self, sequence: int, query: str, local: list[Candidate]) -> None:
        remote: list[Candidate] = []
        try:
            remote = await self._remote.search(query)
        finally:
            if self._is_current(sequence):
                self._publish(SearchState(query=query, results=dedupe_by_address([*local, *remote])))
            else:
                logger.debug(f"Dropping {len(remote)} remote results for a superseded query")

    async def _resolve_direct(self, sequence: int, query: str, classification: AddressClassification) -> None:
        description = AccountDescription()
        try:
            description = await self._describer.describe(classification.address)
        finally:
            if self._is_current(sequence):
                candidate = Candidate(
                    name=description.name,
                    address=classification.address,
                    tag=classification.tag,
                    source=CandidateSource.from_provider(description.source),
                )
                self._publish(SearchState(query=query, results=(candidate,), resolved=candidate))
            else:
                logger.debug("Dropping direct resolution for a superseded query")
