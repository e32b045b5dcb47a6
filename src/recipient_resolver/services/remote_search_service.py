"""Remote candidate search against the account directory.

Lookups are best-effort: provider failures degrade to an empty result so
local matches still display.  Debouncing and staleness are handled by the
search aggregator, which decides when (and whether) a result is applied.
"""

from loguru import logger

from recipient_resolver.lib.directory import BaseDirectory, DirectoryMatch, DirectoryProviderError
from recipient_resolver.schemas.recipient import Candidate, CandidateSource

DEFAULT_MIN_QUERY_LENGTH = 4


def candidate_from_match(match: DirectoryMatch) -> Candidate:
    """Convert a directory match, treating an alias equal to the account as no name."""
    name = "" if match.alias == match.account else match.alias
    return Candidate(
        name=name,
        address=match.account,
        tag=match.tag,
        source=CandidateSource.from_provider(match.source),
    )


class RemoteCandidateSource:
    """Directory-backed candidate source.  Without a directory it never searches."""

    def __init__(self, directory: BaseDirectory | None, min_query_length: int = DEFAULT_MIN_QUERY_LENGTH) -> None:
        self._directory = directory
        self._min_query_length = min_query_length

    @property
    def min_query_length(self) -> int:
        return self._min_query_length

    def should_search(self, query: str) -> bool:
        return self._directory is not None and len(query) >= self._min_query_length

    async def search(self, query: str) -> list[Candidate]:
        """Search the directory for a query.

        Args:
            query: Trimmed search text.

        Returns:
            Candidates in directory order; empty for short queries and on
            any provider error.
        """
        if self._directory is None or not self.should_search(query):
            return []

        try:
            matches = await self._directory.lookup(query)
        except DirectoryProviderError as e:
            logger.warning(f"Directory lookup failed, continuing with local results: {e}")
            return []

        return [candidate_from_match(m) for m in matches]
