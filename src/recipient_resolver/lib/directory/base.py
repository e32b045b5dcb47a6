"""Abstract directory interface for remote account name lookups."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class DirectoryMatch:
    """One match returned by a directory search."""

    alias: str
    account: str
    source: str
    tag: int | None = None


@dataclass(frozen=True)
class AccountDescription:
    """Display information for a single account."""

    name: str = ""
    source: str = ""


class DirectoryProviderError(Exception):
    """Raised when the directory experiences a transport or service error.

    Distinguishes provider failures (timeout, HTTP error, connection error,
    service-reported error) from a successful response with no matches.

    Args:
        provider_name: Name of the failing provider.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the provider.
    """

    def __init__(self, provider_name: str, message: str, status_code: int | None = None) -> None:
        self.provider_name = provider_name
        self.message = message
        self.status_code = status_code
        super().__init__(f"{provider_name}: {message}")


class BaseDirectory(ABC):
    """Abstract directory interface. All directory providers must implement this."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this directory provider."""

    @abstractmethod
    async def lookup(self, text: str) -> list[DirectoryMatch]:
        """Search the directory for accounts matching free text.

        Args:
            text: Search text, already trimmed.

        Returns:
            Matches in provider order (possibly empty).

        Raises:
            DirectoryProviderError: On transport or service errors.
        """

    @abstractmethod
    async def describe(self, address: str) -> AccountDescription:
        """Fetch the display name and provenance of a single account.

        Args:
            address: Classic address.

        Returns:
            AccountDescription (empty name when the account is unknown).

        Raises:
            DirectoryProviderError: On transport or service errors.
        """
