"""Abstract ledger info interface used to vet a payment destination."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import StrEnum


class RiskLevel(StrEnum):
    """Likelihood that an account is associated with fraud."""

    NONE = "none"
    PROBABLE = "probable"
    HIGH_PROBABILITY = "high_probability"
    CONFIRMED = "confirmed"


@dataclass(frozen=True)
class DestinationInfo:
    """Ledger facts about a destination account, fetched per validation."""

    exists: bool
    requires_tag: bool = False
    risk: RiskLevel = RiskLevel.NONE


class LedgerProviderError(Exception):
    """Raised when ledger info cannot be fetched.

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


class BaseLedgerInfoSource(ABC):
    """Abstract source of existence, tag requirement and risk for an account."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this provider."""

    @abstractmethod
    async def get_destination_info(self, address: str) -> DestinationInfo:
        """Fetch ledger info for an address.

        Args:
            address: Classic address.

        Returns:
            DestinationInfo for the address.

        Raises:
            LedgerProviderError: On transport or service errors.
        """
