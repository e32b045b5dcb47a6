"""Read contract for locally known contacts and owned accounts."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Contact:
    """An address book entry."""

    name: str
    address: str
    destination_tag: int | None = None


@dataclass(frozen=True)
class OwnedAccount:
    """An account held by the user."""

    label: str
    address: str


class BaseAccountStore(ABC):
    """Snapshot access to contacts and owned accounts.

    Implementations return read-only snapshots; callers do not expect
    live updates.
    """

    @abstractmethod
    def list_contacts(self) -> list[Contact]:
        """Return all contacts."""

    @abstractmethod
    def list_owned_accounts(self) -> list[OwnedAccount]:
        """Return all owned accounts."""
