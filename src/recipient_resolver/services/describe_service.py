"""Display info for a single address: known contact, own account, or external."""

from collections.abc import Sequence

from loguru import logger

from recipient_resolver.lib.directory import AccountDescription, BaseDirectory, DirectoryProviderError
from recipient_resolver.lib.store import Contact, OwnedAccount

CONTACT_SOURCE = "internal:contacts"
ACCOUNT_SOURCE = "internal:accounts"


class AccountDescriber:
    """Resolves a name for an address, local collections first."""

    def __init__(
        self,
        contacts: Sequence[Contact],
        accounts: Sequence[OwnedAccount],
        directory: BaseDirectory | None = None,
    ) -> None:
        self._contacts = tuple(contacts)
        self._accounts = tuple(accounts)
        self._directory = directory

    async def describe(self, address: str) -> AccountDescription:
        """Describe an address.

        Args:
            address: Classic address.

        Returns:
            AccountDescription.  Directory failures yield an empty description.
        """
        for contact in self._contacts:
            if contact.address == address:
                return AccountDescription(name=contact.name, source=CONTACT_SOURCE)

        for account in self._accounts:
            if account.address == address:
                return AccountDescription(name=account.label, source=ACCOUNT_SOURCE)

        if self._directory is None:
            return AccountDescription()

        try:
            return await self._directory.describe(address)
        except DirectoryProviderError as e:
            logger.warning(f"Account name lookup failed: {e}")
            return AccountDescription()
