"""Unit tests for single-address description."""

from recipient_resolver.lib.directory import AccountDescription
from recipient_resolver.services.describe_service import ACCOUNT_SOURCE, CONTACT_SOURCE, AccountDescriber


class TestAccountDescriber:
    """Tests for AccountDescriber.describe()."""

    async def test_contact_first(self, contacts, accounts, directory, savings_address) -> None:
        describer = AccountDescriber(contacts, accounts, directory)
        result = await describer.describe(savings_address)
        assert result == AccountDescription(name="Savings (shared)", source=CONTACT_SOURCE)
        assert directory.describe_calls == []

    async def test_owned_account(self, accounts, directory, source_address) -> None:
        describer = AccountDescriber([], accounts, directory)
        result = await describer.describe(source_address)
        assert result == AccountDescription(name="Main wallet", source=ACCOUNT_SOURCE)

    async def test_falls_back_to_directory(self, contacts, accounts, directory, address_factory) -> None:
        external = address_factory(50)
        directory.descriptions[external] = AccountDescription(name="Exchange", source="bithomp.com")
        describer = AccountDescriber(contacts, accounts, directory)
        assert await describer.describe(external) == AccountDescription(name="Exchange", source="bithomp.com")
        assert directory.describe_calls == [external]

    async def test_directory_error_is_swallowed(self, contacts, accounts, directory, address_factory) -> None:
        directory.fail = True
        describer = AccountDescriber(contacts, accounts, directory)
        assert await describer.describe(address_factory(50)) == AccountDescription()

    async def test_without_directory(self, address_factory) -> None:
        describer = AccountDescriber([], [], None)
        assert await describer.describe(address_factory(50)) == AccountDescription()
