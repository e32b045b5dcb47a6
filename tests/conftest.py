"""Shared test fixtures: addresses, account store, fake directory and ledger."""

import asyncio
from decimal import Decimal

import pytest
from xrpl.core.addresscodec import encode_classic_address

from recipient_resolver.core.config import Settings
from recipient_resolver.lib.directory import (
    AccountDescription,
    BaseDirectory,
    DirectoryMatch,
    DirectoryProviderError,
)
from recipient_resolver.lib.ledger import BaseLedgerInfoSource, DestinationInfo, LedgerProviderError
from recipient_resolver.lib.store import Contact, InMemoryAccountStore, OwnedAccount

GENESIS_ADDRESS = "rHb9CJAWyB4rj91VRWn96DkukG4bwdtyTh"


def make_address(seed: int) -> str:
    """Deterministic valid classic address for a small integer seed."""
    return encode_classic_address(bytes([seed]) * 20)


class FakeDirectory(BaseDirectory):
    """Directory returning canned matches; optionally blocks until released."""

    def __init__(self) -> None:
        self.matches: dict[str, list[DirectoryMatch]] = {}
        self.descriptions: dict[str, AccountDescription] = {}
        self.fail = False
        self.lookup_calls: list[str] = []
        self.describe_calls: list[str] = []
        self.gates: dict[str, asyncio.Event] = {}

    @property
    def provider_name(self) -> str:
        return "fake"

    async def lookup(self, text: str) -> list[DirectoryMatch]:
        self.lookup_calls.append(text)
        gate = self.gates.get(text)
        if gate is not None:
            await gate.wait()
        if self.fail:
            raise DirectoryProviderError("fake", "boom")
        return list(self.matches.get(text, []))

    async def describe(self, address: str) -> AccountDescription:
        self.describe_calls.append(address)
        if self.fail:
            raise DirectoryProviderError("fake", "boom")
        return self.descriptions.get(address, AccountDescription())


class FakeLedger(BaseLedgerInfoSource):
    """Ledger info source returning a fixed DestinationInfo."""

    def __init__(self, info: DestinationInfo | None = None) -> None:
        self.info = info or DestinationInfo(exists=True)
        self.fail = False
        self.calls: list[str] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    async def get_destination_info(self, address: str) -> DestinationInfo:
        self.calls.append(address)
        if self.fail:
            raise LedgerProviderError("fake", "node unreachable")
        return self.info


class GatedLedger(FakeLedger):
    """Ledger whose lookups block until ``release`` is set."""

    def __init__(self, info: DestinationInfo | None = None) -> None:
        super().__init__(info)
        self.release = asyncio.Event()
        self.started = asyncio.Event()

    async def get_destination_info(self, address: str) -> DestinationInfo:
        self.started.set()
        await self.release.wait()
        return await super().get_destination_info(address)


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        _env_file=None,
        search_debounce_seconds=0.01,
        activation_reserve=Decimal(20),
    )


@pytest.fixture
def source_address() -> str:
    return make_address(1)


@pytest.fixture
def alice_address() -> str:
    return make_address(2)


@pytest.fixture
def savings_address() -> str:
    return make_address(3)


@pytest.fixture
def contacts(alice_address: str, savings_address: str) -> list[Contact]:
    return [
        Contact(name="Alice Example", address=alice_address, destination_tag=42),
        Contact(name="Bob Builder", address=make_address(4)),
        # Same address as an owned account
        Contact(name="Savings (shared)", address=savings_address),
    ]


@pytest.fixture
def accounts(source_address: str, savings_address: str) -> list[OwnedAccount]:
    return [
        OwnedAccount(label="Main wallet", address=source_address),
        OwnedAccount(label="Savings", address=savings_address),
    ]


@pytest.fixture
def store(contacts: list[Contact], accounts: list[OwnedAccount]) -> InMemoryAccountStore:
    return InMemoryAccountStore(contacts, accounts)


@pytest.fixture
def directory() -> FakeDirectory:
    return FakeDirectory()


@pytest.fixture
def ledger() -> FakeLedger:
    return FakeLedger()


@pytest.fixture
def gated_ledger() -> GatedLedger:
    return GatedLedger()


@pytest.fixture
def address_factory():
    """Factory for deterministic valid classic addresses."""
    return make_address
