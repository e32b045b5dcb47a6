"""Unit tests for local candidate search."""

from recipient_resolver.lib.store import Contact, OwnedAccount
from recipient_resolver.schemas.recipient import CandidateSource
from recipient_resolver.services.local_search_service import search_local


class TestSearchLocal:
    """Tests for search_local()."""

    def test_matches_contact_name_case_insensitive(self, contacts, accounts, source_address) -> None:
        results = search_local(contacts, accounts, "aLiCe", source_address)
        assert [c.name for c in results] == ["Alice Example"]
        assert results[0].source == CandidateSource.CONTACT
        assert results[0].tag == 42

    def test_matches_address_substring(self, contacts, accounts, source_address, alice_address) -> None:
        fragment = alice_address[3:12].lower()
        results = search_local(contacts, accounts, fragment, source_address)
        assert alice_address in [c.address for c in results]

    def test_matches_account_label(self, contacts, accounts, source_address) -> None:
        results = search_local(contacts, accounts, "savings", source_address)
        assert [(c.name, c.source) for c in results] == [
            ("Savings (shared)", CandidateSource.CONTACT),
            ("Savings", CandidateSource.ACCOUNT),
        ]

    def test_collision_yields_two_candidates(self, contacts, accounts, source_address, savings_address) -> None:
        results = search_local(contacts, accounts, savings_address, source_address)
        assert [c.address for c in results] == [savings_address, savings_address]
        assert results[0].id != results[1].id

    def test_sending_account_excluded(self, contacts, accounts, source_address) -> None:
        results = search_local(contacts, accounts, "main wallet", source_address)
        assert results == []
        results = search_local(contacts, accounts, source_address, source_address)
        assert source_address not in [c.address for c in results]

    def test_sending_account_included_without_exclusion(self, contacts, accounts) -> None:
        results = search_local(contacts, accounts, "main wallet")
        assert [c.name for c in results] == ["Main wallet"]

    def test_contact_with_sender_address_still_returned(self, source_address) -> None:
        contacts = [Contact(name="Personal vault", address=source_address)]
        accounts = [OwnedAccount(label="Personal vault", address=source_address)]
        results = search_local(contacts, accounts, "personal vault", source_address)
        assert [c.source for c in results] == [CandidateSource.CONTACT]

    def test_no_match(self, contacts, accounts, source_address) -> None:
        assert search_local(contacts, accounts, "zzzz", source_address) == []
