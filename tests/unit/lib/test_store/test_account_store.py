"""Unit tests for the local account stores."""

import json
from pathlib import Path

import pytest

from recipient_resolver.lib.store import Contact, InMemoryAccountStore, OwnedAccount, load_store_from_json


class TestInMemoryAccountStore:
    """Tests for InMemoryAccountStore."""

    def test_lists_are_snapshots(self) -> None:
        store = InMemoryAccountStore([Contact(name="A", address="rA")], [OwnedAccount(label="B", address="rB")])
        contacts = store.list_contacts()
        contacts.clear()
        assert len(store.list_contacts()) == 1
        assert store.list_owned_accounts() == [OwnedAccount(label="B", address="rB")]

    def test_empty_store(self) -> None:
        store = InMemoryAccountStore()
        assert store.list_contacts() == []
        assert store.list_owned_accounts() == []

    def test_contact_is_frozen(self) -> None:
        contact = Contact(name="A", address="rA")
        with pytest.raises(AttributeError):
            contact.name = "Changed"


class TestLoadStoreFromJson:
    """Tests for load_store_from_json()."""

    def test_loads_contacts_and_accounts(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text(
            json.dumps(
                {
                    "contacts": [
                        {"name": "Alice", "address": "rAlice", "destination_tag": "42"},
                        {"name": "Bob", "address": "rBob"},
                    ],
                    "accounts": [{"label": "Main", "address": "rMain"}],
                }
            ),
            encoding="utf-8",
        )
        store = load_store_from_json(path)
        assert store.list_contacts() == [
            Contact(name="Alice", address="rAlice", destination_tag=42),
            Contact(name="Bob", address="rBob"),
        ]
        assert store.list_owned_accounts() == [OwnedAccount(label="Main", address="rMain")]

    def test_missing_sections_are_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{}", encoding="utf-8")
        store = load_store_from_json(path)
        assert store.list_contacts() == []
        assert store.list_owned_accounts() == []

    def test_invalid_json_raises_value_error(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid store snapshot"):
            load_store_from_json(path)

    def test_entry_without_address_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"accounts": [{"label": "Nameless"}]}), encoding="utf-8")
        with pytest.raises(ValueError, match="without address"):
            load_store_from_json(path)

    def test_non_numeric_tag_raises_with_file_context(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        contact = {"name": "Exchange", "address": "rExchange", "destination_tag": "abc"}
        path.write_text(json.dumps({"contacts": [contact]}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid destination_tag 'abc'") as exc_info:
            load_store_from_json(path)
        assert str(path) in str(exc_info.value)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_store_from_json(tmp_path / "absent.json")
