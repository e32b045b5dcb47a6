"""In-memory and JSON-file backed account stores."""

import json
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from recipient_resolver.lib.store.base import BaseAccountStore, Contact, OwnedAccount


class InMemoryAccountStore(BaseAccountStore):
    """Store holding tuples of contacts and accounts captured at construction."""

    def __init__(
        self,
        contacts: Iterable[Contact] = (),
        accounts: Iterable[OwnedAccount] = (),
    ) -> None:
        self._contacts = tuple(contacts)
        self._accounts = tuple(accounts)

    def list_contacts(self) -> list[Contact]:
        return list(self._contacts)

    def list_owned_accounts(self) -> list[OwnedAccount]:
        return list(self._accounts)


def load_store_from_json(path: str | Path) -> InMemoryAccountStore:
    """Load a contacts/accounts snapshot from a JSON file.

    Expected shape::

        {
            "contacts": [{"name": "...", "address": "r...", "destination_tag": 1}],
            "accounts": [{"label": "...", "address": "r..."}]
        }

    Args:
        path: Path to the JSON snapshot.

    Returns:
        InMemoryAccountStore populated from the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON or an entry lacks an address.
    """
    file_path = Path(path)
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        msg = f"Invalid store snapshot {file_path}: {e}"
        raise ValueError(msg) from e

    contacts: list[Contact] = []
    for entry in data.get("contacts", []):
        if not entry.get("address"):
            msg = f"Contact entry without address in {file_path}"
            raise ValueError(msg)
        tag = entry.get("destination_tag")
        try:
            destination_tag = int(tag) if tag not in (None, "") else None
        except (TypeError, ValueError) as e:
            msg = f"Invalid destination_tag {tag!r} for contact {entry['address']} in {file_path}"
            raise ValueError(msg) from e
        contacts.append(
            Contact(
                name=entry.get("name") or "",
                address=entry["address"],
                destination_tag=destination_tag,
            )
        )

    accounts: list[OwnedAccount] = []
    for entry in data.get("accounts", []):
        if not entry.get("address"):
            msg = f"Account entry without address in {file_path}"
            raise ValueError(msg)
        accounts.append(OwnedAccount(label=entry.get("label") or "", address=entry["address"]))

    logger.debug(f"Loaded {len(contacts)} contacts and {len(accounts)} accounts from snapshot")
    return InMemoryAccountStore(contacts, accounts)
