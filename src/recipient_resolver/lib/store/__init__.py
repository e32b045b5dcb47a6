"""Local account store — contacts and owned accounts read contract.

Public API:
    - Contact: Address book entry
    - OwnedAccount: Account held by the user
    - BaseAccountStore: Abstract snapshot reader
    - InMemoryAccountStore: Tuple-backed store
    - load_store_from_json: Load a store from a JSON snapshot
"""

from recipient_resolver.lib.store.base import BaseAccountStore, Contact, OwnedAccount
from recipient_resolver.lib.store.memory import InMemoryAccountStore, load_store_from_json

__all__ = [
    "BaseAccountStore",
    "Contact",
    "InMemoryAccountStore",
    "OwnedAccount",
    "load_store_from_json",
]
