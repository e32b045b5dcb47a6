"""Address codec — recognizes account identifiers in free text.

Public API:
    - classify: Classify text as classic address, X-address or plain text
    - AddressKind: Classification kind enum
    - AddressClassification: Classification result dataclass
    - POSSIBLE_ADDRESS_PATTERN: Loose shape regex for address-like tokens
"""

from recipient_resolver.lib.codec.address import (
    PLAIN_TEXT,
    POSSIBLE_ADDRESS_PATTERN,
    AddressClassification,
    AddressKind,
    classify,
)

__all__ = [
    "PLAIN_TEXT",
    "POSSIBLE_ADDRESS_PATTERN",
    "AddressClassification",
    "AddressKind",
    "classify",
]
