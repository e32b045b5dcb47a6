"""Ledger library — destination existence, tag requirement and risk.

Public API:
    - BaseLedgerInfoSource: Abstract ledger info interface
    - RippledLedgerInfoSource: JSON-RPC node + advisory provider
    - DestinationInfo: Ledger facts dataclass
    - RiskLevel: Fraud risk tier enum
    - LedgerProviderError: Transport/service failure
"""

from recipient_resolver.lib.ledger.base import (
    BaseLedgerInfoSource,
    DestinationInfo,
    LedgerProviderError,
    RiskLevel,
)
from recipient_resolver.lib.ledger.rippled import LSF_REQUIRE_DEST_TAG, RippledLedgerInfoSource

__all__ = [
    "LSF_REQUIRE_DEST_TAG",
    "BaseLedgerInfoSource",
    "DestinationInfo",
    "LedgerProviderError",
    "RiskLevel",
    "RippledLedgerInfoSource",
]
