"""Account identifier classification.

Recognizes classic (r-prefixed, base58 with checksum) addresses and
X-addresses, which pack a classic address and an optional destination tag
into one token.  Anything else is plain search text.
"""

import re
from dataclasses import dataclass
from enum import StrEnum

from xrpl.core.addresscodec import (
    XRPLAddressCodecException,
    is_valid_classic_address,
    xaddress_to_classic_address,
)

# Loose shape check: ledger base58 alphabet, r/X prefix, plausible length
POSSIBLE_ADDRESS_PATTERN = re.compile(r"[rX][rpshnaf39wBUDNEGHJKLM4PQRST7VWXYZ2bcdeCg65jkm8oFqi1tuvAxyz]{23,50}")


class AddressKind(StrEnum):
    """How a piece of input text was recognized."""

    PRIMARY = "primary"
    EXTENDED = "extended"
    PLAIN_TEXT = "plain_text"


@dataclass(frozen=True)
class AddressClassification:
    """Result of classifying raw input text.

    ``address`` is always the classic form when set; ``tag`` is only set for
    addresses (embedded in an X-address, or the external hint for classic).
    """

    kind: AddressKind
    address: str | None = None
    tag: int | None = None
    is_test_network: bool = False

    @property
    def is_address(self) -> bool:
        return self.kind is not AddressKind.PLAIN_TEXT


PLAIN_TEXT = AddressClassification(kind=AddressKind.PLAIN_TEXT)


def classify(text: str, tag_hint: int | None = None) -> AddressClassification:
    """Classify text as a classic address, an X-address, or plain text.

    Never raises: malformed input of any kind is reported as plain text.

    Args:
        text: Raw text, already stripped of whitespace by the caller.
        tag_hint: Destination tag supplied alongside the text (e.g. by a
            scanned payload).  Only used for classic addresses.

    Returns:
        AddressClassification describing the input.
    """
    if not text or not POSSIBLE_ADDRESS_PATTERN.fullmatch(text):
        return PLAIN_TEXT

    if text.startswith("X"):
        try:
            classic, tag, is_test = xaddress_to_classic_address(text)
        except (XRPLAddressCodecException, ValueError, TypeError):
            return PLAIN_TEXT
        return AddressClassification(
            kind=AddressKind.EXTENDED,
            address=classic,
            tag=tag,
            is_test_network=is_test,
        )

    try:
        valid = is_valid_classic_address(text)
    except (XRPLAddressCodecException, ValueError, TypeError):
        valid = False
    if not valid:
        return PLAIN_TEXT

    return AddressClassification(kind=AddressKind.PRIMARY, address=text, tag=tag_hint)
