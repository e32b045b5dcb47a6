"""Pydantic v2 schemas for recipient search and selection."""

import uuid
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Destination tags are unsigned 32-bit integers
MAX_TAG = 2**32 - 1


class CandidateSource(StrEnum):
    """Where a candidate came from."""

    ACCOUNT = "accounts"
    CONTACT = "contacts"
    XRPLNS = "xrplns"
    BITHOMP = "bithomp.com"
    UNKNOWN = "unknown"

    @classmethod
    def from_provider(cls, value: str | None) -> "CandidateSource":
        """Map a provenance string (``internal:contacts``, ``xrplns``, ...) to a source."""
        if not value:
            return cls.UNKNOWN
        normalized = value.removeprefix("internal:").lower()
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN


class AvatarHint(StrEnum):
    """Icon family for a candidate row."""

    PROFILE = "profile"
    ACCOUNT = "account"
    GLOBE = "globe"


_AVATARS: dict[CandidateSource, AvatarHint] = {
    CandidateSource.CONTACT: AvatarHint.PROFILE,
    CandidateSource.ACCOUNT: AvatarHint.ACCOUNT,
}


def normalize_tag(value: object) -> int | None:
    """Coerce a loosely typed tag to a positive integer or None.

    Zero, negative, out-of-range and non-numeric values mean "no tag".
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        tag = int(str(value).strip())
    except ValueError:
        return None
    if tag <= 0 or tag > MAX_TAG:
        return None
    return tag


class Destination(BaseModel):
    """The chosen payment recipient. Immutable: replaced wholesale on change."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., min_length=1)
    tag: int | None = Field(default=None, ge=0, le=MAX_TAG)
    name: str | None = None

    @property
    def has_tag(self) -> bool:
        return bool(self.tag)


class Candidate(BaseModel):
    """A search result row."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    address: str
    tag: int | None = None
    source: CandidateSource = CandidateSource.UNKNOWN

    @field_validator("tag", mode="before")
    @classmethod
    def coerce_tag(cls, v: object) -> int | None:
        return normalize_tag(v)

    @property
    def avatar(self) -> AvatarHint:
        return _AVATARS.get(self.source, AvatarHint.GLOBE)

    def to_destination(self) -> Destination:
        return Destination(address=self.address, tag=self.tag, name=self.name)


class ScanResult(BaseModel):
    """A destination read from a QR code or deep link."""

    to: str
    tag: int | None = None

    @field_validator("tag", mode="before")
    @classmethod
    def coerce_tag(cls, v: object) -> int | None:
        return normalize_tag(v)


class SearchState(BaseModel):
    """Snapshot of the search for one query."""

    model_config = ConfigDict(frozen=True)

    query: str = ""
    results: tuple[Candidate, ...] = ()
    is_searching: bool = False
    resolved: Candidate | None = None


class SectionKind(StrEnum):
    MY_ACCOUNTS = "account.myAccounts"
    CONTACTS = "global.contacts"
    SEARCH_RESULTS = "send.searchResults"


class CandidateSection(BaseModel):
    """A titled group of candidates; ``empty_message_key`` is set when the group has nothing to show."""

    model_config = ConfigDict(frozen=True)

    kind: SectionKind
    candidates: tuple[Candidate, ...] = ()
    empty_message_key: str | None = None
