"""Unit tests for recipient and decision schemas."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from recipient_resolver.schemas.decision import (
    DecisionAction,
    DecisionCategory,
    DecisionKind,
    DecisionOutcome,
)
from recipient_resolver.schemas.recipient import (
    MAX_TAG,
    AvatarHint,
    Candidate,
    CandidateSource,
    Destination,
    ScanResult,
    normalize_tag,
)


class TestNormalizeTag:
    """Tests for normalize_tag()."""

    @pytest.mark.parametrize(("value", "expected"), [(42, 42), ("42", 42), (" 7 ", 7), (MAX_TAG, MAX_TAG)])
    def test_valid(self, value, expected) -> None:
        assert normalize_tag(value) == expected

    @pytest.mark.parametrize("value", [None, 0, "0", -5, MAX_TAG + 1, "abc", "", True, 1.5])
    def test_means_no_tag(self, value) -> None:
        assert normalize_tag(value) is None


class TestCandidateSource:
    """Tests for CandidateSource.from_provider()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("internal:contacts", CandidateSource.CONTACT),
            ("internal:accounts", CandidateSource.ACCOUNT),
            ("xrplns", CandidateSource.XRPLNS),
            ("Bithomp.com", CandidateSource.BITHOMP),
            ("somewhere-else", CandidateSource.UNKNOWN),
            ("", CandidateSource.UNKNOWN),
            (None, CandidateSource.UNKNOWN),
        ],
    )
    def test_from_provider(self, value, expected) -> None:
        assert CandidateSource.from_provider(value) == expected


class TestCandidate:
    """Tests for the Candidate schema."""

    def test_ids_are_unique(self) -> None:
        assert Candidate(address="rA").id != Candidate(address="rA").id

    def test_tag_normalized(self) -> None:
        assert Candidate(address="rA", tag="0").tag is None
        assert Candidate(address="rA", tag="12").tag == 12

    @pytest.mark.parametrize(
        ("source", "avatar"),
        [
            (CandidateSource.CONTACT, AvatarHint.PROFILE),
            (CandidateSource.ACCOUNT, AvatarHint.ACCOUNT),
            (CandidateSource.XRPLNS, AvatarHint.GLOBE),
            (CandidateSource.UNKNOWN, AvatarHint.GLOBE),
        ],
    )
    def test_avatar(self, source, avatar) -> None:
        assert Candidate(address="rA", source=source).avatar == avatar

    def test_to_destination(self) -> None:
        candidate = Candidate(name="Alice", address="rA", tag=9)
        assert candidate.to_destination() == Destination(address="rA", tag=9, name="Alice")

    def test_frozen(self) -> None:
        candidate = Candidate(address="rA")
        with pytest.raises(ValidationError):
            candidate.address = "rB"


class TestDestination:
    """Tests for the Destination schema."""

    def test_has_tag(self) -> None:
        assert Destination(address="rA", tag=1).has_tag is True
        assert Destination(address="rA", tag=0).has_tag is False
        assert Destination(address="rA").has_tag is False

    def test_empty_address_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Destination(address="")

    def test_tag_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            Destination(address="rA", tag=MAX_TAG + 1)


class TestScanResult:
    def test_tag_normalized(self) -> None:
        assert ScanResult(to="rA", tag="-3").tag is None
        assert ScanResult(to="rA", tag="5").tag == 5


class TestDecisionOutcome:
    """Tests for DecisionOutcome helpers."""

    def test_approve_does_not_block(self) -> None:
        outcome = DecisionOutcome(kind=DecisionKind.APPROVE, category=DecisionCategory.APPROVE)
        assert outcome.blocks_progress is False
        assert outcome.allows_continue is False

    def test_warning_allows_continue(self) -> None:
        outcome = DecisionOutcome(
            kind=DecisionKind.WILL_ACTIVATE_ACCOUNT,
            category=DecisionCategory.WARN,
            actions=(DecisionAction.BACK, DecisionAction.CONTINUE),
            amount=Decimal(25),
        )
        assert outcome.blocks_progress is True
        assert outcome.allows_continue is True
