"""Destination validation — decides whether a payment may go to a destination.

The decision is an ordered rule list evaluated top to bottom; the first rule
that produces an outcome wins.  The self-send rule runs before any ledger
lookup, the remaining rules run against one freshly fetched DestinationInfo.
"""

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from loguru import logger

from recipient_resolver.lib.ledger import BaseLedgerInfoSource, DestinationInfo, LedgerProviderError, RiskLevel
from recipient_resolver.schemas.decision import (
    DecisionAction,
    DecisionCategory,
    DecisionKind,
    DecisionOutcome,
)
from recipient_resolver.schemas.recipient import MAX_TAG, Destination

DEFAULT_ACTIVATION_RESERVE = Decimal(20)

_BACK = (DecisionAction.BACK,)
_BACK_OR_CONTINUE = (DecisionAction.BACK, DecisionAction.CONTINUE)


@dataclass(frozen=True)
class ValidationRequest:
    """Inputs of one validation attempt."""

    destination: Destination
    source_address: str
    amount: Decimal | None
    is_iou: bool
    activation_reserve: Decimal = DEFAULT_ACTIVATION_RESERVE


PreLookupRule = Callable[[ValidationRequest], DecisionOutcome | None]
LedgerRule = Callable[[ValidationRequest, DestinationInfo], DecisionOutcome | None]


def parse_amount(value: object) -> Decimal | None:
    """Parse an amount; None for anything that is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


def _self_send(request: ValidationRequest) -> DecisionOutcome | None:
    if request.destination.address != request.source_address:
        return None
    return DecisionOutcome(
        kind=DecisionKind.SELF_SEND,
        category=DecisionCategory.REJECT,
        message_key="send.sourceAndDestinationCannotBeSame",
        actions=_BACK,
    )


def _cannot_activate_with_iou(request: ValidationRequest, info: DestinationInfo) -> DecisionOutcome | None:
    if info.exists or not request.is_iou:
        return None
    return DecisionOutcome(
        kind=DecisionKind.CANNOT_ACTIVATE_WITH_IOU,
        category=DecisionCategory.REJECT,
        message_key="send.destinationCannotActivateWithIOU",
        actions=_BACK,
        info=info,
    )


def _insufficient_to_activate(request: ValidationRequest, info: DestinationInfo) -> DecisionOutcome | None:
    if info.exists:
        return None
    if request.amount is not None and request.amount >= request.activation_reserve:
        return None
    return DecisionOutcome(
        kind=DecisionKind.INSUFFICIENT_TO_ACTIVATE,
        category=DecisionCategory.REJECT,
        message_key="send.destinationNotExistTooLittleToCreate",
        actions=_BACK,
        info=info,
    )


def _will_activate(request: ValidationRequest, info: DestinationInfo) -> DecisionOutcome | None:
    if info.exists:
        return None
    return DecisionOutcome(
        kind=DecisionKind.WILL_ACTIVATE_ACCOUNT,
        category=DecisionCategory.WARN,
        message_key="send.destinationNotExistCreationWarning",
        actions=_BACK_OR_CONTINUE,
        amount=request.amount,
        info=info,
    )


def _probable_scam(request: ValidationRequest, info: DestinationInfo) -> DecisionOutcome | None:
    if info.risk not in (RiskLevel.PROBABLE, RiskLevel.HIGH_PROBABILITY):
        return None
    return DecisionOutcome(
        kind=DecisionKind.PROBABLE_SCAM,
        category=DecisionCategory.WARN,
        message_key="send.destinationIsProbableIsScam",
        actions=_BACK_OR_CONTINUE,
        info=info,
    )


def _confirmed_scam(request: ValidationRequest, info: DestinationInfo) -> DecisionOutcome | None:
    if info.risk is not RiskLevel.CONFIRMED:
        return None
    return DecisionOutcome(
        kind=DecisionKind.CONFIRMED_SCAM,
        category=DecisionCategory.REJECT,
        message_key="send.destinationIsConfirmedAsScam",
        actions=_BACK,
        info=info,
    )


def _need_tag(request: ValidationRequest, info: DestinationInfo) -> DecisionOutcome | None:
    if not info.requires_tag or request.destination.has_tag:
        return None
    return DecisionOutcome(
        kind=DecisionKind.NEED_TAG,
        category=DecisionCategory.SUSPEND,
        message_key="send.destinationTagRequired",
        actions=(DecisionAction.BACK, DecisionAction.ENTER_TAG),
        info=info,
    )


PRE_LOOKUP_RULES: tuple[PreLookupRule, ...] = (_self_send,)

# Order matters: existence/activation, then risk, then tag requirement
LEDGER_RULES: tuple[LedgerRule, ...] = (
    _cannot_activate_with_iou,
    _insufficient_to_activate,
    _will_activate,
    _probable_scam,
    _confirmed_scam,
    _need_tag,
)


def decide(request: ValidationRequest, info: DestinationInfo) -> DecisionOutcome:
    """Apply the ledger rules to fetched info.

    Args:
        request: Validation inputs.
        info: DestinationInfo fetched for ``request.destination``.

    Returns:
        The first rule outcome, or an approval when no rule objects.
    """
    for rule in LEDGER_RULES:
        outcome = rule(request, info)
        if outcome is not None:
            return outcome
    return DecisionOutcome(kind=DecisionKind.APPROVE, category=DecisionCategory.APPROVE, info=info)


def lookup_unavailable() -> DecisionOutcome:
    return DecisionOutcome(
        kind=DecisionKind.LOOKUP_UNAVAILABLE,
        category=DecisionCategory.FAIL,
        message_key="send.unableGetRecipientAccountInfoPleaseTryAgain",
    )


class DestinationValidator:
    """Runs one validation attempt per call; never caches or retries."""

    def __init__(
        self,
        ledger: BaseLedgerInfoSource,
        activation_reserve: Decimal = DEFAULT_ACTIVATION_RESERVE,
    ) -> None:
        self._ledger = ledger
        self._activation_reserve = activation_reserve

    async def validate(
        self,
        destination: Destination,
        source_address: str,
        amount: Decimal | str | float | None,
        is_iou: bool,
    ) -> DecisionOutcome:
        """Validate a destination for a payment.

        Args:
            destination: Chosen destination.
            source_address: Sending account address.
            amount: Payment amount; unparseable amounts count as zero for
                the activation check.
            is_iou: True when paying an issued currency rather than the
                native one.

        Returns:
            DecisionOutcome.  Ledger failures become ``lookup_unavailable``.
        """
        request = ValidationRequest(
            destination=destination,
            source_address=source_address,
            amount=parse_amount(amount),
            is_iou=is_iou,
            activation_reserve=self._activation_reserve,
        )

        for rule in PRE_LOOKUP_RULES:
            outcome = rule(request)
            if outcome is not None:
                return outcome

        try:
            info = await self._ledger.get_destination_info(destination.address)
        except LedgerProviderError as e:
            logger.warning(f"Destination info unavailable: {e}")
            return lookup_unavailable()

        outcome = decide(request, info)
        logger.debug(f"Destination validation outcome: {outcome.kind}")
        return outcome


def resolve_tag(destination: Destination, tag: int | str) -> Destination:
    """Merge a user-supplied destination tag into a destination.

    Args:
        destination: Destination that needs a tag.
        tag: Tag as entered; must be a positive unsigned 32-bit integer.

    Returns:
        A new Destination carrying the tag.

    Raises:
        ValueError: If the tag is not a positive unsigned 32-bit integer.
    """
    try:
        value = int(str(tag).strip())
    except ValueError as e:
        msg = f"Destination tag must be an integer, got {tag!r}"
        raise ValueError(msg) from e
    if not 0 < value <= MAX_TAG:
        msg = f"Destination tag must be between 1 and {MAX_TAG}, got {value}"
        raise ValueError(msg)
    return destination.model_copy(update={"tag": value})
