"""Pydantic v2 schemas for destination validation outcomes."""

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from recipient_resolver.lib.ledger import DestinationInfo


class DecisionKind(StrEnum):
    """Every outcome the destination validator can produce."""

    APPROVE = "approve"
    SELF_SEND = "self_send"
    LOOKUP_UNAVAILABLE = "lookup_unavailable"
    CANNOT_ACTIVATE_WITH_IOU = "cannot_activate_with_iou"
    INSUFFICIENT_TO_ACTIVATE = "insufficient_to_activate"
    WILL_ACTIVATE_ACCOUNT = "will_activate_account"
    PROBABLE_SCAM = "probable_scam"
    CONFIRMED_SCAM = "confirmed_scam"
    NEED_TAG = "need_tag"


class DecisionCategory(StrEnum):
    """How an outcome gates progression."""

    APPROVE = "approve"
    REJECT = "reject"
    WARN = "warn"
    FAIL = "fail"
    SUSPEND = "suspend"


class DecisionAction(StrEnum):
    """Continuations offered to the user for an outcome."""

    BACK = "back"
    CONTINUE = "continue"
    ENTER_TAG = "enter_tag"


class DecisionOutcome(BaseModel):
    """Result of one validation attempt.

    Carries what a surface needs to render it: the kind, a message key,
    the offered actions and, for the activation warning, the amount.
    """

    model_config = ConfigDict(frozen=True)

    kind: DecisionKind
    category: DecisionCategory
    message_key: str | None = None
    actions: tuple[DecisionAction, ...] = ()
    amount: Decimal | None = None
    info: DestinationInfo | None = None

    @property
    def allows_continue(self) -> bool:
        return DecisionAction.CONTINUE in self.actions

    @property
    def blocks_progress(self) -> bool:
        """True unless the outcome approves the destination outright."""
        return self.category is not DecisionCategory.APPROVE
