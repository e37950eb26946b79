"""Conversation orchestrator (one instance per chat session).

Hard contract: every message produces a well-formed `TurnResult` with at least one response line.
Each message is parsed from scratch (no slot accumulation across turns); only the last parse result
and the last ready transfer are remembered in the session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from time import monotonic

from src.conversation import replies
from src.conversation.session import ConversationSession
from src.intent.enhancer import RemoteParser, enhance
from src.intent.extractor import extract
from src.intent.schema import ErrorKind, IntentKind, ParseResult, TransferIntent

logger = logging.getLogger(__name__)

DEFAULT_UNIT = "TIA"


class TurnOutcome(StrEnum):
    """Terminal state of a single processed message."""

    not_send_intent = "not_send_intent"
    needs_clarification = "needs_clarification"
    invalid_address = "invalid_address"
    ready = "ready"
    incomplete = "incomplete"
    failed = "failed"


@dataclass(frozen=True)
class TurnResult:
    """Reply lines for one message plus the transfer intent when one is ready."""

    responses: list[str]
    outcome: TurnOutcome
    transaction_data: TransferIntent | None = None
    parse_result: ParseResult | None = field(default=None, repr=False)

    @property
    def transaction_ready(self) -> bool:
        return self.transaction_data is not None


def build_transfer_intent(result: ParseResult) -> TransferIntent | None:
    """Return a TransferIntent if the parse result has every slot filled and valid."""

    if (
            result.intent != IntentKind.send
            or not result.address
            or not result.address_valid
            or result.amount.numeric is None
            or result.need_clarification
    ):
        return None

    return TransferIntent(
        to_address=result.address,
        amount=result.amount.numeric,
        unit=result.amount.unit or DEFAULT_UNIT,
        chain=result.chain,
    )


def respond(result: ParseResult) -> TurnResult:
    """Map a parse result to reply lines (pure; no session access)."""

    if result.error_kind == ErrorKind.extraction_failure:
        return TurnResult(
            responses=list(replies.APOLOGY),
            outcome=TurnOutcome.failed,
            parse_result=result,
        )

    if result.intent != IntentKind.send:
        return TurnResult(
            responses=list(replies.NOT_SEND_INTENT),
            outcome=TurnOutcome.not_send_intent,
            parse_result=result,
        )

    if result.need_clarification:
        return TurnResult(
            responses=replies.clarification_lines(result.clarifying_questions),
            outcome=TurnOutcome.needs_clarification,
            parse_result=result,
        )

    if not result.address_valid:
        return TurnResult(
            responses=list(replies.INVALID_ADDRESS),
            outcome=TurnOutcome.invalid_address,
            parse_result=result,
        )

    intent = build_transfer_intent(result)
    if intent is None:
        # Only reachable with remote documents that contradict themselves.
        return TurnResult(
            responses=list(replies.INCOMPLETE),
            outcome=TurnOutcome.incomplete,
            parse_result=result,
        )

    return TurnResult(
        responses=replies.confirmation_lines(intent),
        outcome=TurnOutcome.ready,
        transaction_data=intent,
        parse_result=result,
    )


class Conversation:
    """Drives extraction, enhancement and replies for one chat session."""

    def __init__(
            self,
            *,
            remote: RemoteParser | None = None,
            session: ConversationSession | None = None,
    ) -> None:
        self.remote = remote
        self.session = session if session is not None else ConversationSession()

    async def process_message(self, text: str) -> TurnResult:
        """Process one user message.

        Never raises. On any internal fault a generic apology is returned and the session is left
        untouched.
        """

        started = monotonic()

        # noinspection PyBroadException
        try:
            raw_text = text or ""
            local = extract(raw_text)
            result = await enhance(local, raw_text, remote=self.remote)
            turn = respond(result)
        except Exception:  # noqa: BLE001 - a turn must always be answered
            logger.exception("turn failed")
            return TurnResult(responses=list(replies.APOLOGY), outcome=TurnOutcome.failed)

        self.session.last_parse_result = result
        if turn.transaction_data is not None:
            self.session.pending_transaction = turn.transaction_data

        latency_ms = int((monotonic() - started) * 1000)
        logger.info(
            "turn outcome=%s intent=%s confidence=%.2f enhanced=%s latency_ms=%d",
            turn.outcome,
            result.intent,
            result.confidence,
            result is not local,
            latency_ms,
        )
        return turn

    def reset(self) -> None:
        """Clear the session state unconditionally."""

        self.session.clear()
