"""Conversation session state.

A session is owned by exactly one `Conversation` and is mutated in place after every processed
message, so messages of one session must be processed one at a time.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.intent.schema import ParseResult, TransferIntent


@dataclass
class ConversationSession:
    """Mutable per-session state."""

    pending_transaction: TransferIntent | None = None
    last_parse_result: ParseResult | None = None
    # Tracked but not read by any turn; each message is parsed from scratch.
    awaiting_confirmation: bool = False

    def clear(self) -> None:
        self.pending_transaction = None
        self.last_parse_result = None
        self.awaiting_confirmation = False
