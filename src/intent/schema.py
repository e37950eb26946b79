"""Parse result JSON schema (Pydantic models).

This schema is the contract between the local extractor, the remote AI parser and the conversation
orchestrator. Remote documents must validate against these models before they are merged into a
local result; otherwise the remote answer is discarded.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_CLARIFYING_QUESTIONS = 3


class IntentKind(StrEnum):
    """Coarse classification of a user utterance."""

    send = "send"
    other = "other"


class Chain(StrEnum):
    """Supported target chains."""

    celestia = "celestia"
    mocha = "mocha"
    unknown = "unknown"


class ErrorKind(StrEnum):
    """Why a parse result carries a diagnostic."""

    extraction_failure = "extraction_failure"
    address_format = "address_format"
    truncation_suspicion = "truncation_suspicion"
    remote_reported = "remote_reported"


class Amount(BaseModel):
    """Amount as written by the user plus its numeric value and unit (if any)."""

    model_config = ConfigDict(extra="ignore")

    original: str = ""
    numeric: float | None = None
    unit: str | None = None


class ParseResult(BaseModel):
    """Structured output of a parsing pass (local or remote).

    Every field has a default equal to the "nothing extracted" value, so a remote document may
    omit keys. `error_kind` is in-process only and never serialized.
    """

    model_config = ConfigDict(extra="ignore")

    raw_text: str = ""
    address: str = ""
    address_valid: bool = False
    chain: Chain = Chain.unknown
    amount: Amount = Field(default_factory=Amount)
    need_clarification: bool = False
    clarifying_questions: list[str] = Field(default_factory=list)
    intent: IntentKind = IntentKind.other
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    error: str | None = None
    error_kind: ErrorKind | None = Field(default=None, exclude=True)

    @field_validator("clarifying_questions")
    @classmethod
    def cap_questions(cls, value: list[str]) -> list[str]:
        """Keep at most three clarifying questions."""

        return value[:MAX_CLARIFYING_QUESTIONS]


class TransferIntent(BaseModel):
    """Finished transfer payload handed to the wallet collaborator."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    to_address: str
    amount: float
    unit: str
    chain: Chain


def parse_result_from_obj(obj: Any) -> ParseResult:
    """Validate and parse a ParseResult from an arbitrary decoded JSON object."""

    return ParseResult.model_validate(obj)
