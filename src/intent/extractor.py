"""Rules-based transfer instruction extractor (local parser).

This parser is intentionally simple and deterministic:
    - intent is detected by a fixed bilingual keyword set,
    - addresses are matched by shape only (full pattern first, then a "truncated" pattern),
    - amounts follow the ordered first-match-wins rules in `src.intent.amount`,
    - it never raises; internal faults produce a degraded result.
"""

from __future__ import annotations

import logging
import re

from src.intent.address import chain_for_address, validate_address
from src.intent.amount import extract_amount
from src.intent.dictionaries import (
    QUESTION_ADDRESS,
    QUESTION_AMOUNT,
    QUESTION_UNIT,
    has_send_keyword,
)
from src.intent.schema import (
    MAX_CLARIFYING_QUESTIONS,
    Chain,
    ErrorKind,
    IntentKind,
    ParseResult,
)

logger = logging.getLogger(__name__)

NOT_SEND_CONFIDENCE = 0.99
COMPLETE_CONFIDENCE = 0.95
CLARIFICATION_CONFIDENCE = 0.60
FAILURE_CONFIDENCE = 0.1
INVALID_ADDRESS_PENALTY = 0.2
INVALID_ADDRESS_FLOOR = 0.3

ERROR_TRUNCATED = "address appears truncated"
ERROR_INVALID_ADDRESS = "invalid address format"
ERROR_PARSE_FAILURE = "parse failure"

_FULL_ADDRESS_RE = re.compile(r"(?:celestia1|mocha1)[a-z0-9]{38,58}", re.IGNORECASE)
_PARTIAL_ADDRESS_RE = re.compile(r"(?:celestia1|mocha1)[a-z0-9]{3,}", re.IGNORECASE)


def _infer_chain_from_text(text: str) -> Chain:
    lowered = text.lower()
    if "celestia" in lowered:
        return Chain.celestia
    if "mocha" in lowered:
        return Chain.mocha
    return Chain.unknown


def _missing_slot_questions(result: ParseResult) -> list[str]:
    questions: list[str] = []
    if not result.address:
        questions.append(QUESTION_ADDRESS)
    if result.amount.numeric is None:
        questions.append(QUESTION_AMOUNT)
    if not result.amount.unit:
        questions.append(QUESTION_UNIT)
    return questions[:MAX_CLARIFYING_QUESTIONS]


def _extract_send(text: str) -> ParseResult:
    result = ParseResult(raw_text=text, intent=IntentKind.send)

    full_match = _FULL_ADDRESS_RE.search(text)
    if full_match:
        result.address = full_match.group(0)
        result.address_valid = validate_address(result.address)
        result.chain = chain_for_address(result.address)
    else:
        partial_match = _PARTIAL_ADDRESS_RE.search(text)
        if partial_match:
            result.address = partial_match.group(0)
            result.address_valid = False
            result.chain = chain_for_address(result.address)
            result.error = ERROR_TRUNCATED
            result.error_kind = ErrorKind.truncation_suspicion

    if result.chain == Chain.unknown:
        result.chain = _infer_chain_from_text(text)

    result.amount = extract_amount(text)

    questions = _missing_slot_questions(result)
    if questions:
        result.need_clarification = True
        result.clarifying_questions = questions
        result.confidence = CLARIFICATION_CONFIDENCE
    else:
        result.confidence = COMPLETE_CONFIDENCE

    if result.address and not result.address_valid:
        # A truncated address keeps its own diagnostic; the penalty applies either way.
        if result.error_kind != ErrorKind.truncation_suspicion:
            result.error = ERROR_INVALID_ADDRESS
            result.error_kind = ErrorKind.address_format
        result.confidence = max(
            INVALID_ADDRESS_FLOOR, result.confidence - INVALID_ADDRESS_PENALTY
        )

    return result


def extract(text: str) -> ParseResult:
    """Parse free-form text into a ParseResult.

    Never raises: any internal fault yields a degraded result with `confidence=0.1` and
    `error_kind=extraction_failure`.
    """

    raw_text = text if isinstance(text, str) else ""

    try:
        if not has_send_keyword(raw_text):
            return ParseResult(
                raw_text=raw_text,
                intent=IntentKind.other,
                confidence=NOT_SEND_CONFIDENCE,
            )
        return _extract_send(raw_text)
    except Exception:  # noqa: BLE001 - extraction must never fail the caller
        logger.exception("extraction failed")
        return ParseResult(
            raw_text=raw_text,
            intent=IntentKind.send,
            confidence=FAILURE_CONFIDENCE,
            error=ERROR_PARSE_FAILURE,
            error_kind=ErrorKind.extraction_failure,
        )
