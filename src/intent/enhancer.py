"""Local/remote parse reconciliation (remote LLM optional; local result is the fallback)."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from src.intent.schema import ErrorKind, ParseResult, parse_result_from_obj

logger = logging.getLogger(__name__)

RemoteParser = Callable[[str], Awaitable[dict[str, Any]]]

TRUSTED_CONFIDENCE = 0.8
LOW_CONFIDENCE = 0.7


def is_trusted(result: ParseResult) -> bool:
    """Whether a local result is good enough to skip the remote parser."""

    return result.confidence > TRUSTED_CONFIDENCE and not result.need_clarification


def merge_results(local: ParseResult, remote_obj: dict[str, Any], text: str) -> ParseResult:
    """Merge a validated remote document into the local result.

    Strategy:
        1) Start from the local result.
        2) If the local confidence is low, every field the remote document supplies wins.
        3) Always keep the original text and the higher of both confidence scores.

    Raises:
        pydantic.ValidationError: If the remote document does not fit the ParseResult schema.
    """

    remote = parse_result_from_obj(remote_obj)
    confidence = max(local.confidence, remote.confidence)

    if local.confidence >= LOW_CONFIDENCE:
        return local.model_copy(update={"raw_text": text, "confidence": confidence})

    merged = parse_result_from_obj(
        {
            **local.model_dump(),
            **remote.model_dump(exclude_unset=True),
            "raw_text": text,
            "confidence": confidence,
        }
    )
    if "error" in remote.model_fields_set:
        merged.error_kind = ErrorKind.remote_reported if merged.error else None
    else:
        merged.error_kind = local.error_kind
    return merged


async def enhance(
        local: ParseResult,
        text: str,
        *,
        remote: RemoteParser | None,
) -> ParseResult:
    """Optionally improve a local parse with the remote parser.

    High-confidence complete local results are returned as-is (same object) and no remote call is
    made. Any remote failure falls back to the local result unchanged.
    """

    if is_trusted(local) or remote is None:
        return local

    # noinspection PyBroadException
    try:
        remote_obj = await remote(text)
        return merge_results(local, remote_obj, text)
    except Exception as exc:  # noqa: BLE001 - remote failures must never reach the user
        logger.warning("remote enhancement failed reason=%s", type(exc).__name__)
        return local
