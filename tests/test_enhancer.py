"""Tests for local/remote parse reconciliation."""

from __future__ import annotations

from typing import Any

import pytest

from src.intent.enhancer import enhance
from src.intent.extractor import extract
from src.intent.llm_parser import LLMParserError
from src.intent.schema import Chain, ErrorKind, IntentKind


class _FakeRemote:
    def __init__(self, response: dict[str, Any] | None = None, exc: Exception | None = None) -> None:
        self.response = response or {}
        self.exc = exc
        self.calls: list[str] = []

    async def __call__(self, text: str) -> dict[str, Any]:
        """Record the call and return the canned document (or raise)."""
        self.calls.append(text)
        if self.exc is not None:
            raise self.exc
        return self.response


def _remote_complete(address: str) -> dict[str, Any]:
    return {
        "raw_text": "ignored",
        "address": address,
        "address_valid": True,
        "chain": "celestia",
        "amount": {"original": "5 TIA", "numeric": 5, "unit": "TIA"},
        "need_clarification": False,
        "clarifying_questions": [],
        "intent": "send",
        "confidence": 0.9,
        "error": None,
    }


@pytest.mark.asyncio
async def test_trusted_local_result_skips_remote(celestia_address: str) -> None:
    text = f"Envía 5 TIA a {celestia_address}"
    local = extract(text)
    remote = _FakeRemote(_remote_complete(celestia_address))

    result = await enhance(local, text, remote=remote)

    assert result is local
    assert remote.calls == []


@pytest.mark.asyncio
async def test_disabled_remote_returns_local() -> None:
    local = extract("Envía TIA")
    assert await enhance(local, "Envía TIA", remote=None) is local


@pytest.mark.asyncio
async def test_low_confidence_local_is_overwritten_by_remote(celestia_address: str) -> None:
    text = "Envía cinco TIA a mi amigo"
    local = extract(text)
    assert local.confidence < 0.7

    remote = _FakeRemote(_remote_complete(celestia_address))
    result = await enhance(local, text, remote=remote)

    assert remote.calls == [text]
    assert result.raw_text == text
    assert result.address == celestia_address
    assert result.address_valid is True
    assert result.need_clarification is False
    assert result.clarifying_questions == []
    assert result.confidence == 0.9
    assert result.error_kind is None


@pytest.mark.asyncio
async def test_remote_overwrites_only_supplied_keys(celestia_address: str) -> None:
    text = "Manda 3 TIA por favor"
    local = extract(text)
    remote = _FakeRemote({"address": celestia_address, "address_valid": True})

    result = await enhance(local, text, remote=remote)

    assert result.address == celestia_address
    assert result.amount == local.amount
    assert result.intent == IntentKind.send
    # Remote confidence is missing, so the local score is kept.
    assert result.confidence == local.confidence
    assert result.need_clarification is True


@pytest.mark.asyncio
async def test_medium_confidence_keeps_local_fields() -> None:
    text = "Envía 5 TIA a celestia1abc"
    local = extract(text)
    assert 0.7 <= local.confidence <= 0.8

    remote = _FakeRemote({"address": "celestia1other", "chain": "mocha", "confidence": 0.85})
    result = await enhance(local, text, remote=remote)

    assert result is not local
    assert result.address == "celestia1abc"
    assert result.chain == Chain.celestia
    assert result.error_kind == ErrorKind.truncation_suspicion
    assert result.confidence == 0.85


@pytest.mark.asyncio
async def test_remote_error_is_marked() -> None:
    text = "Envía TIA"
    local = extract(text)
    remote = _FakeRemote({"intent": "send", "error": "missing address", "confidence": 0.5})

    result = await enhance(local, text, remote=remote)

    assert result.error == "missing address"
    assert result.error_kind == ErrorKind.remote_reported
    assert result.confidence == pytest.approx(0.6)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "remote",
    [
        _FakeRemote(exc=LLMParserError("LLM connection error")),
        _FakeRemote(exc=RuntimeError("unexpected")),
        _FakeRemote({"confidence": 7}),
        _FakeRemote({"chain": "ethereum"}),
    ],
)
async def test_remote_failure_falls_back_to_local(remote: _FakeRemote) -> None:
    text = "Envía TIA"
    local = extract(text)
    snapshot = local.model_copy(deep=True)

    result = await enhance(local, text, remote=remote)

    assert result is local
    assert result == snapshot
    assert remote.calls == [text]
