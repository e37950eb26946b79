"""Tests for the deterministic local transfer extractor."""

from __future__ import annotations

import pytest

from src.intent.dictionaries import QUESTION_ADDRESS, QUESTION_AMOUNT, QUESTION_UNIT
from src.intent.extractor import (
    ERROR_INVALID_ADDRESS,
    ERROR_PARSE_FAILURE,
    ERROR_TRUNCATED,
    extract,
)
from src.intent.schema import Chain, ErrorKind, IntentKind

_UPPERCASE_BODY = "QX8V3ZN0W5K7J2M4H6G9F1D3S5E7P9L2K4J6H8"


@pytest.mark.parametrize(
    "text",
    ["Hola, ¿cómo estás?", "", "🚀🚀🚀", "¿Cuál es mi saldo en celestia?", "x" * 500],
)
def test_non_send_text_short_circuits(text: str) -> None:
    result = extract(text)
    assert result.intent == IntentKind.other
    assert result.confidence == 0.99
    assert result.address == ""
    assert result.amount.numeric is None
    assert result.chain == Chain.unknown
    assert result.need_clarification is False
    assert result.raw_text == text


def test_complete_spanish_instruction(celestia_address: str) -> None:
    text = f"Envía 5 TIA a {celestia_address}"
    result = extract(text)
    assert result.intent == IntentKind.send
    assert result.raw_text == text
    assert result.address == celestia_address
    assert result.address_valid is True
    assert result.chain == Chain.celestia
    assert result.amount.numeric == 5
    assert result.amount.unit == "TIA"
    assert result.need_clarification is False
    assert result.clarifying_questions == []
    assert result.confidence == 0.95
    assert result.error is None


def test_spelled_out_number(celestia_address: str) -> None:
    result = extract(f"Envía cinco TIA a {celestia_address}")
    assert result.amount.numeric == 5
    assert result.amount.unit == "TIA"
    assert result.confidence == 0.95


def test_english_instruction_to_mocha(mocha_address: str) -> None:
    result = extract(f"Transfer two mocha to {mocha_address}")
    assert result.intent == IntentKind.send
    assert result.chain == Chain.mocha
    assert result.address_valid is True
    assert result.amount.numeric == 2
    assert result.amount.unit == "mocha"


def test_missing_everything_asks_three_questions() -> None:
    result = extract("Envía TIA")
    assert result.intent == IntentKind.send
    assert result.need_clarification is True
    assert result.clarifying_questions == [QUESTION_ADDRESS, QUESTION_AMOUNT, QUESTION_UNIT]
    assert result.confidence == 0.60
    assert result.chain == Chain.unknown


def test_missing_address_only() -> None:
    result = extract("Manda 3 TIA por favor")
    assert result.need_clarification is True
    assert result.clarifying_questions == [QUESTION_ADDRESS]
    assert result.confidence == 0.60


def test_address_digits_fill_a_missing_amount(celestia_address: str) -> None:
    result = extract(f"send to {celestia_address}")
    # No explicit amount: the bare-number rule picks up the digits of the address.
    assert result.amount.numeric == 16
    assert result.need_clarification is False


def test_chain_fallback_from_text() -> None:
    result = extract("manda 2 en la red mocha")
    assert result.chain == Chain.mocha
    assert result.amount.unit == "MOCHA"
    assert result.clarifying_questions == [QUESTION_ADDRESS]


def test_truncated_address_keeps_truncation_diagnostic() -> None:
    result = extract("Envía 5 TIA a celestia1abc")
    assert result.address == "celestia1abc"
    assert result.address_valid is False
    assert result.chain == Chain.celestia
    assert result.error == ERROR_TRUNCATED
    assert result.error != ERROR_INVALID_ADDRESS
    assert result.error_kind == ErrorKind.truncation_suspicion
    assert result.confidence == pytest.approx(0.75)


def test_truncated_address_prefix_supplies_amount() -> None:
    result = extract("Envía a mocha1xyz")
    assert result.error == ERROR_TRUNCATED
    assert result.amount.numeric == 1
    assert result.amount.unit == "MOCHA"
    assert result.need_clarification is False
    assert result.confidence == pytest.approx(0.75)


def test_malformed_full_address_is_penalized() -> None:
    address = "celestia1" + _UPPERCASE_BODY
    result = extract(f"Envía 5 TIA a {address}")
    assert result.address == address
    assert result.address_valid is False
    assert result.error == ERROR_INVALID_ADDRESS
    assert result.error_kind == ErrorKind.address_format
    assert result.confidence == pytest.approx(0.75)


def test_internal_failure_yields_degraded_result(monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(_text: str) -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr("src.intent.extractor.extract_amount", _boom)

    result = extract("Envía 5 TIA")
    assert result.confidence == 0.1
    assert result.error == ERROR_PARSE_FAILURE
    assert result.error_kind == ErrorKind.extraction_failure
    assert result.raw_text == "Envía 5 TIA"


def test_raw_text_is_preserved_verbatim(celestia_address: str) -> None:
    text = f"  Envía 5 TIA a {celestia_address}  \n"
    assert extract(text).raw_text == text


def test_error_kind_is_not_serialized() -> None:
    dumped = extract("Envía 5 TIA a celestia1abc").model_dump()
    assert "error_kind" not in dumped
    assert set(dumped) == {
        "raw_text",
        "address",
        "address_valid",
        "chain",
        "amount",
        "need_clarification",
        "clarifying_questions",
        "intent",
        "confidence",
        "error",
    }
