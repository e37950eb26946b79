"""Amount/unit extraction rules.

Rules are evaluated in a fixed order and the first rule that matches anywhere in the text wins,
even when a later rule would match a more specific fragment. In "envía cinco a celestia1qx..."
no rule with a unit matches, so the bare-number rule picks the "1" of the address prefix before
the spelled-out "cinco" is ever considered.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.intent.dictionaries import NUMBER_WORDS, UNIT_TOKENS, infer_unit
from src.intent.schema import Amount

_NUMBER = r"\d+(?:\.\d+)?"
_WORD = "|".join(sorted(NUMBER_WORDS, key=lambda w: (-len(w), w)))
_UNIT = "|".join(sorted(UNIT_TOKENS, key=lambda u: (-len(u), u)))


@dataclass(frozen=True)
class AmountRule:
    """One amount pattern with a `number` group and an optional `unit` group."""

    name: str
    pattern: re.Pattern[str]

    def first_match(self, text: str) -> re.Match[str] | None:
        return self.pattern.search(text)


AMOUNT_RULES: tuple[AmountRule, ...] = (
    AmountRule(
        name="number_with_unit",
        pattern=re.compile(rf"(?P<number>{_NUMBER})\s*(?P<unit>{_UNIT})", re.IGNORECASE),
    ),
    AmountRule(
        name="word_with_unit",
        pattern=re.compile(rf"\b(?P<number>{_WORD})\s*(?P<unit>{_UNIT})", re.IGNORECASE),
    ),
    AmountRule(
        name="bare_number",
        pattern=re.compile(rf"(?P<number>{_NUMBER})"),
    ),
    AmountRule(
        name="bare_word",
        pattern=re.compile(rf"\b(?P<number>{_WORD})\b", re.IGNORECASE),
    ),
)


def _to_number(raw: str) -> float | None:
    word_value = NUMBER_WORDS.get(raw.lower())
    if word_value is not None:
        return float(word_value)
    try:
        return float(raw)
    except ValueError:
        return None


def extract_amount(text: str) -> Amount:
    """Extract the amount and unit using the ordered rules (first match wins)."""

    amount = Amount()
    for rule in AMOUNT_RULES:
        match = rule.first_match(text)
        if match is None:
            continue

        groups = match.groupdict()
        amount = Amount(
            original=match.group(0),
            numeric=_to_number(groups["number"]),
            unit=groups.get("unit") or None,
        )
        break

    if amount.numeric is not None and not amount.unit:
        amount = amount.model_copy(update={"unit": infer_unit(text)})

    return amount
