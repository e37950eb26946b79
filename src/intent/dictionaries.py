"""Bilingual (ES/EN) dictionaries for transfer parsing.

These mappings are used by the local extractor and should remain small and deterministic.
"""

from __future__ import annotations

SEND_KEYWORDS: tuple[str, ...] = (
    "envía",
    "envia",
    "manda",
    "mande",
    "send",
    "transfer",
    "transferir",
    "enviar",
)

NUMBER_WORDS: dict[str, int] = {
    "cero": 0,
    "zero": 0,
    "uno": 1,
    "una": 1,
    "one": 1,
    "dos": 2,
    "two": 2,
    "tres": 3,
    "three": 3,
    "cuatro": 4,
    "four": 4,
    "cinco": 5,
    "five": 5,
    "seis": 6,
    "six": 6,
    "siete": 7,
    "seven": 7,
    "ocho": 8,
    "eight": 8,
    "nueve": 9,
    "nine": 9,
    "diez": 10,
    "ten": 10,
}

UNIT_TOKENS: tuple[str, ...] = ("tia", "mocha", "utia", "umocha", "atom", "uatom")

# Order matters: the first substring found wins when a unit has to be inferred.
UNIT_HINTS: tuple[tuple[str, str], ...] = (
    ("tia", "TIA"),
    ("mocha", "MOCHA"),
)

SENSITIVE_KEYWORDS: tuple[str, ...] = (
    "private key",
    "clave privada",
    "seed phrase",
    "frase semilla",
    "mnemonic",
    "mnemónica",
    "password",
    "contraseña",
)

QUESTION_ADDRESS = "¿A qué dirección quieres enviar?"
QUESTION_AMOUNT = "¿Cuánto quieres enviar?"
QUESTION_UNIT = "¿En qué unidad (ej. TIA, MOCHA)?"


def has_send_keyword(text: str) -> bool:
    """Whether the text contains any send-intent keyword (case-insensitive substring match)."""

    lowered = (text or "").lower()
    return any(keyword in lowered for keyword in SEND_KEYWORDS)


def infer_unit(text: str) -> str | None:
    """Infer a unit from loose mentions in the text ("tia" before "mocha")."""

    lowered = (text or "").lower()
    for hint, unit in UNIT_HINTS:
        if hint in lowered:
            return unit
    return None


def detect_sensitive_request(text: str) -> bool:
    """Whether the text mentions secrets that must never be requested or handled."""

    lowered = (text or "").lower()
    return any(keyword in lowered for keyword in SENSITIVE_KEYWORDS)
