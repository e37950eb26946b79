"""User-facing reply copy (Spanish).

Replies are plain lines; the transport decides how to join or render them.
"""

from __future__ import annotations

from decimal import Decimal

from src.intent.schema import TransferIntent

ADDRESS_PREVIEW_CHARS = 20

NOT_SEND_INTENT: tuple[str, ...] = (
    "Entiendo que quieres hacer algo, pero no veo una instrucción clara para enviar tokens.",
    "Puedes decirme algo como: 'Envía 5 TIA a celestia1abc...' o "
    "'¿Podrías mandar 2 mocha a celestia1xyz...?'",
)

CLARIFICATION_INTRO = "Necesito más información para procesar tu transacción:"
CLARIFICATION_OUTRO = "¿Podrías proporcionar estos datos?"

INVALID_ADDRESS: tuple[str, ...] = (
    "La dirección que proporcionaste no parece válida.",
    "Las direcciones de Celestia deben empezar con 'celestia1' (o 'mocha1') seguido de letras "
    "minúsculas y números.",
    "¿Podrías verificar la dirección?",
)

INCOMPLETE: tuple[str, ...] = (
    "No pude completar todos los datos de la transferencia.",
    "Indícame la cantidad, la unidad (ej. TIA) y la dirección de destino en un solo mensaje.",
)

APOLOGY: tuple[str, ...] = (
    "Disculpa, hubo un error procesando tu mensaje.",
    "¿Podrías intentar de nuevo con una instrucción más específica?",
)

SENSITIVE_REFUSAL: tuple[str, ...] = (
    "Por seguridad no manejo llaves privadas, frases semilla ni contraseñas.",
    "Nunca compartas esos datos con nadie, tampoco conmigo.",
)

RESET_DONE = "Listo, empecemos de nuevo. ¿Qué transferencia quieres hacer?"

WALLET_NOT_CONNECTED = "No hay una billetera conectada, así que no puedo ejecutar la transacción."
WALLET_FAILED = "No se pudo ejecutar la transacción. Inténtalo de nuevo más tarde."


def format_amount(value: float) -> str:
    """Render the exact amount that is sent: positional notation, no trailing `.0`.

    `repr` gives the shortest string that round-trips to the same float; `Decimal` expands any
    exponent (`1e-05` -> `0.00001`).
    """

    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def address_preview(address: str) -> str:
    return f"{address[:ADDRESS_PREVIEW_CHARS]}..."


def clarification_lines(questions: list[str]) -> list[str]:
    return [CLARIFICATION_INTRO, *questions, CLARIFICATION_OUTRO]


def confirmation_lines(intent: TransferIntent) -> list[str]:
    return [
        "¡Perfecto! He entendido tu solicitud:",
        f"Cantidad: {format_amount(intent.amount)} {intent.unit}",
        f"Destino: {address_preview(intent.to_address)}",
        f"Red: {intent.chain}",
        "",
        "Procediendo a ejecutar la transacción...",
    ]


def receipt_lines(tx_hash: str, gas_used: str) -> list[str]:
    return [
        "Transacción enviada.",
        f"Hash: {tx_hash}",
        f"Gas usado: {gas_used}",
    ]


def help_lines() -> list[str]:
    """Greeting shown on /start and /help."""

    return [
        "¡Hola! Soy tu asistente para transferencias en Celestia.",
        "",
        "Puedo ayudarte a enviar tokens TIA usando lenguaje natural.",
        "",
        "Ejemplos:",
        "• 'Envía 5 TIA a celestia1abc...'",
        "• 'Manda 0.1 TIA a celestia1xyz...'",
        "• 'Transfer two mocha to mocha1...'",
        "",
        "Necesito estos datos para procesar tu transacción:",
        "• Cantidad y unidad (ej: '5 TIA')",
        "• Dirección de destino (celestia1...)",
        "",
        "¿En qué te puedo ayudar hoy?",
    ]
