"""aiogram message handlers.

Hard contract: every incoming message gets exactly one text reply. Internal errors never reach the
user; they are logged and answered with a generic apology.
"""

from __future__ import annotations

import logging

from aiogram.types import Message

from src.app import App
from src.conversation import replies
from src.intent.dictionaries import detect_sensitive_request
from src.intent.schema import TransferIntent

logger = logging.getLogger(__name__)


def _join(lines: list[str] | tuple[str, ...]) -> str:
    return "\n".join(lines)


def _chat_key(message: Message) -> int:
    chat = getattr(message, "chat", None)
    return getattr(chat, "id", 0)


async def _execute_transfer(app: App, intent: TransferIntent) -> list[str]:
    if app.wallet is None:
        logger.info("transfer not executed reason=no_wallet chain=%s", intent.chain)
        return [replies.WALLET_NOT_CONNECTED]

    try:
        receipt = await app.wallet.send_tokens(intent)
    except Exception:  # noqa: BLE001 - wallet faults are reported, not raised
        logger.exception("wallet send failed")
        return [replies.WALLET_FAILED]

    logger.info("transfer sent chain=%s tx_hash=%s", intent.chain, receipt.tx_hash)
    return replies.receipt_lines(receipt.tx_hash, receipt.gas_used)


async def handle_start(message: Message, app: App) -> None:
    """Reply to /start and /help with the usage guide."""

    del app
    await message.answer(_join(replies.help_lines()))


async def handle_reset(message: Message, app: App) -> None:
    """Reply to /reset after clearing the chat's session."""

    app.sessions.reset(_chat_key(message))
    await message.answer(replies.RESET_DONE)


async def handle_message(message: Message, app: App) -> None:
    """Handle any other incoming message with the chat's conversation."""

    reply_lines: list[str] = list(replies.APOLOGY)

    # noinspection PyBroadException
    try:
        raw_text = message.text or message.caption or ""
        if app.settings.sensitive_guard and detect_sensitive_request(raw_text):
            logger.info("refused sensitive request")
            await message.answer(_join(replies.SENSITIVE_REFUSAL))
            return

        key = _chat_key(message)
        async with app.sessions.lock_for(key):
            turn = await app.sessions.get(key).process_message(raw_text)

        reply_lines = list(turn.responses)
        if turn.transaction_data is not None:
            reply_lines += ["", *await _execute_transfer(app, turn.transaction_data)]
    except Exception:
        # Handler boundary: any internal error must still produce a conversational reply.
        logger.exception("handler failed")

    await message.answer(_join(reply_lines))
