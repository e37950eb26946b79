"""Bot router composition."""

from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command

from src.bot.handlers import handle_message, handle_reset, handle_start

router = Router(name="root")
router.message.register(handle_start, Command("start", "help"))
router.message.register(handle_reset, Command("reset"))
router.message.register(handle_message)
