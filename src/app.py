"""Application composition root.

This module wires together configuration, the optional remote parser, per-chat sessions and the
wallet collaborator for the bot runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.config.settings import Settings
from src.conversation.registry import SessionRegistry
from src.intent.llm_parser import LLMRemoteParser
from src.wallet.gateway import WalletGateway


@dataclass(frozen=True)
class App:
    """Shared application dependencies for handlers."""

    settings: Settings
    sessions: SessionRegistry
    wallet: WalletGateway | None = None


def create_app(settings: Settings, *, wallet: WalletGateway | None = None) -> App:
    """Create the application container.

    Note:
        Without a wallet gateway, ready transfers are reported to the user but never executed.
    """

    llm_config = settings.llm_config()
    remote = LLMRemoteParser(llm_config) if llm_config is not None else None
    sessions = SessionRegistry(remote=remote, max_sessions=settings.max_sessions)
    return App(settings=settings, sessions=sessions, wallet=wallet)
