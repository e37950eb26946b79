"""Wallet collaborator boundary.

Signing and broadcasting live outside this project. The bot only hands a finished `TransferIntent`
to whatever gateway is configured and displays the receipt it gets back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from src.intent.schema import TransferIntent


@dataclass(frozen=True)
class TransferReceipt:
    """What the wallet reports back after broadcasting a transfer."""

    tx_hash: str
    gas_used: str


class WalletGateway(Protocol):
    async def send_tokens(self, intent: TransferIntent) -> TransferReceipt: ...
