"""Structural address validation.

Only the shape of an address is checked: known prefix, minimum length and a lowercase
alphanumeric body. The bech32 checksum is NOT verified, so a well-shaped address with a typo in
its body still passes.
"""

from __future__ import annotations

import re

from src.intent.schema import Chain

_PREFIX_MIN_LENGTH: dict[str, int] = {
    "celestia1": 45,
    "mocha1": 40,
}

_BODY_RE = re.compile(r"[a-z0-9]+")


def validate_address(address: str) -> bool:
    """Return whether `address` is structurally valid."""

    if not address or not isinstance(address, str):
        return False

    for prefix, min_length in _PREFIX_MIN_LENGTH.items():
        if address.startswith(prefix):
            body = address[len(prefix):]
            return len(address) >= min_length and _BODY_RE.fullmatch(body) is not None

    return False


def chain_for_address(address: str) -> Chain:
    """Derive the chain from an address prefix (case-insensitive)."""

    lowered = (address or "").lower()
    if lowered.startswith("celestia1"):
        return Chain.celestia
    if lowered.startswith("mocha1"):
        return Chain.mocha
    return Chain.unknown
