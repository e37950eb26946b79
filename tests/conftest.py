"""Pytest configuration.

The repository uses a flat `src/` layout. This conftest ensures tests can import from the `src.*`
namespace when running `pytest` without installing the package, and provides shared addresses.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `import src...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

CELESTIA_ADDRESS = "celestia16e3rskkaa8l7p92uny3pqh2c96mlkhq524aksf"
MOCHA_ADDRESS = "mocha1qx8v3zn0w5k7j2m4h6g9f1d3s5e7p9l2k4j6h8g0"


@pytest.fixture()
def celestia_address() -> str:
    return CELESTIA_ADDRESS


@pytest.fixture()
def mocha_address() -> str:
    return MOCHA_ADDRESS
