from __future__ import annotations

from pathlib import Path
from typing import Generator

import os
import pytest

import sys


ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# ClientConfig reads IPFS_* variables; keep the host environment out of tests.
for _name in [name for name in os.environ if name.upper().startswith("IPFS_")]:
    os.environ.pop(_name)

from ipfs_client.config import ClientConfig


@pytest.fixture
def config() -> Generator[ClientConfig, None, None]:
    """Return a config pointing at the default local daemon address."""

    yield ClientConfig(host="localhost", port=5001, user_agent="test-agent")
