from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Keep `import gqlws...` and `import tests...` working when running `pytest` from the repo root.
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


@pytest.fixture(autouse=True)
def _clean_gqlws_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "GQLWS_HANDSHAKE_TIMEOUT_S",
        "GQLWS_READ_TIMEOUT_S",
        "GQLWS_OPEN_TIMEOUT_S",
        "GQLWS_SERVER_START_TIMEOUT_S",
        "GQLWS_STRICT_HANDSHAKE",
        "GQLWS_MAX_MESSAGE_BYTES",
        "GQLWS_OPERATION_ID",
        "GQLWS_SUBPROTOCOL",
    ):
        monkeypatch.delenv(name, raising=False)
