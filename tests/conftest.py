import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def _is_e2e_test(request: pytest.FixtureRequest) -> bool:
    return "tests/e2e/" in str(request.node.fspath).replace("\\", "/")


@pytest.fixture(autouse=True)
def isolated_focusquest_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("FOCUSQUEST_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def e2e_fast_env(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch, isolated_focusquest_env) -> None:
    if not _is_e2e_test(request):
        return

    monkeypatch.setenv("FOCUSQUEST_EVENT_PROFILE", "development")
    monkeypatch.setenv("FOCUSQUEST_SEED", "7")
