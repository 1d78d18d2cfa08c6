from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ACTIONS_MODULE = "keymenu_test_actions"


@pytest.fixture
def actions_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    """Importable module exposing ``kill``/``bury`` actions that record into ``CALLS``."""
    module_dir = tmp_path / "actions"
    module_dir.mkdir()
    (module_dir / f"{ACTIONS_MODULE}.py").write_text(
        "CALLS = []\n\n\n"
        "def kill():\n    CALLS.append('kill')\n\n\n"
        "def bury():\n    CALLS.append('bury')\n\n\n"
        "NOT_CALLABLE = 1\n",
        encoding="utf-8",
    )
    monkeypatch.syspath_prepend(str(module_dir))
    yield ACTIONS_MODULE
    sys.modules.pop(ACTIONS_MODULE, None)
