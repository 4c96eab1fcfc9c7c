from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for `import instant_store` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Keep INSTANT_STORE_* variables from the developer's shell out of the tests.
    """
    for name in ("INSTANT_STORE_PATH", "INSTANT_STORE_REMOVAL"):
        # setenv first so monkeypatch restores (or removes) whatever load_dotenv writes
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def sandbox_project(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """
    Run from a temp directory so default-path stores never touch the real cwd.
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "database.json"


@pytest.fixture
def doc_path(tmp_path: Path) -> Path:
    return tmp_path / "document.json"
