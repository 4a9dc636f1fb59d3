import os
import sys
from pathlib import Path

import pytest
from helpers import mark_by_dir


@pytest.fixture(autouse=True)
def _ensure_src_on_syspath():
    # Add project src/ to sys.path for src-layout imports
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))
    yield


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    # Keep developer credentials and cache dirs out of the tests
    for key in list(os.environ):
        if key.startswith("ARI_CHECKER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ARI_CHECKER_DIRECTORIES__HOME", str(tmp_path / "ari-home"))
    yield


TESTS = Path(__file__).parent

def pytest_collection_modifyitems(config, items):
    # Mark tests by directory structure
    mark_by_dir(items, TESTS / "ari_checker" / "core", pytest.mark.unit)
    mark_by_dir(items, TESTS / "ari_checker" / "infra", pytest.mark.integration)
    mark_by_dir(items, TESTS / "ari_checker" / "app", pytest.mark.e2e)
    mark_by_dir(items, TESTS / "ari_checker" / "shared", pytest.mark.unit)
