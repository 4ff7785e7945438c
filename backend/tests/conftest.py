from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from jailbox.core.scope import ScratchScopeManager
from jailbox.engines.script import ScriptHost
from jailbox.main import create_app
from tests.utils.script import make_context, make_host

API_SCRIPT = """
def collect():
    return {"files": bucket.list("notes"), "data": json.loads(bucket.read("data.json"))}

def check(user_input):
    if user_input == "":
        return Err("empty input")
    if user_input == "boom":
        return 1 / 0
    return Ok({"echo": user_input})
"""


@pytest.fixture
def context_dir(tmp_path: Path) -> Path:
    return make_context(tmp_path / "ctx")


@pytest.fixture
def scratch_base(tmp_path: Path) -> Path:
    base = tmp_path / "scratch"
    base.mkdir()
    return base


@pytest.fixture
def scopes(scratch_base: Path) -> ScratchScopeManager:
    return ScratchScopeManager(scratch_base)


@pytest.fixture
def api_host(context_dir: Path, scopes: ScratchScopeManager) -> ScriptHost:
    return make_host(API_SCRIPT, context_dir, scopes=scopes)


@pytest.fixture
def client(api_host: ScriptHost) -> Generator[TestClient, None, None]:
    with TestClient(create_app(api_host)) as c:
        yield c
