import os
import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def schema_path():
    from daily.config import DEFAULT_SCHEMA_PATH
    assert os.path.exists(DEFAULT_SCHEMA_PATH)
    return DEFAULT_SCHEMA_PATH


@pytest.fixture()
def db_path(tmp_path):
    return str(tmp_path / "daily_test.db")


@pytest.fixture()
def repo(db_path, schema_path):
    from daily.repository import new_repository
    r = new_repository(db_path, schema_path)
    yield r
    r.close()


@pytest.fixture()
def memory_repo():
    from daily.repository import InMemoryRepository
    return InMemoryRepository()


@pytest.fixture(params=["sqlite", "memory"])
def any_repo(request, repo, memory_repo):
    return repo if request.param == "sqlite" else memory_repo


@pytest.fixture()
def client(db_path, schema_path):
    from fastapi.testclient import TestClient
    from daily.api import create_app
    from daily.config import AppConfig
    app = create_app(AppConfig(db_path=db_path, schema_path=schema_path))
    yield TestClient(app)
    app.state.repo.close()
