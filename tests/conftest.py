from pathlib import Path
import os
import sys

# Run Qt headless when no display is available
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import httpx
import pytest

# Ensure src/ is on sys.path for direct test invocation without an editable install
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from weekly_planner.api_client import PlannerApiClient, PlannerApiConfig
from weekly_planner.config import PlannerConfig
from weekly_planner.database_manager import DBConfig, DatabaseManager
from weekly_planner.server import create_app


@pytest.fixture()
def db(tmp_path: Path):
    config = DBConfig(path=tmp_path / "test.sqlite")
    manager = DatabaseManager(config)
    manager.init_db()
    yield manager
    manager.close()


@pytest.fixture()
def app(tmp_path: Path):
    return create_app(PlannerConfig(home=tmp_path))


@pytest.fixture()
def http(app):
    return app.test_client()


@pytest.fixture()
def api(app):
    # Real client talking to the Flask app in-process
    client = PlannerApiClient(
        PlannerApiConfig(base_url="http://planner.test/api"),
        transport=httpx.WSGITransport(app=app),
    )
    yield client
    client.close()
