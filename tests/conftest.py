import os

os.environ.setdefault("ADMIN_API_TOKEN", "test-admin-token")
os.environ.setdefault("SEED_DEMO_DATA", "true")
os.environ.setdefault("DEFAULT_CURRENCY", "RWF")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from admin_backend.app.config import get_settings  # noqa: E402
from admin_backend.app.main import app  # noqa: E402
from admin_console.admin_client import AdminClient  # noqa: E402

TOKEN = get_settings().admin_api_token


@pytest.fixture()
def api():
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def auth_headers():
    return {"Authorization": f"Bearer {TOKEN}"}


@pytest.fixture()
def admin_client(api):
    """Console client wired to the in-process mock API."""
    return AdminClient("http://testserver/api", token=TOKEN, session=api)
