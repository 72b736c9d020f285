import os
import tempfile
from pathlib import Path

import pytest

# nearcade 임포트 전에 임시 DB/로그 경로 지정
_TMP = Path(tempfile.mkdtemp(prefix="nearcade-test-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP / 'test.db'}"
os.environ["LOG_DIR"] = str(_TMP / "logs")

from fastapi.testclient import TestClient  # noqa: E402

from nearcade.main import app  # noqa: E402


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as c:
        r = c.post("/admin/ingest/mock")
        assert r.status_code == 200
        yield c
