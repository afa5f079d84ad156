import itertools
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

# must run before anything imports promdate.config
_TMP_DIR = tempfile.mkdtemp(prefix="promdate-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_TMP_DIR) / 'test.db'}"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest

from promdate import models  # noqa: F401
from promdate import repo
from promdate.auth.security import create_access_token
from promdate.database import Base, SessionLocal, engine
from promdate.models import GROUP_A


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def now():
    return datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_profile(db):
    counter = itertools.count(1)

    def _make(
        attribute=GROUP_A,
        *,
        user_id=None,
        organization="Springfield High",
        cohort_year="3rd",
        track="Science",
        interests=None,
        is_privileged=False,
    ):
        n = next(counter)
        profile = repo.create_profile(
            db,
            user_id=user_id or f"user-{n:03d}",
            display_name=f"User {n}",
            designated_attribute=attribute,
            organization=organization,
            cohort_year=cohort_year,
            track=track,
            interests=interests,
            is_privileged=is_privileged,
        )
        db.commit()
        return profile

    return _make


@pytest.fixture
def client(db):
    pytest.importorskip("fastapi")
    from fastapi.testclient import TestClient

    from promdate.main import app

    return TestClient(app)


@pytest.fixture
def auth_headers():
    def _headers(user_id):
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers
