# tests/conftest.py
import os
import tempfile
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from factexplorer.main import app
from factexplorer.db import Base, get_db
from factexplorer.facts import build_rows
from factexplorer.models import HostFacts


# --- Temporary SQLite DB file for the whole test session ---
@pytest.fixture(scope="session")
def tmp_db_url():
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    url = f"sqlite:///{path}"
    yield url
    try:
        os.remove(path)
    except OSError:
        pass


@pytest.fixture(scope="session")
def engine(tmp_db_url):
    eng = create_engine(tmp_db_url, connect_args={"check_same_thread": False}, future=True)
    Base.metadata.create_all(bind=eng)
    return eng


@pytest.fixture(scope="function")
def db_session(engine):
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)
    db = TestingSession()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


# --- Override FastAPI's DB dependency to use our test session ---
@pytest.fixture(autouse=True)
def override_get_db(db_session):
    def _get_db():
        try:
            yield db_session
        finally:
            pass
    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def _clear_all(db):
    db.execute(text("DELETE FROM facts"))
    db.commit()


@pytest.fixture
def seed_sample(db_session):
    """Two cached hosts, one with a modification time and one without."""
    _clear_all(db_session)
    db_session.add_all([
        HostFacts(
            hostname="web-01",
            data={"ansible_distribution": "Ubuntu", "ansible_processor_vcpus": 4,
                  "ansible_default_ipv4": {"address": "10.0.1.11"}},
            modified_at=datetime(2024, 5, 14, 9, 12, 44, tzinfo=timezone.utc),
        ),
        HostFacts(hostname="db-01", data={"ansible_distribution": "RedHat"}),
    ])
    db_session.commit()


# --- Small in-memory snapshots for the engine tests ---
@pytest.fixture
def snapshot():
    return {
        "web-1": {
            "__awx_facts_modified_timestamp": "2024-05-14T09:12:44Z",
            "ansible_distribution": "Ubuntu",
            "ansible_distribution_version": "22.04",
            "ansible_processor_vcpus": 4,
            "ansible_memtotal_mb": 8192,
            "network": {"eth0": {"ipv4": "10.0.0.1"}},
            "role": "web",
        },
        "web-10": {
            "__awx_facts_modified_timestamp": "2024-05-10T00:00:00Z",
            "ansible_distribution": "Ubuntu",
            "ansible_processor_vcpus": 16,
            "ansible_memtotal_mb": 32768,
            "role": "web",
        },
        "db-2": {
            "ansible_distribution": "RedHat",
            "ansible_processor_vcpus": "8",
            "ansible_mounts": ["/", "/var"],
            "custom_distribution_note": "Ubuntu",
            "role": "database",
        },
        "empty": {},
    }


@pytest.fixture
def rows(snapshot):
    return build_rows(snapshot)
