from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient


def pytest_configure() -> None:
    # Keep a local .env from leaking into the test run.
    os.environ["ENVIRONMENT"] = "test"
    os.environ.setdefault("JWT_SECRET", "test-secret")


COMPANIES = [
    {
        "handle": f"c{i}",
        "name": f"C{i}",
        "description": f"Desc{i}",
        "num_employees": i,
        "logo_url": f"http://c{i}.img",
    }
    for i in (1, 2, 3)
]

JOBS = [
    {"title": "new", "salary": 1, "equity": "0", "company_handle": "c1"},
    {"title": "old", "salary": 2, "equity": "0", "company_handle": "c2"},
    {"title": "new", "salary": 3, "equity": "0.2", "company_handle": "c3"},
]


def seed(database: Any) -> None:
    from app.services.company_service import CompanyService
    from app.services.job_service import JobService

    companies = CompanyService(database)
    for company in COMPANIES:
        companies.create(**company)
    jobs = JobService(database, companies)
    for job in JOBS:
        jobs.create(**job)


@pytest.fixture()
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture()
def db(db_url: str) -> Iterator[Any]:
    from app.database import build_engine, create_tables
    from app.db.sql import Database

    database = Database(build_engine(db_url))
    create_tables(database.engine)
    seed(database)
    yield database
    database.dispose()


@pytest.fixture()
def client(db_url: str) -> Iterator[TestClient]:
    from app.main import create_app

    app = create_app(db_url=db_url)
    with TestClient(app) as c:
        seed(app.state.database)
        yield c


def _bearer(sub: str, *, is_admin: bool) -> dict[str, str]:
    from app.utils.jwt_handler import create_access_token

    token = create_access_token({"sub": sub, "is_admin": is_admin})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    return _bearer("admin", is_admin=True)


@pytest.fixture()
def user_headers() -> dict[str, str]:
    return _bearer("u1", is_admin=False)
