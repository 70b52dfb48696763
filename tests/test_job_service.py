from __future__ import annotations

import pytest

from app.db.sql import DatabaseQueryError
from app.services.company_service import CompanyService
from app.services.errors import BadRequestError, NotFoundError
from app.services.job_service import JobService


ALL_JOBS = [
    {"id": 1, "title": "new", "salary": 1, "equity": "0", "company_handle": "c1", "company_name": "C1"},
    {"id": 3, "title": "new", "salary": 3, "equity": "0.2", "company_handle": "c3", "company_name": "C3"},
    {"id": 2, "title": "old", "salary": 2, "equity": "0", "company_handle": "c2", "company_name": "C2"},
]


@pytest.fixture()
def jobs(db) -> JobService:
    return JobService(db)


# create


def test_create(jobs: JobService) -> None:
    new_job = {"title": "old", "salary": 100000, "equity": "0", "company_handle": "c1"}

    job = jobs.create(**new_job)

    assert job == {**new_job, "id": job["id"]}
    assert isinstance(job["id"], int)


def test_create_unknown_company(jobs: JobService) -> None:
    with pytest.raises(BadRequestError):
        jobs.create(title="x", salary=None, equity=None, company_handle="nope")


def test_create_then_get_nests_company(jobs: JobService) -> None:
    created = jobs.create(title="old", salary=100000, equity="0", company_handle="c1")

    job = jobs.get(created["id"])

    assert job["title"] == "old"
    assert job["salary"] == 100000
    assert job["equity"] == "0"
    assert "company_handle" not in job
    assert job["company"]["handle"] == "c1"


# find_all


def test_find_all_no_filter(jobs: JobService) -> None:
    assert jobs.find_all() == ALL_JOBS


def test_find_all_by_title(jobs: JobService) -> None:
    assert jobs.find_all(title="NEW") == [ALL_JOBS[0], ALL_JOBS[1]]


def test_find_all_by_title_substring(jobs: JobService) -> None:
    assert [job["title"] for job in jobs.find_all(title="l")] == ["old"]


@pytest.mark.parametrize("title", ["_", "%", "\\"])
def test_find_all_title_wildcards_match_literally(jobs: JobService, title: str) -> None:
    assert jobs.find_all(title=title) == []


def test_find_all_title_with_literal_underscore(jobs: JobService) -> None:
    created = jobs.create(title="data_eng", salary=None, equity=None, company_handle="c1")

    assert [job["id"] for job in jobs.find_all(title="A_E")] == [created["id"]]


def test_find_all_by_min_salary(jobs: JobService) -> None:
    assert jobs.find_all(min_salary=2) == [ALL_JOBS[1], ALL_JOBS[2]]


def test_find_all_by_equity(jobs: JobService) -> None:
    assert jobs.find_all(has_equity=True) == [ALL_JOBS[1]]


def test_find_all_equity_false_is_no_filter(jobs: JobService) -> None:
    assert jobs.find_all(has_equity=False) == ALL_JOBS


def test_find_all_combined_filters(jobs: JobService) -> None:
    assert jobs.find_all(title="new", min_salary=2) == [ALL_JOBS[1]]


def test_find_all_nothing_found(jobs: JobService) -> None:
    assert jobs.find_all(title="nope") == []


# get


def test_get(jobs: JobService) -> None:
    assert jobs.get(1) == {
        "id": 1,
        "title": "new",
        "salary": 1,
        "equity": "0",
        "company": {
            "handle": "c1",
            "name": "C1",
            "description": "Desc1",
            "num_employees": 1,
            "logo_url": "http://c1.img",
        },
    }


def test_get_not_found(jobs: JobService) -> None:
    with pytest.raises(NotFoundError):
        jobs.get(0)


# update


def test_update(jobs: JobService) -> None:
    update_data = {"title": "newer", "salary": 10000, "equity": "0.5"}

    job = jobs.update(1, update_data)

    assert job == {"id": 1, "company_handle": "c1", **update_data}
    assert jobs.get(1)["title"] == "newer"


def test_update_null_fields(jobs: JobService) -> None:
    job = jobs.update(1, {"salary": None, "equity": None})

    assert job == {"id": 1, "title": "new", "salary": None, "equity": None, "company_handle": "c1"}


def test_update_partial_keeps_other_fields(jobs: JobService) -> None:
    job = jobs.update(3, {"salary": 99})

    assert job == {"id": 3, "title": "new", "salary": 99, "equity": "0.2", "company_handle": "c3"}


def test_update_not_found(jobs: JobService) -> None:
    with pytest.raises(NotFoundError):
        jobs.update(0, {"title": "newer"})


@pytest.mark.parametrize("job_id", [1, 0])
def test_update_no_data(jobs: JobService, job_id: int) -> None:
    with pytest.raises(BadRequestError):
        jobs.update(job_id, {})


def test_update_rejects_company_handle(jobs: JobService) -> None:
    with pytest.raises(BadRequestError) as excinfo:
        jobs.update(1, {"title": "x", "company_handle": "c2"})
    assert excinfo.value.messages == ["Field cannot be updated: company_handle"]
    assert jobs.get(1)["company"]["handle"] == "c1"


# remove


def test_remove(jobs: JobService, db) -> None:
    jobs.remove(1)

    assert db.query("SELECT id FROM jobs WHERE id = $1", [1]) == []
    assert len(jobs.find_all()) == 2
    with pytest.raises(NotFoundError):
        jobs.get(1)


def test_remove_not_found(jobs: JobService) -> None:
    with pytest.raises(NotFoundError):
        jobs.remove(0)


# companies


def test_company_get(db) -> None:
    companies = CompanyService(db)

    assert companies.get("c2")["name"] == "C2"
    assert companies.get_optional("nope") is None
    with pytest.raises(NotFoundError):
        companies.get("nope")


def _drop_insert_rows(db, monkeypatch) -> None:
    real_query = db.query

    def query(sql, params=None):
        rows = real_query(sql, params)
        return [] if sql.lstrip().startswith("INSERT") else rows

    monkeypatch.setattr(db, "query", query)


def test_create_insert_without_row_is_query_error(jobs: JobService, db, monkeypatch) -> None:
    _drop_insert_rows(db, monkeypatch)

    with pytest.raises(DatabaseQueryError, match="INSERT returned no row"):
        jobs.create(title="x", salary=None, equity=None, company_handle="c1")


def test_company_create_insert_without_row_is_query_error(db, monkeypatch) -> None:
    _drop_insert_rows(db, monkeypatch)

    with pytest.raises(DatabaseQueryError, match="INSERT returned no row"):
        CompanyService(db).create(handle="c9", name="C9", description="Desc9")
