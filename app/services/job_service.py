from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Mapping

from app.db.sql import Database, DatabaseQueryError
from app.services.company_service import CompanyService
from app.services.errors import BadRequestError, NotFoundError
from app.utils.sql import JOB_FIELD_COLUMNS, build_job_filter, sql_for_partial_update


logger = logging.getLogger(__name__)

_JOB_COLUMNS = """
    id,
    title,
    salary,
    equity,
    company_handle
"""

_LIST_SQL = """
SELECT j.id,
       j.title,
       j.salary,
       j.equity,
       j.company_handle,
       c.name AS company_name
FROM jobs j
LEFT JOIN companies AS c ON c.handle = j.company_handle
"""


def _equity_str(value: Any) -> str | None:
    # NUMERIC comes back as Decimal (postgres) or float/int (sqlite).
    if value is None:
        return None
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return str(value)


def _job_row(row: dict[str, Any]) -> dict[str, Any]:
    row["equity"] = _equity_str(row.get("equity"))
    return row


class JobService:
    """CRUD over the jobs table.

    Rows are plain dicts keyed by column name; `get` nests the company record
    under "company" in place of "company_handle".
    """

    def __init__(self, db: Database, companies: CompanyService | None = None) -> None:
        self.db = db
        self.companies = companies or CompanyService(db)

    def create(
        self,
        *,
        title: str,
        salary: int | None,
        equity: str | Decimal | None,
        company_handle: str,
    ) -> dict[str, Any]:
        if self.companies.get_optional(company_handle) is None:
            raise BadRequestError(f"No company: {company_handle}")

        row = self.db.query_one(
            f"""
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {_JOB_COLUMNS}
            """,
            [title, salary, _equity_str(equity), company_handle],
        )
        if row is None:
            raise DatabaseQueryError("INSERT returned no row")
        logger.info("job.create id=%s company=%s", row["id"], company_handle)
        return _job_row(row)

    def find_all(
        self,
        *,
        title: str | None = None,
        min_salary: int | None = None,
        has_equity: bool | None = None,
    ) -> list[dict[str, Any]]:
        job_filter = build_job_filter(title=title, min_salary=min_salary, has_equity=has_equity)
        rows = self.db.query(job_filter.apply(_LIST_SQL), job_filter.values)
        return [_job_row(row) for row in rows]

    def get(self, job_id: int) -> dict[str, Any]:
        row = self.db.query_one(
            f"""
            SELECT {_JOB_COLUMNS}
            FROM jobs
            WHERE id = $1
            """,
            [job_id],
        )
        if row is None:
            raise NotFoundError(f"No job: {job_id}")

        job = _job_row(row)
        company_handle = job.pop("company_handle")
        job["company"] = self.companies.get_optional(company_handle)
        return job

    def update(self, job_id: int, data: Mapping[str, Any]) -> dict[str, Any]:
        """Partial update: only the fields present in `data` change.

        `data` may hold title, salary and equity. Raises BadRequestError for an
        empty payload or any other field, NotFoundError for an unknown id.
        """

        not_updatable = sorted(set(data) - set(JOB_FIELD_COLUMNS))
        if not_updatable:
            raise BadRequestError([f"Field cannot be updated: {field}" for field in not_updatable])

        fields = dict(data)
        if "equity" in fields:
            fields["equity"] = _equity_str(fields["equity"])

        set_cols, values = sql_for_partial_update(fields, JOB_FIELD_COLUMNS)
        id_idx = len(values) + 1

        row = self.db.query_one(
            f"""
            UPDATE jobs
            SET {set_cols}
            WHERE id = ${id_idx}
            RETURNING {_JOB_COLUMNS}
            """,
            [*values, job_id],
        )
        if row is None:
            raise NotFoundError(f"No job: {job_id}")

        logger.info("job.update id=%s fields=%s", job_id, ",".join(fields))
        return _job_row(row)

    def remove(self, job_id: int) -> None:
        row = self.db.query_one(
            """
            DELETE FROM jobs
            WHERE id = $1
            RETURNING id
            """,
            [job_id],
        )
        if row is None:
            raise NotFoundError(f"No job: {job_id}")

        logger.info("job.remove id=%s", job_id)
