from __future__ import annotations

from typing import Any

from app.db.sql import Database, DatabaseQueryError
from app.services.errors import NotFoundError


_COMPANY_COLUMNS = """
    handle,
    name,
    description,
    num_employees,
    logo_url
"""


class CompanyService:
    """Read access to companies; jobs only ever reference them."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def create(
        self,
        *,
        handle: str,
        name: str,
        description: str,
        num_employees: int | None = None,
        logo_url: str | None = None,
    ) -> dict[str, Any]:
        row = self.db.query_one(
            f"""
            INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {_COMPANY_COLUMNS}
            """,
            [handle, name, description, num_employees, logo_url],
        )
        if row is None:
            raise DatabaseQueryError("INSERT returned no row")
        return row

    def get_optional(self, handle: str) -> dict[str, Any] | None:
        return self.db.query_one(
            f"""
            SELECT {_COMPANY_COLUMNS}
            FROM companies
            WHERE handle = $1
            """,
            [handle],
        )

    def get(self, handle: str) -> dict[str, Any]:
        company = self.get_optional(handle)
        if company is None:
            raise NotFoundError(f"No company: {handle}")
        return company
