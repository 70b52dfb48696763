# sql.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, NamedTuple

from app.services.errors import BadRequestError


# External (JSON) field name -> jobs column. Only these fields may be patched.
JOB_FIELD_COLUMNS: dict[str, str] = {
    "title": "title",
    "salary": "salary",
    "equity": "equity",
}


def _check_field_columns(field_columns: Mapping[str, str]) -> None:
    for field, column in field_columns.items():
        if not column.isidentifier() or column != column.lower():
            raise ValueError(f"Invalid column name for {field!r}: {column!r}")


_check_field_columns(JOB_FIELD_COLUMNS)


class PartialUpdate(NamedTuple):
    set_cols: str
    values: list[Any]


def sql_for_partial_update(data: Mapping[str, Any], field_columns: Mapping[str, str]) -> PartialUpdate:
    """Build the SET clause of a partial UPDATE.

    `data` maps field names to new values (None is a real value). Each field is
    resolved through `field_columns`, falling back to the field name itself.

        >>> sql_for_partial_update({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
        PartialUpdate(set_cols='"first_name"=$1, "age"=$2', values=['Aliya', 32])

    Column names are interpolated as-is, so `field_columns` and the keys of `data`
    must come from trusted code, never from the request. Raises BadRequestError
    when `data` is empty.
    """

    if not data:
        raise BadRequestError("No data")

    cols = [f'"{field_columns.get(field, field)}"=${idx}' for idx, field in enumerate(data, start=1)]
    return PartialUpdate(set_cols=", ".join(cols), values=list(data.values()))


@dataclass(frozen=True)
class JobFilterQuery:
    expressions: tuple[str, ...] = ()
    values: tuple[Any, ...] = ()

    @property
    def where_clause(self) -> str:
        if not self.expressions:
            return ""
        return "WHERE " + " AND ".join(self.expressions)

    def apply(self, base_sql: str) -> str:
        parts = [base_sql.strip()]
        if self.where_clause:
            parts.append(self.where_clause)
        parts.append("ORDER BY j.title, j.id")
        return "\n".join(parts)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_job_filter(
    *,
    title: str | None = None,
    min_salary: int | None = None,
    has_equity: bool | None = None,
) -> JobFilterQuery:
    """Collect WHERE expressions and their values for the job list query.

    `title` is a literal substring: LIKE wildcards and backslashes in it are escaped. Matching
    lowers both sides, and sqlite's LOWER() only folds ASCII letters, so
    non-ASCII titles are case-insensitive on PostgreSQL only.
    """

    expressions: list[str] = []
    values: list[Any] = []

    if title is not None:
        values.append(f"%{_escape_like(title)}%")
        expressions.append(f"LOWER(j.title) LIKE LOWER(${len(values)}) ESCAPE '\\'")

    if min_salary is not None:
        values.append(min_salary)
        expressions.append(f"j.salary >= ${len(values)}")

    if has_equity is True:
        expressions.append("j.equity > 0")

    return JobFilterQuery(expressions=tuple(expressions), values=tuple(values))
