from __future__ import annotations

import logging
import re
from typing import Any, Sequence

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError


logger = logging.getLogger(__name__)


class DatabaseConnectionError(RuntimeError):
    pass


class DatabaseQueryError(RuntimeError):
    pass


_POSITIONAL_PARAM_RE = re.compile(r"\$([1-9][0-9]*)")


def compile_positional_params(sql: str, params: Sequence[Any] | None) -> tuple[str, dict[str, Any]]:
    """Rewrite `$1, $2, ...` placeholders into SQLAlchemy named binds.

    `$N` refers to params[N - 1]. The same placeholder may appear more than once.
    """

    values = list(params or [])

    def repl(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index > len(values):
            raise DatabaseQueryError(f"Missing SQL parameter: ${index}")
        return f":p{index}"

    compiled_sql = _POSITIONAL_PARAM_RE.sub(repl, sql)
    return compiled_sql, {f"p{i}": value for i, value in enumerate(values, start=1)}


class Database:
    """Narrow connection provider used by the resource accessors.

    Every call checks out a pooled connection, runs in its own transaction
    (committed on success) and returns plain dict rows.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def query(self, sql: str, params: Sequence[Any] | None = None) -> list[dict[str, Any]]:
        compiled_sql, bind = compile_positional_params(sql, params)
        logger.debug("sql=%s params=%s", " ".join(compiled_sql.split()), bind)

        conn = self.connect()
        try:
            with conn, conn.begin():
                result = conn.execute(text(compiled_sql), bind)
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as exc:
            raise DatabaseQueryError("Database query failed") from exc

    def connect(self) -> Connection:
        try:
            return self.engine.connect()
        except SQLAlchemyError as exc:
            raise DatabaseConnectionError(
                f"Failed to connect to {self.engine.url.render_as_string(hide_password=True)}. "
                f"Last error: {type(exc).__name__}: {exc}"
            ) from exc

    def query_one(self, sql: str, params: Sequence[Any] | None = None) -> dict[str, Any] | None:
        rows = self.query(sql, params)
        return rows[0] if rows else None

    def ping(self) -> bool:
        try:
            self.query_one("SELECT 1 AS ok")
        except (DatabaseConnectionError, DatabaseQueryError):
            return False
        return True

    def dispose(self) -> None:
        self.engine.dispose()
