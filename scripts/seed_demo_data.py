from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from app.config import build_sqlalchemy_db_url, settings  # noqa: E402
from app.database import build_engine, create_tables  # noqa: E402
from app.db.sql import Database  # noqa: E402
from app.services.company_service import CompanyService  # noqa: E402
from app.services.job_service import JobService  # noqa: E402


def _load_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed companies and jobs from a JSON file.")
    parser.add_argument(
        "--data",
        default=str(Path(__file__).resolve().parents[1] / "app" / "data" / "demo_jobs.json"),
        help='JSON object: {"companies": [...], "jobs": [...]}',
    )
    parser.add_argument("--db-url", default=None)
    args = parser.parse_args(argv)

    url = args.db_url or build_sqlalchemy_db_url(settings)
    db = Database(build_engine(url))
    if url.startswith("sqlite"):
        create_tables(db.engine)

    payload = _load_json(Path(args.data))
    companies = CompanyService(db)
    jobs = JobService(db, companies)

    inserted = {"companies": 0, "jobs": 0}
    try:
        for item in payload.get("companies", []):
            if companies.get_optional(item["handle"]) is not None:
                continue
            companies.create(
                handle=item["handle"],
                name=item["name"],
                description=item.get("description") or "",
                num_employees=item.get("numEmployees"),
                logo_url=item.get("logoUrl"),
            )
            inserted["companies"] += 1

        for item in payload.get("jobs", []):
            jobs.create(
                title=item["title"],
                salary=item.get("salary"),
                equity=item.get("equity"),
                company_handle=item["companyHandle"],
            )
            inserted["jobs"] += 1
    finally:
        db.dispose()

    print(json.dumps(inserted))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
