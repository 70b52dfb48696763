from __future__ import annotations

import argparse
import sys
from datetime import timedelta
from pathlib import Path


def _bootstrap_import_path() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


_bootstrap_import_path()

from app.config import settings  # noqa: E402
from app.utils.jwt_handler import create_access_token  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Issue a bearer token for the jobs API. Admin tokens may create, patch and delete jobs."
    )
    parser.add_argument("--username", required=True, help="Token subject")
    parser.add_argument("--admin", action="store_true", help="Grant admin privileges")
    parser.add_argument(
        "--expires-minutes",
        type=int,
        default=settings.access_token_expire_minutes,
        help="Token lifetime in minutes",
    )
    args = parser.parse_args(argv)

    if args.expires_minutes <= 0:
        sys.stderr.write("--expires-minutes must be positive\n")
        return 2

    token = create_access_token(
        {"sub": args.username, "is_admin": bool(args.admin)},
        timedelta(minutes=args.expires_minutes),
    )
    print(token)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
