# validation.py
from typing import Any, Iterable


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> list[str]:
    """Flatten pydantic error dicts into "location: message" strings.

    The leading "body"/"query" segment FastAPI adds is dropped.
    """
    messages: list[str] = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
        msg = str(err.get("msg", "Invalid value"))
        messages.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return messages
