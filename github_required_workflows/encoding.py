"""Wire encoding: query parameters, JSON bodies and timestamps."""

import json
from datetime import datetime, timezone

from .errors import InvalidParameterError

JSON_CONTENT_TYPE = "application/json"


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO 8601 timestamp such as ``2020-01-22T19:33:08Z``."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"timestamp must be a string, got {type(value).__name__}")
    # fromisoformat only accepts a trailing Z from Python 3.11
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def positive_int(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 1:
        raise InvalidParameterError(f"{name} must be positive, got {value}")
    return value


def encode_query(opts) -> dict[str, str] | None:
    """Encode an options object into query parameters, dropping unset fields."""
    if opts is None:
        return None
    params = {k: str(v) for k, v in opts.to_params().items() if v is not None}
    return params or None


def encode_body(body, required=()) -> bytes | None:
    """Serialize a request body as compact JSON followed by a newline.

    ``body`` is either a mapping or an object with ``to_payload()``. Keys
    keep the payload's insertion order.
    """
    if body is None:
        if required:
            raise InvalidParameterError(f"request body is required (fields: {', '.join(required)})")
        return None
    payload = body.to_payload() if hasattr(body, "to_payload") else dict(body)
    missing = [name for name in required if payload.get(name) is None]
    if missing:
        raise InvalidParameterError(f"missing required fields: {', '.join(missing)}")
    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return (text + "\n").encode("utf-8")
