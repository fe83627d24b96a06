"""Path templates for REST resources and validation of their parameters."""

import re
import unicodedata
from urllib.parse import quote

from .errors import InvalidParameterError

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")
_FORBIDDEN_CHARS = "/?#"
_DOT_SEGMENTS = (".", "..")


def validate_segment(name: str, value) -> str:
    """Check a string path parameter and return it percent-encoded."""
    if not isinstance(value, str):
        raise InvalidParameterError(f"{name} must be a string, got {type(value).__name__}")
    if not value:
        raise InvalidParameterError(f"{name} must not be empty")
    if value in _DOT_SEGMENTS:
        raise InvalidParameterError(f"{name} must not be a dot segment: {value!r}")
    for ch in value:
        if unicodedata.category(ch) == "Cc":
            raise InvalidParameterError(f"{name} contains a control character: {value!r}")
        if ch in _FORBIDDEN_CHARS:
            raise InvalidParameterError(f"{name} contains {ch!r}: {value!r}")
    return quote(value, safe="")


def validate_id(name: str, value) -> int:
    """Check a numeric identifier."""
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise InvalidParameterError(f"{name} must not be negative, got {value}")
    return value


class ResourcePath:
    """A path template such as ``/orgs/{org}/actions/required_workflows``.

    Parameters named ``*_id`` are numeric identifiers; the rest are single
    string path segments.
    """

    def __init__(self, template: str):
        self.template = template
        self.params = tuple(_PLACEHOLDER_RE.findall(template))

    def __repr__(self):
        return f"ResourcePath({self.template!r})"

    def expand(self, **values) -> str:
        missing = [p for p in self.params if p not in values]
        if missing:
            raise InvalidParameterError(f"missing path parameters for {self.template}: {missing}")
        extra = sorted(set(values) - set(self.params))
        if extra:
            raise InvalidParameterError(f"unexpected path parameters for {self.template}: {extra}")

        encoded = {}
        for name, value in values.items():
            if name.endswith("_id"):
                encoded[name] = str(validate_id(name, value))
            else:
                encoded[name] = validate_segment(name, value)
        return _PLACEHOLDER_RE.sub(lambda m: encoded[m.group(1)], self.template)
