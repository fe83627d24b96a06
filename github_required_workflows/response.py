"""Response metadata returned alongside every API call."""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, NamedTuple

import httpx

_LINK_RE = re.compile(r'<([^>]*)>\s*;\s*rel="([^"]*)"')


@dataclass
class Rate:
    """Rate limit state from the X-RateLimit-* headers."""

    limit: int
    remaining: int
    used: int | None = None
    reset: datetime | None = None
    resource: str | None = None


@dataclass
class ApiResponse:
    """Metadata about one exchange with the GitHub REST API.

    ``status`` is None when no HTTP response was received, either because a
    parameter failed validation or because the transport failed.
    """

    status: int | None = None
    method: str | None = None
    url: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    etag: str | None = None
    link: str | None = None
    next_page: int | None = None
    prev_page: int | None = None
    first_page: int | None = None
    last_page: int | None = None
    rate: Rate | None = None

    @classmethod
    def from_httpx(cls, resp: httpx.Response, body=None) -> "ApiResponse":
        link = resp.headers.get("link")
        pages = parse_link_pages(link)
        return cls(
            status=resp.status_code,
            method=resp.request.method,
            url=str(resp.request.url),
            headers=dict(resp.headers),
            body=body,
            etag=resp.headers.get("etag"),
            link=link,
            next_page=pages.get("next"),
            prev_page=pages.get("prev"),
            first_page=pages.get("first"),
            last_page=pages.get("last"),
            rate=parse_rate(resp.headers),
        )


class Result(NamedTuple):
    """Outcome of one API call: decoded value, response metadata, error.

    ``response`` is always set. Exactly one of ``value`` and ``error`` is
    meaningful: ``error`` is None on success, and ``value`` is None on failure
    (and for calls that return no content).
    """

    value: Any
    response: ApiResponse
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self):
        """Raise the error if the call failed, otherwise return the value."""
        if self.error is not None:
            raise self.error
        return self.value


def parse_link_pages(link: str | None) -> dict[str, int]:
    """Extract page numbers by relation from a Link header.

    >>> parse_link_pages('<https://api.github.com/x?page=3>; rel="next"')
    {'next': 3}
    """
    pages = {}
    if not link:
        return pages
    for url, rel in _LINK_RE.findall(link):
        try:
            page = httpx.URL(url).params.get("page")
        except httpx.InvalidURL:
            continue
        if page is None:
            continue
        try:
            pages[rel] = int(page)
        except ValueError:
            continue
    return pages


def parse_rate(headers) -> Rate | None:
    """Parse rate limit headers, or None when they are missing or malformed."""
    limit = headers.get("x-ratelimit-limit")
    remaining = headers.get("x-ratelimit-remaining")
    if limit is None or remaining is None:
        return None
    try:
        rate = Rate(limit=int(limit), remaining=int(remaining))
        used = headers.get("x-ratelimit-used")
        if used is not None:
            rate.used = int(used)
        reset = headers.get("x-ratelimit-reset")
        if reset is not None:
            rate.reset = datetime.fromtimestamp(int(reset), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None
    rate.resource = headers.get("x-ratelimit-resource")
    return rate
