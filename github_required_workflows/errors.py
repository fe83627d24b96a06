"""Error taxonomy and response classification for the GitHub REST API.

Three kinds of failure reach callers:

- ``InvalidParameterError``: bad local input, detected before any request.
- ``httpx.TransportError``: connection, DNS or timeout failures, as raised by httpx.
- ``ApiError`` and its subclasses: a non-2xx HTTP response.
"""

from dataclasses import dataclass

import httpx

from .response import Rate, parse_rate

SECONDARY_RATE_LIMIT_MARKER = "secondary rate limit"
SECONDARY_RATE_LIMIT_DOCS = "secondary-rate-limits"


class GitHubError(Exception):
    """Base class for errors raised by this package."""


class InvalidParameterError(GitHubError, ValueError):
    """A path parameter, option or body field failed local validation."""


class DecodeError(GitHubError, ValueError):
    """A successful response body did not decode into the expected shape."""


@dataclass
class ErrorDetail:
    """One entry of the ``errors`` array in a GitHub error document."""

    resource: str | None = None
    field: str | None = None
    code: str | None = None
    message: str | None = None

    @classmethod
    def from_dict(cls, data) -> "ErrorDetail":
        if isinstance(data, str):
            return cls(message=data)
        if not isinstance(data, dict):
            return cls(message=str(data))
        return cls(
            resource=data.get("resource"),
            field=data.get("field"),
            code=data.get("code"),
            message=data.get("message"),
        )


class ApiError(GitHubError, httpx.HTTPStatusError):
    """Non-2xx response whose body is not a GitHub error document."""

    def __init__(self, message: str, *, request: httpx.Request, response: httpx.Response):
        httpx.HTTPStatusError.__init__(self, message, request=request, response=response)

    @property
    def status(self) -> int:
        return self.response.status_code


class ErrorResponse(ApiError):
    """Non-2xx response carrying a GitHub error document."""

    def __init__(
        self,
        message: str,
        *,
        request: httpx.Request,
        response: httpx.Response,
        errors: list[ErrorDetail] | None = None,
        documentation_url: str | None = None,
    ):
        self.message = message
        self.errors = errors or []
        self.documentation_url = documentation_url
        super().__init__(
            f"{request.method} {request.url}: {response.status_code} {message}",
            request=request,
            response=response,
        )


class RateLimitError(ErrorResponse):
    """Primary rate limit exhausted."""

    def __init__(self, message: str, *, rate: Rate, **kwargs):
        self.rate = rate
        super().__init__(message, **kwargs)


class AbuseRateLimitError(ErrorResponse):
    """Secondary rate limit triggered."""

    def __init__(self, message: str, *, retry_after: float | None = None, **kwargs):
        self.retry_after = retry_after
        super().__init__(message, **kwargs)


def classify_response(resp: httpx.Response) -> Exception | None:
    """Map a response to an error, or None when the status is 2xx."""
    if 200 <= resp.status_code < 300:
        return None

    request = resp.request
    document = _error_document(resp)
    if document is None:
        return ApiError(
            f"GitHub API error {resp.status_code}: {request.method} {request.url}",
            request=request,
            response=resp,
        )

    message = document.get("message") or resp.reason_phrase
    kwargs = {
        "request": request,
        "response": resp,
        "errors": [ErrorDetail.from_dict(e) for e in document.get("errors") or []],
        "documentation_url": document.get("documentation_url"),
    }

    if resp.status_code in (403, 429):
        rate = parse_rate(resp.headers)
        if rate is not None and rate.remaining == 0:
            return RateLimitError(message, rate=rate, **kwargs)
        docs = kwargs["documentation_url"] or ""
        if SECONDARY_RATE_LIMIT_MARKER in message.lower() or SECONDARY_RATE_LIMIT_DOCS in docs:
            return AbuseRateLimitError(message, retry_after=_parse_retry_after(resp), **kwargs)

    return ErrorResponse(message, **kwargs)


def _error_document(resp: httpx.Response) -> dict | None:
    if not resp.content:
        return None
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body
    return None


def _parse_retry_after(resp: httpx.Response) -> float | None:
    val = resp.headers.get("retry-after")
    if val is None:
        return None
    try:
        return float(val)
    except ValueError:
        return None
