"""GitHub REST API client using httpx."""

import logging

import httpx

from .actions import ActionsService
from .encoding import JSON_CONTENT_TYPE, encode_body, encode_query
from .errors import DecodeError, InvalidParameterError, classify_response
from .models import ListOptions
from .paths import ResourcePath
from .response import ApiResponse, Result
from .settings import get_settings

API_VERSION = "2022-11-28"
USER_AGENT = "github-required-workflows"

logger = logging.getLogger(__name__)


class GitHubClient:
    """Client for the GitHub REST API.

    Each call performs exactly one HTTP exchange and returns a ``Result``.
    Retries, throttling and caching are left to the caller or the transport.
    """

    def __init__(self, token=None, base_url=None, timeout=None, transport=None):
        settings = get_settings()
        token = token or settings.github_token
        if not token:
            raise RuntimeError("GITHUB_TOKEN is not set")
        self.base_url = (base_url or settings.github_api_url).rstrip("/")
        self._client = httpx.Client(
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
                "User-Agent": USER_AGENT,
            },
            timeout=timeout if timeout is not None else settings.github_timeout,
            transport=transport,
        )

        self.actions = ActionsService(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def new_request(
        self,
        method: str,
        path: ResourcePath,
        path_params: dict,
        opts=None,
        body=None,
        required=(),
    ) -> httpx.Request:
        """Build a request without sending it.

        Raises InvalidParameterError for bad path parameters, options or body.
        """
        endpoint = path.expand(**path_params)
        url = httpx.URL(f"{self.base_url}{endpoint}", params=encode_query(opts))
        content = encode_body(body, required)
        headers = {"Content-Type": JSON_CONTENT_TYPE} if content is not None else None
        return self._client.build_request(method, url, content=content, headers=headers)

    def do(self, request: httpx.Request, decode=None) -> Result:
        """Send a request and decode the response body with ``decode``.

        Transport errors and non-2xx responses come back in ``Result.error``.
        """
        logger.debug("%s %s", request.method, request.url)
        try:
            resp = self._client.send(request)
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", request.method, request.url, e)
            return Result(None, ApiResponse(method=request.method, url=str(request.url)), e)

        body = None
        if resp.content:
            try:
                body = resp.json()
            except ValueError as e:
                if 200 <= resp.status_code < 300:
                    return Result(
                        None,
                        ApiResponse.from_httpx(resp),
                        DecodeError(f"invalid JSON from {request.method} {request.url}: {e}"),
                    )
        meta = ApiResponse.from_httpx(resp, body)

        error = classify_response(resp)
        if error is not None:
            logger.warning("%s %s returned %s", request.method, request.url, resp.status_code)
            return Result(None, meta, error)

        if decode is None or body is None:
            return Result(None, meta, None)
        try:
            value = decode(body)
        except (TypeError, ValueError, AttributeError) as e:
            return Result(
                None,
                meta,
                DecodeError(f"unexpected body from {request.method} {request.url}: {e}"),
            )
        return Result(value, meta, None)

    def call(self, method, path, path_params, opts=None, body=None, required=(), decode=None) -> Result:
        """Build and send a request in one step.

        Validation failures are returned as a Result without touching the network.
        """
        try:
            request = self.new_request(method, path, path_params, opts=opts, body=body, required=required)
        except InvalidParameterError as e:
            logger.debug("rejected %s %s: %s", method, path.template, e)
            return Result(None, ApiResponse(method=method), e)
        return self.do(request, decode)

    def paginate(self, method, *args, per_page=None):
        """Yield each page of a list operation, following the Link header.

        ``method`` is a bound list method such as
        ``client.actions.list_org_required_workflows``. Stops after the last
        page or the first failed result.
        """
        opts = ListOptions(per_page=per_page)
        while True:
            result = method(*args, opts=opts)
            yield result
            if not result.ok or result.response.next_page is None:
                return
            opts = ListOptions(page=result.response.next_page, per_page=per_page)

    def close(self):
        self._client.close()


# Client instances keyed by config
_clients: dict[tuple, GitHubClient] = {}


def get_client(base_url=None) -> GitHubClient:
    """Get or create a GitHubClient configured from settings."""
    key = (base_url,)
    if key not in _clients:
        _clients[key] = GitHubClient(base_url=base_url)
    return _clients[key]
