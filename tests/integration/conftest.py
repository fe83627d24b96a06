"""Integration fixtures: a fake GitHub API served through httpx.MockTransport."""

import httpx
import pytest

from github_required_workflows.rest import GitHubClient


class FakeGitHub:
    """Routes requests by path to handlers and records every request it sees."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def route(self, path, handler):
        self.routes[path] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return handler(request)


@pytest.fixture
def github():
    return FakeGitHub()


@pytest.fixture
def client(github):
    c = GitHubClient(token="test-token", base_url="https://api.github.test", transport=httpx.MockTransport(github))
    yield c
    c.close()


@pytest.fixture
def broken_client():
    """Client whose transport fails every request."""

    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    c = GitHubClient(token="test-token", base_url="https://api.github.test", transport=httpx.MockTransport(handler))
    yield c
    c.close()
