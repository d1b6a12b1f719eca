import json

import httpx
import pytest

from ballie.client import ApiClient
from ballie.config import Settings


class Recorder:
    """MockTransport handler that replays canned responses and keeps requests."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"success": False, "message": f"No route {key}"})
        route = self.routes[key]
        if callable(route):
            return route(request)
        status, body = route
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        return httpx.Response(status, content=json.dumps(body).encode("utf-8"))


@pytest.fixture
def settings(tmp_path):
    return Settings(
        base_url="http://api.test/api/v1",
        token="tok-123",
        tenant_slug="acme",
        tenant_id=1,
        session_path=tmp_path / "session.json",
    )


@pytest.fixture
def make_client(settings):
    clients = []

    def _make(routes):
        recorder = Recorder(routes)
        client = ApiClient(settings, transport=httpx.MockTransport(recorder))
        clients.append(client)
        return client, recorder

    yield _make
    for client in clients:
        client.close()
