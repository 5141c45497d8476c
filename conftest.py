# Ensure tests import the `flyd` package from this checkout first.
import os
import sys

import httpx
import pytest

SERVICE_ROOT = os.path.dirname(__file__)

if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)


class RecordingUpstream:
    """Fake upstream API that records every request it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json_body = {"ok": True}
        self.raw_body = None
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=self.json_body)

    def client(self) -> httpx.AsyncClient:
        from flyd.http_client import build_http_client

        return build_http_client(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def upstream():
    """Provide a recording fake of the Fly Machines API."""
    return RecordingUpstream()
