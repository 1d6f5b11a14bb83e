import threading
import time

import pytest

from bucketchecker.utils.config import ProbeConfig
from bucketchecker.utils.http_client import ProbeResponse


class FakeHTTPClient:
    """
    Stand-in for ProbeHTTPClient.

    routes: {(method, url): ProbeResponse | None | Exception}
    Unrouted requests behave like a transport failure (None).
    slow_hosts: substrings of URLs that sleep `delay` seconds then fail,
    the way a request hitting its timeout does.
    """

    def __init__(self, routes=None, slow_hosts=(), delay=0.0):
        self.routes = dict(routes or {})
        self.slow_hosts = tuple(slow_hosts)
        self.delay = delay
        self.calls = []
        self._lock = threading.Lock()

    def send(self, request):
        with self._lock:
            self.calls.append(request)
        if any(host in request.url for host in self.slow_hosts):
            time.sleep(self.delay)
            return None
        result = self.routes.get((request.method, request.url))
        if isinstance(result, Exception):
            raise result
        return result


def listing(provider_marker="<ListBucketResult", status=200):
    body = f'<?xml version="1.0" encoding="UTF-8"?>\n{provider_marker} xmlns="x"></ListBucketResult>'
    return ProbeResponse(url="", status_code=status, text=body)


@pytest.fixture
def config():
    return ProbeConfig(max_workers=4, request_timeout=1.0, connect_timeout=1.0)


@pytest.fixture
def fake_client_cls():
    return FakeHTTPClient
