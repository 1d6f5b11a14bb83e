from unittest.mock import MagicMock

import requests

from bucketchecker.discovery.request_builder import ProbeRequest
from bucketchecker.utils.config import ProbeConfig
from bucketchecker.utils.http_client import ProbeHTTPClient, ProbeResponse


def make_client(config=None):
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return ProbeHTTPClient(config or ProbeConfig(), session=session), session


def fake_response(status, text, chunks=None):
    response = MagicMock()
    response.status_code = status
    response.encoding = "utf-8"
    response.iter_content.return_value = chunks if chunks is not None else [text.encode("utf-8")]
    response.headers = {"Content-Type": "application/xml"}
    return response


def test_send_passes_method_body_headers_and_timeout():
    config = ProbeConfig(connect_timeout=2, request_timeout=7)
    client, session = make_client(config)
    session.request.return_value = fake_response(200, "ok")

    request = ProbeRequest("PUT", "http://b.s3.amazonaws.com/k", b"data", {"Content-Type": "text/plain"},
                           allow_redirects=False)
    result = client.send(request)

    session.request.assert_called_once_with(
        "PUT", "http://b.s3.amazonaws.com/k",
        data=b"data", headers={"Content-Type": "text/plain"}, timeout=(2, 7),
        allow_redirects=False, stream=True,
    )
    assert result == ProbeResponse(
        url="http://b.s3.amazonaws.com/k", status_code=200, text="ok",
        headers={"Content-Type": "application/xml"},
    )
    assert result.ok
    session.request.return_value.close.assert_called_once()


def test_body_is_capped():
    client, session = make_client(ProbeConfig(max_body_bytes=10))
    session.request.return_value = fake_response(200, "", chunks=[b"<ListBucket", b"Result>" * 100])
    result = client.send(ProbeRequest("GET", "http://b.s3.amazonaws.com/"))
    assert result.text == "<ListBucke"


def test_chunked_read_error_returns_none():
    client, session = make_client()
    response = fake_response(200, "")
    response.iter_content.side_effect = requests.ConnectionError("read timed out")
    session.request.return_value = response
    assert client.send(ProbeRequest("GET", "http://b.s3.amazonaws.com/")) is None
    response.close.assert_called_once()


def test_unknown_charset_falls_back_to_utf8():
    client, session = make_client()
    response = fake_response(200, "<EnumerationResults/>")
    response.encoding = "x-not-a-charset"
    session.request.return_value = response
    assert client.send(ProbeRequest("GET", "https://c.blob.core.windows.net/")).text == "<EnumerationResults/>"


def test_send_sets_user_agent():
    client, session = make_client(ProbeConfig(user_agent="probe-test"))
    assert session.headers["User-Agent"] == "probe-test"


def test_timeout_returns_none():
    client, session = make_client()
    session.request.side_effect = requests.Timeout("read timed out")
    assert client.send(ProbeRequest("GET", "http://slow.example/")) is None


def test_connection_error_returns_none():
    client, session = make_client()
    session.request.side_effect = requests.ConnectionError("Name or service not known")
    assert client.send(ProbeRequest("GET", "http://nxdomain.invalid/")) is None


def test_non_2xx_is_returned_not_raised():
    client, session = make_client()
    session.request.return_value = fake_response(403, "<Error>AccessDenied</Error>")
    result = client.send(ProbeRequest("GET", "http://b.s3.amazonaws.com/"))
    assert result.status_code == 403
    assert not result.ok


def test_default_session_mounts_pool_sized_adapter():
    client = ProbeHTTPClient(ProbeConfig(max_workers=7, retries=2))
    adapter = client.session.get_adapter("https://storage.googleapis.com/")
    assert adapter._pool_maxsize == 7
    assert adapter.max_retries.connect == 2
    client.close()


def test_context_manager_closes_session():
    client, session = make_client()
    with client:
        pass
    session.close.assert_called_once()
