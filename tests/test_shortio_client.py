import json

import pytest
import requests

from linkproxy_app.exceptions import UpstreamError, UpstreamUnavailableError
from linkproxy_app.services.shortio_client import ShortIOClient


def make_response(status_code=200, body=None, content_type="application/json"):
    response = requests.Response()
    response.status_code = status_code
    if body is None:
        response._content = b""
    elif isinstance(body, str):
        response._content = body.encode("utf-8")
    else:
        response._content = json.dumps(body).encode("utf-8")
    response.headers["Content-Type"] = content_type
    return response


class FakeSession:
    """Records requests and replays one canned response (or raises)"""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        pass


@pytest.fixture
def session():
    return FakeSession(make_response(200, {"ok": True}))


@pytest.fixture
def shortio(session):
    return ShortIOClient("https://api.short.io/api/", "secret", timeout=5, session=session)


class TestShortIOClient:
    """Test the upstream client against a fake requests session"""

    def test_auth_and_json_headers(self, shortio, session):
        """Test every call carries the API key and JSON headers"""
        assert shortio.request("/domains") == {"ok": True}

        method, url, kwargs = session.requests[0]
        assert method == "GET"
        assert url == "https://api.short.io/api/domains"
        assert kwargs["headers"]["Authorization"] == "secret"
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["headers"]["Accept"] == "application/json"
        assert kwargs["timeout"] == 5

    def test_list_links_params(self, shortio, session):
        shortio.list_links("sho.rt", 25, search="promo", page_token="tok")
        _, url, kwargs = session.requests[0]
        assert url.endswith("/links")
        assert kwargs["params"] == {
            "domain": "sho.rt",
            "limit": 25,
            "search": "promo",
            "pageToken": "tok",
        }

    def test_list_links_omits_empty_filters(self, shortio, session):
        shortio.list_links("sho.rt", 50)
        assert session.requests[0][2]["params"] == {"domain": "sho.rt", "limit": 50}

    def test_create_link_posts_payload(self, shortio, session):
        shortio.create_link({"domain": "sho.rt", "originalURL": "https://example.com"})
        method, url, kwargs = session.requests[0]
        assert method == "POST"
        assert url.endswith("/links")
        assert kwargs["json"]["originalURL"] == "https://example.com"

    def test_update_link_uses_post(self, shortio, session):
        """Test Short.io updates go out as POST /links/{id}"""
        shortio.update_link("lnk_1", {"domain": "sho.rt", "title": "x"})
        method, url, _ = session.requests[0]
        assert method == "POST"
        assert url.endswith("/links/lnk_1")

    def test_link_id_is_escaped(self, shortio, session):
        shortio.get_link("a/b")
        assert session.requests[0][1].endswith("/links/a%2Fb")

    def test_delete_link_empty_body(self, shortio, session):
        session.response = make_response(200, None)
        assert shortio.delete_link("lnk_1") is None
        assert session.requests[0][0] == "DELETE"

    def test_text_body(self, shortio, session):
        session.response = make_response(200, "plain", content_type="text/plain")
        assert shortio.request("/domains") == "plain"

    def test_error_status_raises_upstream_error(self, shortio, session):
        """Test non-2xx answers carry status and body"""
        session.response = make_response(404, {"message": "Link not found"})

        with pytest.raises(UpstreamError) as exc_info:
            shortio.get_link("missing")
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Link not found"
        assert exc_info.value.details == {"message": "Link not found"}

    def test_error_status_with_text_body(self, shortio, session):
        session.response = make_response(500, "oops", content_type="text/html")

        with pytest.raises(UpstreamError) as exc_info:
            shortio.list_domains()
        assert exc_info.value.status_code == 500
        assert exc_info.value.to_dict() == {
            "message": "Short.io API error",
            "details": {"raw": "oops"},
        }

    def test_error_status_with_list_body(self, shortio, session):
        """Test a JSON array error body is relayed as details"""
        errors = [{"field": "path", "error": "taken"}]
        session.response = make_response(400, errors)

        with pytest.raises(UpstreamError) as exc_info:
            shortio.create_link({"domain": "sho.rt", "path": "taken"})
        assert exc_info.value.status_code == 400
        assert exc_info.value.to_dict() == {
            "message": "Short.io API error",
            "details": errors,
        }

    def test_redirect_status_is_an_error(self, shortio, session):
        """Test only 2xx counts as success"""
        session.response = make_response(304, None)

        with pytest.raises(UpstreamError) as exc_info:
            shortio.get_link("lnk_1")
        assert exc_info.value.status_code == 304
        assert exc_info.value.to_dict() == {"message": "Short.io API error"}

    def test_transport_failure(self, shortio, session):
        """Test connection problems become a 502"""
        session.error = requests.ConnectionError("connection refused")

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            shortio.list_domains()
        assert exc_info.value.status_code == 502

    def test_invalid_json_body(self, shortio, session):
        session.response = make_response(200, "{broken", content_type="application/json")

        with pytest.raises(UpstreamUnavailableError):
            shortio.list_domains()
