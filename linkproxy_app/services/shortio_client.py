"""
Thin client for the Short.io REST API.

Every call attaches the API key and relays the decoded body. Non-2xx
answers raise UpstreamError carrying the upstream status and body, so
routes can pass them straight back to the browser.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

from linkproxy_app.exceptions import UpstreamError, UpstreamUnavailableError

logger = logging.getLogger("linkproxy.shortio")


class ShortIOClient:
    """
    Blocking Short.io client built on a shared requests.Session.

    Routes using it are plain ``def`` handlers, so FastAPI runs them in its
    thread pool and the event loop is never blocked.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None
    ):
        """
        Args:
            base_url: API root, e.g. https://api.short.io/api
            api_key: Secret key sent as the Authorization header
            timeout: Seconds to wait for each upstream call
            session: Optional pre-built session (tests inject a fake one)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": self.api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if not response.content:
            return None
        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            return response.json()
        return response.text

    def request(
        self,
        endpoint: str,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        json: Any = None
    ) -> Any:
        """
        Send one request to Short.io and return the decoded body.

        Raises:
            UpstreamError: Short.io answered with a non-2xx status
            UpstreamUnavailableError: the request never got an answer, or
                the answer claimed JSON but could not be decoded
        """
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(),
                timeout=self.timeout,
            )
            data = self._decode(response)
        except requests.RequestException as e:
            logger.error(f"Short.io {method} {endpoint} failed: {e}")
            raise UpstreamUnavailableError() from e
        except ValueError as e:
            logger.error(f"Short.io {method} {endpoint} returned invalid JSON: {e}")
            raise UpstreamUnavailableError() from e

        if not 200 <= response.status_code < 300:
            logger.warning(f"Short.io {method} {endpoint} -> {response.status_code}")
            raise UpstreamError(response.status_code, data)

        return data

    # Convenience calls, one per upstream endpoint we use

    def list_links(
        self,
        domain: str,
        limit: int,
        search: Optional[str] = None,
        page_token: Optional[str] = None
    ) -> Any:
        params: Dict[str, Any] = {"domain": domain, "limit": limit}
        if search:
            params["search"] = search
        if page_token:
            params["pageToken"] = page_token
        return self.request("/links", params=params)

    def get_link(self, link_id: str) -> Any:
        return self.request(f"/links/{quote(link_id, safe='')}")

    def create_link(self, payload: Dict[str, Any]) -> Any:
        return self.request("/links", method="POST", json=payload)

    def update_link(self, link_id: str, payload: Dict[str, Any]) -> Any:
        # Short.io updates links with POST, not PUT
        return self.request(f"/links/{quote(link_id, safe='')}", method="POST", json=payload)

    def delete_link(self, link_id: str) -> Any:
        return self.request(f"/links/{quote(link_id, safe='')}", method="DELETE")

    def list_domains(self) -> Any:
        return self.request("/domains")

    def close(self):
        self.session.close()
