from typing import Any, Optional

from linkproxy_app.exceptions import InvalidPayloadError
from linkproxy_app.services.payload import normalize_link_payload
from linkproxy_app.services.shortio_client import ShortIOClient


def is_empty_body(body: Any) -> bool:
    """True for a missing body or a falsy JSON scalar (false, 0, "").

    Empty objects and arrays still count as a body.
    """
    if body is None or body is False:
        return True
    if isinstance(body, str):
        return body == ""
    if isinstance(body, (int, float)):
        return body == 0
    return False


class LinkService:
    """
    Link operations on top of the Short.io client.

    Holds no state of its own: Short.io is the system of record, this only
    shapes requests (fixed domain, normalized bodies) and relays answers.
    """

    def __init__(self, client: ShortIOClient, domain: str, default_limit: int = 50):
        """
        Initialize link service with dependencies.

        Args:
            client: Upstream client (already carries the API key)
            domain: Short domain every link lives under
            default_limit: Page size when the caller gives none
        """
        self.client = client
        self.domain = domain
        self.default_limit = default_limit

    def list_links(
        self,
        search: Optional[str] = None,
        limit: Optional[str] = None,
        page_token: Optional[str] = None
    ) -> Any:
        return self.client.list_links(
            domain=self.domain,
            limit=self._page_limit(limit),
            search=search,
            page_token=page_token,
        )

    def _page_limit(self, limit: Optional[str]) -> int:
        """Blank or missing limit falls back to the default page size"""
        if limit is None or not limit.strip():
            return self.default_limit
        try:
            value = int(limit.strip())
        except ValueError:
            raise InvalidPayloadError("limit must be a positive integer") from None
        if value < 1:
            raise InvalidPayloadError("limit must be a positive integer")
        return value

    def get_link(self, link_id: str) -> Any:
        return self.client.get_link(link_id)

    def create_link(self, body: Any) -> Any:
        """Create a link; the body must carry a non-blank originalURL"""
        if not body:
            raise InvalidPayloadError("originalURL is required")
        payload = normalize_link_payload(body, self.domain, require_original=True)
        return self.client.create_link(payload)

    def update_link(self, link_id: str, body: Any) -> Any:
        """Partial update: only the fields present in the body are sent"""
        if is_empty_body(body):
            raise InvalidPayloadError("Request body is required")
        payload = normalize_link_payload(body, self.domain)
        return self.client.update_link(link_id, payload)

    def delete_link(self, link_id: str) -> None:
        self.client.delete_link(link_id)

    def list_domains(self) -> Any:
        return self.client.list_domains()
