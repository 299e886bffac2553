"""
FastAPI dependencies for dependency injection.

Routes never build the upstream client or read settings directly; they
depend on the functions below, which tests replace through
``app.dependency_overrides``.
"""

import json
from functools import lru_cache
from typing import Any

from fastapi import Depends, Request

from linkproxy_app.config import Settings, settings
from linkproxy_app.exceptions import (
    ConfigurationError,
    InvalidPayloadError,
    PayloadTooLargeError,
)
from linkproxy_app.services.link_service import LinkService
from linkproxy_app.services.shortio_client import ShortIOClient


def get_settings() -> Settings:
    return settings


def require_configuration(app_settings: Settings = Depends(get_settings)) -> Settings:
    """
    Guard for every /api route.

    Raises:
        ConfigurationError: API key or short domain is not set
    """
    if not app_settings.is_configured:
        raise ConfigurationError()
    return app_settings


@lru_cache()
def get_shortio_client() -> ShortIOClient:
    """
    Get the Short.io client (singleton).

    @lru_cache ensures a single requests.Session is shared by all requests.
    """
    return ShortIOClient(
        base_url=settings.short_io_api_base_url,
        api_key=settings.short_io_api_key or "",
        timeout=settings.request_timeout,
    )


def get_link_service(
    app_settings: Settings = Depends(require_configuration),
    client: ShortIOClient = Depends(get_shortio_client)
) -> LinkService:
    return LinkService(
        client=client,
        domain=app_settings.short_io_domain,
        default_limit=app_settings.default_page_limit,
    )


async def read_json_body(
    request: Request,
    app_settings: Settings = Depends(get_settings)
) -> Any:
    """
    Decode the request body as JSON.

    Returns None for an empty body.

    Raises:
        PayloadTooLargeError: body exceeds ``max_body_bytes``
        InvalidPayloadError: body is not valid JSON
    """
    raw = await request.body()
    if len(raw) > app_settings.max_body_bytes:
        raise PayloadTooLargeError()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as e:
        raise InvalidPayloadError("Invalid JSON payload") from e
