from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from linkproxy_app.dependencies import get_link_service, read_json_body, require_configuration
from linkproxy_app.services.link_service import LinkService

router = APIRouter(
    prefix="/links",
    tags=["links"],
    dependencies=[Depends(require_configuration)],
)


@router.get("")
def list_links(
    search: Optional[str] = None,
    limit: Optional[str] = None,
    page_token: Optional[str] = Query(None, alias="pageToken"),
    link_service: LinkService = Depends(get_link_service)
):
    """List links on the configured domain (Short.io pagination passthrough)"""
    return link_service.list_links(search=search, limit=limit, page_token=page_token)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_link(
    body: Any = Depends(read_json_body),
    link_service: LinkService = Depends(get_link_service)
):
    """Create a short link; originalURL is required"""
    return link_service.create_link(body)


@router.get("/{link_id}")
def get_link(
    link_id: str,
    link_service: LinkService = Depends(get_link_service)
):
    return link_service.get_link(link_id)


@router.api_route("/{link_id}", methods=["PUT", "PATCH"])
def update_link(
    link_id: str,
    body: Any = Depends(read_json_body),
    link_service: LinkService = Depends(get_link_service)
):
    """Update a link with only the fields supplied"""
    return link_service.update_link(link_id, body)


@router.delete("/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_link(
    link_id: str,
    link_service: LinkService = Depends(get_link_service)
):
    link_service.delete_link(link_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
