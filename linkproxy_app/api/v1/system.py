from fastapi import APIRouter, Depends

from linkproxy_app.config import Settings
from linkproxy_app.dependencies import get_link_service, require_configuration
from linkproxy_app.schemas.link import DomainConfig, HealthStatus
from linkproxy_app.services.link_service import LinkService

router = APIRouter(tags=["system"], dependencies=[Depends(require_configuration)])


@router.get("/health", response_model=HealthStatus)
def health_check():
    """Health check endpoint"""
    return HealthStatus()


@router.get("/config", response_model=DomainConfig)
def read_config(app_settings: Settings = Depends(require_configuration)):
    """Expose the short domain so the UI can show full short URLs"""
    return DomainConfig(domain=app_settings.short_io_domain)


@router.get("/domains")
def list_domains(link_service: LinkService = Depends(get_link_service)):
    """Domains registered on the Short.io account"""
    return link_service.list_domains()
