from pydantic import BaseModel, Field, ConfigDict, field_serializer
from typing import List, Optional
from datetime import datetime, timezone


class LinkPayload(BaseModel):
    """Body sent to Short.io when creating or updating a link.

    Fields use the upstream camelCase names as aliases. Dump with
    ``exclude_unset=True`` so only the keys the caller supplied are sent
    (an explicitly unset ``expiresAt`` must still go out as ``null``).
    """
    domain: str
    original_url: Optional[str] = Field(None, alias="originalURL")
    title: Optional[str] = None
    path: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    redirect_type: Optional[int] = Field(None, alias="redirectType")
    allow_duplicates: Optional[bool] = Field(None, alias="allowDuplicates")
    expires_at: Optional[datetime] = Field(None, alias="expiresAt")
    utm_source: Optional[str] = Field(None, alias="utmSource")
    utm_medium: Optional[str] = Field(None, alias="utmMedium")
    utm_campaign: Optional[str] = Field(None, alias="utmCampaign")
    utm_term: Optional[str] = Field(None, alias="utmTerm")
    utm_content: Optional[str] = Field(None, alias="utmContent")
    ios_url: Optional[str] = Field(None, alias="iosURL")
    android_url: Optional[str] = Field(None, alias="androidURL")
    password: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_serializer("expires_at")
    def serialize_expires_at(self, value: Optional[datetime]) -> Optional[str]:
        """UTC with millisecond precision, e.g. 2030-01-01T00:00:00.000Z"""
        if value is None:
            return None
        value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"

    def to_upstream(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)


class DomainConfig(BaseModel):
    domain: str


class HealthStatus(BaseModel):
    status: str = "ok"
