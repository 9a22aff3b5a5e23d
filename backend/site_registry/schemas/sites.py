from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, constr, field_validator

from site_registry.core.config import settings


NameStr = constr(min_length=1, strip_whitespace=True)
UrlStr = constr(min_length=1, strip_whitespace=True)


class SiteCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: NameStr
    main_url: UrlStr
    group: Optional[str] = Field(default="", validate_default=True)
    timezone: Optional[str] = Field(default=None, validate_default=True)
    type: Optional[str] = Field(default=None, validate_default=True)
    created_at: Optional[datetime] = None

    @field_validator("group")
    @classmethod
    def normalize_group(cls, value: Optional[str]) -> str:
        return "" if value is None else value.strip()

    @field_validator("timezone")
    @classmethod
    def default_timezone(cls, value: Optional[str]) -> str:
        value = (value or "").strip()
        return value or settings.DEFAULT_SITE_TIMEZONE

    @field_validator("type")
    @classmethod
    def default_type(cls, value: Optional[str]) -> str:
        value = (value or "").strip()
        return value or settings.DEFAULT_SITE_TYPE


class SiteUpdate(BaseModel):
    # `id` and `deleted` are not updatable; deletion goes through the lifecycle.
    model_config = ConfigDict(extra="forbid")

    name: Optional[NameStr] = None
    main_url: Optional[UrlStr] = None
    group: Optional[str] = None
    timezone: Optional[constr(min_length=1, strip_whitespace=True)] = None
    type: Optional[constr(min_length=1, strip_whitespace=True)] = None
    created_at: Optional[datetime] = None

    @field_validator("name", "main_url", "timezone", "type", "created_at", mode="before")
    @classmethod
    def reject_explicit_null(cls, value):
        if value is None:
            raise ValueError("field cannot be null")
        return value


class SiteRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    group: Optional[str]
    main_url: str
    timezone: str
    type: str
    created_at: datetime


class KnownUrl(BaseModel):
    site_id: int
    url: str
