"""Resource Schemas — validation for the /api/resources boundary.

Invariants:
    - title and url: required strings, stripped, non-empty
    - description defaults to "", type and platform default to "Otro"
    - Optional fields are stripped; null or blank falls back to the default
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

DEFAULT_RESOURCE_TYPE = "Otro"
DEFAULT_PLATFORM = "Otro"

_OPTIONAL_DEFAULTS = {
    "description": "",
    "type": DEFAULT_RESOURCE_TYPE,
    "platform": DEFAULT_PLATFORM,
}


class ResourceCreate(BaseModel):
    """Resource creation — required title/url, defaulted metadata."""
    model_config = ConfigDict(validate_default=True)

    title: str = Field(max_length=255)
    url: str = Field(max_length=2048)
    description: str | None = None
    type: str | None = Field(None, max_length=50)
    platform: str | None = Field(None, max_length=50)

    @field_validator("title", "url")
    @classmethod
    def strip_required(cls, v: str, info: ValidationInfo) -> str:
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name} is required and cannot be empty")
        return v

    @field_validator("description", "type", "platform", mode="after")
    @classmethod
    def strip_or_default(cls, v: str | None, info: ValidationInfo) -> str:
        v = (v or "").strip()
        return v or _OPTIONAL_DEFAULTS[info.field_name]


class ResourceResponse(BaseModel):
    """Resource response — full stored row including created_at."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    url: str
    type: str
    platform: str
    created_at: datetime
