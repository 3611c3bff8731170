"""Request and response bodies of the settings HTTP surface."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SettingResponse(BaseModel):
    """One setting row as shown to administrators (secrets masked)."""

    model_config = ConfigDict(from_attributes=True)

    key: str
    value: str
    category: str
    description: str
    sensitive: bool


class UpdateSettingItem(BaseModel):
    """One ``{key, value}`` item of a batch update."""

    key: str = Field(..., max_length=128)
    value: str


class UpdateSettingsResponse(BaseModel):
    message: str
    count: int


class SendTestEmailRequest(BaseModel):
    to_email: str = Field(..., max_length=254)


class MessageResponse(BaseModel):
    message: str


class SiteInfoItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    value: str


class DefaultStorageQuotaResponse(BaseModel):
    default_storage_quota: int


class CaptchaProviderResponse(BaseModel):
    provider: str
    public_config: dict[str, str] = Field(default_factory=dict)


class InitStateResponse(BaseModel):
    initialized: bool


class InitializeSystemRequest(BaseModel):
    """First-run setup form."""

    username: str = Field(..., max_length=64)
    password: str = Field(..., max_length=128)
    site_name: str = Field(..., max_length=255)
    site_description: str = Field(..., max_length=1024)
