"""Public endpoints backed by the settings runtime: site info, quota,
captcha provider and first-run initialization."""

from fastapi import APIRouter

from perfectpic.foundation.application import InitializeSystemCommand
from perfectpic.infra.fastapi.dependencies import InitServiceDep, SiteSettingsDep
from perfectpic.infra.fastapi.schemas import (
    CaptchaProviderResponse,
    DefaultStorageQuotaResponse,
    InitializeSystemRequest,
    InitStateResponse,
    MessageResponse,
    SiteInfoItemResponse,
)

router = APIRouter(prefix="/api", tags=["settings"])


@router.get("/web-info", response_model=list[SiteInfoItemResponse])
def get_web_info(site: SiteSettingsDep) -> list[SiteInfoItemResponse]:
    return [SiteInfoItemResponse.model_validate(item) for item in site.site_info()]


@router.get("/default-storage-quota", response_model=DefaultStorageQuotaResponse)
def get_default_storage_quota(site: SiteSettingsDep) -> DefaultStorageQuotaResponse:
    return DefaultStorageQuotaResponse(default_storage_quota=site.default_storage_quota())


@router.get("/captcha/provider", response_model=CaptchaProviderResponse)
def get_captcha_provider(site: SiteSettingsDep) -> CaptchaProviderResponse:
    config = site.captcha_public_config()
    return CaptchaProviderResponse(
        provider=str(config.provider),
        public_config=dict(config.public_config),
    )


@router.get("/init", response_model=InitStateResponse)
def get_init_state(service: InitServiceDep) -> InitStateResponse:
    return InitStateResponse(initialized=service.get_init_state().initialized)


@router.post("/init", response_model=MessageResponse)
def initialize_system(body: InitializeSystemRequest, service: InitServiceDep) -> MessageResponse:
    """Create the first administrator. Returns 403 once initialized."""
    service.initialize_system(
        InitializeSystemCommand(
            username=body.username,
            password=body.password,
            site_name=body.site_name,
            site_description=body.site_description,
        )
    )
    return MessageResponse(message="System initialized")
