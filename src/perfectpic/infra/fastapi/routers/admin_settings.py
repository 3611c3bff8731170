"""Admin settings endpoints.

All routes require an administrator principal. Sensitive values are
returned masked; sending the mask back leaves the stored secret intact.
"""

from fastapi import APIRouter

from perfectpic.foundation.domain import SettingUpdate
from perfectpic.infra.fastapi.dependencies import AdminPrincipal, AdminServiceDep
from perfectpic.infra.fastapi.schemas import (
    MessageResponse,
    SendTestEmailRequest,
    SettingResponse,
    UpdateSettingItem,
    UpdateSettingsResponse,
)

router = APIRouter(prefix="/api/admin/settings", tags=["admin-settings"])


@router.get("", response_model=list[SettingResponse])
def list_settings(_: AdminPrincipal, service: AdminServiceDep) -> list[SettingResponse]:
    """All settings in canonical order, secrets masked."""
    return [SettingResponse.model_validate(setting) for setting in service.admin_list_settings()]


@router.patch("", response_model=UpdateSettingsResponse)
def update_settings(
    items: list[UpdateSettingItem],
    _: AdminPrincipal,
    service: AdminServiceDep,
) -> UpdateSettingsResponse:
    """Batch update; every item is validated before anything is written."""
    count = service.admin_update_settings(
        [SettingUpdate(key=item.key, value=item.value) for item in items]
    )
    return UpdateSettingsResponse(message="Settings updated", count=count)


@router.post("/test-email", response_model=MessageResponse)
def send_test_email(
    body: SendTestEmailRequest,
    _: AdminPrincipal,
    service: AdminServiceDep,
) -> MessageResponse:
    service.admin_send_test_email(body.to_email)
    return MessageResponse(message="Test email sent")
