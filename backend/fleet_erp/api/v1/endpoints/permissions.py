from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from fleet_erp.api.deps import get_current_principal, require_permission
from fleet_erp.core.permissions import MODULE_NAMES, PERMISSIONS
from fleet_erp.core.responses import success_response
from fleet_erp.schemas.auth import MyPermissionsRead, PermissionDefinitionRead, PermissionModuleRead
from fleet_erp.services.permissions import PermissionEvaluator, Principal

router = APIRouter(tags=["Permissions"])


@router.get("/permissions")
async def list_permission_catalog(
    request: Request,
    _principal: Principal = Depends(require_permission("roles.view")),
):
    data = [
        PermissionModuleRead(
            module=module.module,
            module_name=module.module_name,
            permissions=[
                PermissionDefinitionRead(
                    name=item.name,
                    description=item.description,
                    module=item.module,
                    action=item.action,
                )
                for item in module.permissions
            ],
        ).model_dump()
        for module in PERMISSIONS
    ]
    return success_response(data=data, request=request)


@router.get("/me/permissions")
async def get_my_permissions(
    request: Request,
    principal: Principal = Depends(get_current_principal),
):
    evaluator = PermissionEvaluator.for_principal(principal)
    payload = MyPermissionsRead(
        user_id=principal.user_id,
        role=principal.role,
        is_admin=evaluator.is_admin,
        branch_id=principal.branch_id,
        permissions=list(evaluator.permissions),
        modules=evaluator.accessible_modules(MODULE_NAMES),
    )
    return success_response(data=payload.model_dump(mode="json"), request=request)
