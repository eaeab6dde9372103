# lms_nav/api/endpoints/navigation.py

from fastapi import APIRouter, HTTPException, status

from lms_nav.core.navigation import resolve_navigation
from lms_nav.core.permissions import PermissionEvaluator
from lms_nav.models.role_hierarchy import RoleHierarchyValidationError
from lms_nav.schemas.navigation import (
    NavigationRequest,
    NavTree,
    PermissionCheckRequest,
    PermissionCheckResponse,
)

router = APIRouter(
    prefix="/api/navigation",
    tags=["Navigation"]
)


# 1️⃣ Resolve the sidebar tree for a snapshot
@router.post("/resolve", response_model=NavTree)
async def resolve_tree(payload: NavigationRequest):
    try:
        return resolve_navigation(
            payload.hierarchy,
            payload.dashboard,
            payload.active_department_id,
        )
    except RoleHierarchyValidationError as e:
        raise HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, str(e))


# 2️⃣ Check a single permission (global, or within a department)
@router.post("/permissions/check", response_model=PermissionCheckResponse)
async def check_permission(payload: PermissionCheckRequest):
    evaluator = PermissionEvaluator(payload.hierarchy)
    return PermissionCheckResponse(
        permission=payload.permission,
        department_id=payload.department_id,
        granted=evaluator.has_permission(payload.permission, payload.department_id),
    )
