from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from lms_nav.models.enums import DashboardArea, UserType
from lms_nav.models.role_hierarchy import RoleHierarchy


# ---------------------------------------------------------
# RESOLVED TREE (consumed by the rendering layer)
# ---------------------------------------------------------
class ResolvedNavItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    icon: str
    path: Optional[str]      # None when the route needs a department and none is active
    visible: bool
    enabled: bool


class ResolvedSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    collapsible: bool
    default_expanded: bool
    items: List[ResolvedNavItem] = []


class DepartmentEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    department_id: str
    department_name: str
    axis: UserType
    is_primary: bool
    selected: bool


class ResolvedDepartmentAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    icon: str
    path: str


class NavTree(BaseModel):
    model_config = ConfigDict(frozen=True)

    dashboard: DashboardArea
    active_department_id: Optional[str] = None
    sections: List[ResolvedSection] = []
    departments: List[DepartmentEntry] = []
    department_actions: List[ResolvedDepartmentAction] = []


# ---------------------------------------------------------
# API REQUESTS / RESPONSES
# ---------------------------------------------------------
class NavigationRequest(BaseModel):
    hierarchy: RoleHierarchy
    dashboard: DashboardArea
    active_department_id: Optional[str] = None

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "hierarchy": {
                        "primaryUserType": "staff",
                        "allUserTypes": ["staff", "learner"],
                        "allPermissions": ["content:courses:read"],
                        "departmentRoles": {
                            "staff": {
                                "departmentAssignments": [
                                    {
                                        "departmentId": "dept-1",
                                        "departmentName": "Psychology",
                                        "isPrimary": True,
                                        "roles": [
                                            {"role": "instructor", "permissions": ["content:*"]}
                                        ],
                                    }
                                ]
                            }
                        },
                    },
                    "dashboard": "staff",
                    "active_department_id": "dept-1",
                }
            ]
        }


class PermissionCheckRequest(BaseModel):
    hierarchy: RoleHierarchy
    permission: str
    department_id: Optional[str] = None


class PermissionCheckResponse(BaseModel):
    permission: str
    department_id: Optional[str] = None
    granted: bool
