# lms_nav/models/navigation.py

from typing import FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from lms_nav.models.enums import DashboardArea, ExpansionMode, PermissionScope, UserType

# Placeholder substituted with the active department id.
DEPT_ID_PLACEHOLDER = ":deptId"


class NavItemSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    icon: str
    path_template: str
    required_permission: Optional[str] = None
    scope: PermissionScope = PermissionScope.Global
    user_types: FrozenSet[UserType] = frozenset()   # empty = any user type
    show_when_unauthorized: bool = False
    route_key: Optional[str] = None                  # key into nav_config.ROUTES


class NavSection(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    collapsible: bool
    default_expanded: bool
    items: Tuple[NavItemSpec, ...] = ()


class DepartmentActionItem(BaseModel):
    """Flat entry that only makes sense once a department is active."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    icon: str
    path_template: str
    required_permission: str
    dashboards: FrozenSet[DashboardArea]


class ExpansionGroup(BaseModel):
    """Sections that share an expansion policy in the sidebar."""

    model_config = ConfigDict(frozen=True)

    id: str
    mode: ExpansionMode
    section_ids: Tuple[str, ...]
