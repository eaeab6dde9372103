# lms_nav/core/navigation.py

from typing import Iterable, List, Optional, Tuple

from loguru import logger

from lms_nav.core.nav_config import (
    DEPARTMENT_ACTIONS,
    DEPARTMENT_AXIS_BY_DASHBOARD,
    ROUTES,
    SECTIONS_BY_DASHBOARD,
)
from lms_nav.core.permissions import PermissionEvaluator
from lms_nav.models.enums import DashboardArea, PermissionScope, UserType
from lms_nav.models.navigation import (
    DEPT_ID_PLACEHOLDER,
    DepartmentActionItem,
    NavItemSpec,
    NavSection,
)
from lms_nav.models.role_hierarchy import (
    RoleHierarchy,
    RoleHierarchyValidationError,
    ensure_valid,
)
from lms_nav.schemas.navigation import (
    DepartmentEntry,
    NavTree,
    ResolvedDepartmentAction,
    ResolvedNavItem,
    ResolvedSection,
)


# ============================================================================
# CONFIG LOOKUPS
# ============================================================================
def sections_for_dashboard(dashboard: DashboardArea) -> Tuple[NavSection, ...]:
    return SECTIONS_BY_DASHBOARD[DashboardArea(dashboard)]


def department_actions_for_dashboard(dashboard: DashboardArea) -> List[DepartmentActionItem]:
    dashboard = DashboardArea(dashboard)
    return [action for action in DEPARTMENT_ACTIONS if dashboard in action.dashboards]


def build_department_action_path(path_template: str, department_id: str) -> str:
    return path_template.replace(DEPT_ID_PLACEHOLDER, department_id)


def route_for(route_key: str, user_type: Optional[UserType], dashboard: DashboardArea) -> Optional[str]:
    table = ROUTES.get(route_key, {})
    return table.get((user_type, dashboard)) or table.get((None, dashboard))


def current_dashboard_path(dashboard: Optional[DashboardArea]) -> str:
    """Dashboard link that keeps the user in the area they are in."""
    if dashboard is None:
        return "/staff/dashboard"
    return f"/{DashboardArea(dashboard).value}/dashboard"


def default_dashboard(user_types: Iterable[UserType]) -> DashboardArea:
    """
    Landing dashboard after login: staff > global-admin > learner.

    Global admins land on the staff dashboard; the admin area needs an
    explicit escalation.
    """
    user_types = set(user_types)
    if UserType.Staff in user_types:
        return DashboardArea.Staff
    if UserType.GlobalAdmin in user_types:
        return DashboardArea.Staff
    if UserType.Learner in user_types:
        return DashboardArea.Learner
    return DashboardArea.Staff


def default_dashboard_path(user_types: Iterable[UserType]) -> str:
    return current_dashboard_path(default_dashboard(user_types))


# ============================================================================
# RESOLVER
# ============================================================================
def resolve_navigation(
    hierarchy: RoleHierarchy,
    dashboard: DashboardArea,
    active_department_id: Optional[str],
    evaluator: Optional[PermissionEvaluator] = None,
) -> NavTree:
    """
    Derive the sidebar tree for one dashboard area.

    Pure: the same inputs always give an equal tree, and nothing is cached
    between calls. `active_department_id` must be the last committed
    department, never the target of an in-flight switch.

    Raises RoleHierarchyValidationError for a malformed snapshot; no tree is
    produced in that case.
    """
    try:
        ensure_valid(hierarchy)
    except RoleHierarchyValidationError as e:
        logger.warning(f"Refusing to resolve navigation: {e}")
        raise

    dashboard = DashboardArea(dashboard)
    if evaluator is None:
        evaluator = PermissionEvaluator(hierarchy)

    sections = [
        _resolve_section(section, hierarchy, dashboard, active_department_id, evaluator)
        for section in sections_for_dashboard(dashboard)
    ]

    return NavTree(
        dashboard=dashboard,
        active_department_id=active_department_id,
        sections=sections,
        departments=_department_entries(hierarchy, dashboard, active_department_id),
        department_actions=_department_actions(dashboard, active_department_id, evaluator),
    )


def _resolve_section(
    section: NavSection,
    hierarchy: RoleHierarchy,
    dashboard: DashboardArea,
    active_department_id: Optional[str],
    evaluator: PermissionEvaluator,
) -> ResolvedSection:
    items = []
    for item in section.items:
        resolved = _resolve_item(item, hierarchy, dashboard, active_department_id, evaluator)
        if resolved is not None:
            items.append(resolved)

    return ResolvedSection(
        id=section.id,
        label=section.label,
        collapsible=section.collapsible,
        default_expanded=section.default_expanded,
        items=items,
    )


def _resolve_item(
    item: NavItemSpec,
    hierarchy: RoleHierarchy,
    dashboard: DashboardArea,
    active_department_id: Optional[str],
    evaluator: PermissionEvaluator,
) -> Optional[ResolvedNavItem]:
    user_type_ok = not item.user_types or bool(item.user_types & hierarchy.all_user_types)

    # Items flagged show_when_unauthorized stay on screen, grayed out.
    if not user_type_ok and not item.show_when_unauthorized:
        return None

    enabled = user_type_ok and _permission_holds(item, active_department_id, evaluator)

    return ResolvedNavItem(
        id=item.id,
        label=item.label,
        icon=item.icon,
        path=_resolve_path(item, hierarchy, dashboard, active_department_id),
        visible=True,
        enabled=enabled,
    )


def _permission_holds(
    item: NavItemSpec,
    active_department_id: Optional[str],
    evaluator: PermissionEvaluator,
) -> bool:
    if not item.required_permission:
        return True

    if item.scope == PermissionScope.Global:
        return evaluator.has_global_permission(item.required_permission)

    if active_department_id is None:
        return False
    return evaluator.has_department_permission(item.required_permission, active_department_id)


def _route_user_type(item: NavItemSpec, hierarchy: RoleHierarchy) -> UserType:
    for user_type in UserType:
        if user_type in item.user_types and user_type in hierarchy.all_user_types:
            return user_type
    return hierarchy.primary_user_type


def _resolve_path(
    item: NavItemSpec,
    hierarchy: RoleHierarchy,
    dashboard: DashboardArea,
    active_department_id: Optional[str],
) -> Optional[str]:
    template = item.path_template
    if item.route_key:
        template = route_for(item.route_key, _route_user_type(item, hierarchy), dashboard) or template

    if DEPT_ID_PLACEHOLDER not in template:
        return template
    if active_department_id is None:
        return None
    return build_department_action_path(template, active_department_id)


def _department_entries(
    hierarchy: RoleHierarchy,
    dashboard: DashboardArea,
    active_department_id: Optional[str],
) -> List[DepartmentEntry]:
    axis = DEPARTMENT_AXIS_BY_DASHBOARD.get(dashboard)
    if axis is None:
        return []

    return [
        DepartmentEntry(
            department_id=assignment.department_id,
            department_name=assignment.department_name,
            axis=axis,
            is_primary=assignment.is_primary,
            selected=assignment.department_id == active_department_id,
        )
        for assignment in hierarchy.departments(axis)
    ]


def _department_actions(
    dashboard: DashboardArea,
    active_department_id: Optional[str],
    evaluator: PermissionEvaluator,
) -> List[ResolvedDepartmentAction]:
    if active_department_id is None:
        return []

    return [
        ResolvedDepartmentAction(
            id=action.id,
            label=action.label,
            icon=action.icon,
            path=build_department_action_path(action.path_template, active_department_id),
        )
        for action in department_actions_for_dashboard(dashboard)
        if evaluator.has_department_permission(action.required_permission, active_department_id)
    ]
