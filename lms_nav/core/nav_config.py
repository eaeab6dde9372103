# lms_nav/core/nav_config.py
#
# Fixed sidebar configuration per dashboard area. Sections are ordered:
# overview, primary, secondary, insights, department, footer. The three
# areas share no items.

from typing import Dict, Optional, Tuple

from lms_nav.models.enums import DashboardArea, ExpansionMode, PermissionScope, UserType
from lms_nav.models.navigation import (
    DepartmentActionItem,
    ExpansionGroup,
    NavItemSpec,
    NavSection,
)

# ==========================================================
# SECTION IDS
# ==========================================================
SECTION_OVERVIEW = "overview"
SECTION_PRIMARY = "primary"
SECTION_SECONDARY = "secondary"
SECTION_INSIGHTS = "insights"
SECTION_DEPARTMENT = "department"
SECTION_FOOTER = "footer"


def _department_section() -> NavSection:
    # Holds the department picker and the flat department actions, which
    # the resolver emits next to the sections rather than as items.
    return NavSection(
        id=SECTION_DEPARTMENT,
        label="My Departments",
        collapsible=True,
        default_expanded=False,
    )


# ==========================================================
# ROUTE TABLE: route_key -> {(user type or None, dashboard): path}
# A None user type matches any principal.
# ==========================================================
ROUTES: Dict[str, Dict[Tuple[Optional[UserType], DashboardArea], str]] = {
    "my-progress": {
        (UserType.Learner, DashboardArea.Learner): "/learner/progress",
        (UserType.Learner, DashboardArea.Staff): "/learner/progress",
    },
    "profile": {
        (None, DashboardArea.Staff): "/staff/profile",
        (None, DashboardArea.Learner): "/learner/profile",
        (None, DashboardArea.Admin): "/admin/profile",
    },
}


# ==========================================================
# STAFF
# ==========================================================
STAFF_SECTIONS: Tuple[NavSection, ...] = (
    NavSection(
        id=SECTION_OVERVIEW,
        label="Overview",
        collapsible=False,
        default_expanded=True,
        items=(
            NavItemSpec(id="staff-dashboard", label="Dashboard", icon="home",
                        path_template="/staff/dashboard"),
            NavItemSpec(id="staff-calendar", label="Calendar", icon="calendar-days",
                        path_template="/staff/calendar"),
            # Learner-only shortcut, shown grayed out for staff without a
            # learner profile.
            NavItemSpec(id="staff-my-progress", label="My Progress", icon="trending-up",
                        path_template="/learner/progress",
                        required_permission="dashboard:view-my-progress",
                        user_types=frozenset({UserType.Learner}),
                        show_when_unauthorized=True,
                        route_key="my-progress"),
        ),
    ),
    NavSection(
        id=SECTION_PRIMARY,
        label="Teaching",
        collapsible=True,
        default_expanded=True,
        items=(
            NavItemSpec(id="staff-courses", label="My Courses", icon="book-open",
                        path_template="/staff/courses",
                        required_permission="content:courses:read"),
            NavItemSpec(id="staff-classes", label="My Classes", icon="calendar",
                        path_template="/staff/classes",
                        required_permission="class:view-own"),
            NavItemSpec(id="staff-grading", label="Grading", icon="check-square",
                        path_template="/staff/grading",
                        required_permission="grades:own-classes:manage",
                        scope=PermissionScope.Department),
        ),
    ),
    NavSection(
        id=SECTION_SECONDARY,
        label="Management",
        collapsible=True,
        default_expanded=False,
        items=(
            NavItemSpec(id="staff-course-summary", label="Course Summary", icon="file-bar-chart",
                        path_template="/staff/analytics/courses",
                        required_permission="reports:department:read",
                        scope=PermissionScope.Department),
        ),
    ),
    NavSection(
        id=SECTION_INSIGHTS,
        label="Insights",
        collapsible=True,
        default_expanded=False,
        items=(
            NavItemSpec(id="staff-analytics", label="Analytics", icon="bar-chart",
                        path_template="/staff/analytics",
                        required_permission="reports:department:read",
                        scope=PermissionScope.Department),
            NavItemSpec(id="staff-reports", label="Reports", icon="file-text",
                        path_template="/staff/reports",
                        required_permission="reports:class:read",
                        scope=PermissionScope.Department),
        ),
    ),
    _department_section(),
    NavSection(
        id=SECTION_FOOTER,
        label="Account",
        collapsible=False,
        default_expanded=True,
        items=(
            NavItemSpec(id="staff-profile", label="My Profile", icon="user",
                        path_template="/staff/profile", route_key="profile"),
            NavItemSpec(id="staff-settings", label="Settings", icon="settings",
                        path_template="/staff/settings"),
        ),
    ),
)


# ==========================================================
# LEARNER
# ==========================================================
LEARNER_SECTIONS: Tuple[NavSection, ...] = (
    NavSection(
        id=SECTION_OVERVIEW,
        label="Overview",
        collapsible=False,
        default_expanded=True,
        items=(
            NavItemSpec(id="learner-dashboard", label="Dashboard", icon="home",
                        path_template="/learner/dashboard"),
            NavItemSpec(id="learner-calendar", label="Calendar", icon="calendar-days",
                        path_template="/learner/calendar"),
        ),
    ),
    NavSection(
        id=SECTION_PRIMARY,
        label="Learning",
        collapsible=True,
        default_expanded=True,
        items=(
            NavItemSpec(id="learner-inbox", label="Inbox", icon="inbox",
                        path_template="/learner/inbox"),
            NavItemSpec(id="learner-classes", label="My Classes", icon="calendar",
                        path_template="/learner/classes"),
            NavItemSpec(id="learner-catalog", label="Course Catalog", icon="book-open",
                        path_template="/learner/catalog",
                        required_permission="course:view-catalog"),
        ),
    ),
    NavSection(
        id=SECTION_SECONDARY,
        label="Progress",
        collapsible=True,
        default_expanded=True,
        items=(
            NavItemSpec(id="learner-progress", label="My Progress", icon="trending-up",
                        path_template="/learner/progress",
                        required_permission="dashboard:view-my-progress",
                        route_key="my-progress"),
            NavItemSpec(id="learner-certificates", label="Certificates", icon="award",
                        path_template="/learner/certificates"),
        ),
    ),
    NavSection(
        id=SECTION_INSIGHTS,
        label="Insights",
        collapsible=True,
        default_expanded=False,
    ),
    _department_section(),
    NavSection(
        id=SECTION_FOOTER,
        label="Account",
        collapsible=False,
        default_expanded=True,
        items=(
            NavItemSpec(id="learner-profile", label="My Profile", icon="user",
                        path_template="/learner/profile", route_key="profile"),
            NavItemSpec(id="learner-settings", label="Settings", icon="settings",
                        path_template="/learner/settings"),
        ),
    ),
)


# ==========================================================
# ADMIN
# ==========================================================
ADMIN_SECTIONS: Tuple[NavSection, ...] = (
    NavSection(
        id=SECTION_OVERVIEW,
        label="Overview",
        collapsible=False,
        default_expanded=True,
        items=(
            NavItemSpec(id="admin-dashboard", label="Dashboard", icon="home",
                        path_template="/admin/dashboard"),
            NavItemSpec(id="admin-calendar", label="System Calendar", icon="calendar-days",
                        path_template="/admin/calendar"),
        ),
    ),
    NavSection(
        id=SECTION_PRIMARY,
        label="Administration",
        collapsible=True,
        default_expanded=True,
        items=(
            NavItemSpec(id="admin-users", label="User Management", icon="users",
                        path_template="/admin/users",
                        required_permission="user:view"),
            NavItemSpec(id="admin-departments", label="Departments", icon="building",
                        path_template="/admin/departments",
                        required_permission="department:view"),
        ),
    ),
    NavSection(
        id=SECTION_SECONDARY,
        label="Configuration",
        collapsible=True,
        default_expanded=False,
        items=(
            NavItemSpec(id="admin-system-settings", label="System Settings", icon="settings",
                        path_template="/admin/settings",
                        required_permission="settings:view"),
        ),
    ),
    NavSection(
        id=SECTION_INSIGHTS,
        label="Insights",
        collapsible=True,
        default_expanded=True,
        items=(
            NavItemSpec(id="admin-analytics", label="System Analytics", icon="bar-chart",
                        path_template="/admin/analytics",
                        required_permission="dashboard:view-system-overview"),
            NavItemSpec(id="admin-reports", label="System Reports", icon="file-text",
                        path_template="/admin/reports",
                        required_permission="report:view-all"),
        ),
    ),
    NavSection(
        id=SECTION_FOOTER,
        label="Account",
        collapsible=False,
        default_expanded=True,
        items=(
            NavItemSpec(id="admin-profile", label="My Profile", icon="user",
                        path_template="/admin/profile", route_key="profile"),
            NavItemSpec(id="admin-settings-personal", label="Settings", icon="settings",
                        path_template="/admin/settings/personal"),
        ),
    ),
)


SECTIONS_BY_DASHBOARD: Dict[DashboardArea, Tuple[NavSection, ...]] = {
    DashboardArea.Staff: STAFF_SECTIONS,
    DashboardArea.Learner: LEARNER_SECTIONS,
    DashboardArea.Admin: ADMIN_SECTIONS,
}

# Axis whose departments are listed in the picker on each dashboard.
DEPARTMENT_AXIS_BY_DASHBOARD: Dict[DashboardArea, Optional[UserType]] = {
    DashboardArea.Staff: UserType.Staff,
    DashboardArea.Learner: UserType.Learner,
    DashboardArea.Admin: None,
}


# ==========================================================
# EXPANSION GROUPS
# ==========================================================
EXPANSION_GROUPS: Dict[DashboardArea, Tuple[ExpansionGroup, ...]] = {
    DashboardArea.Staff: (
        ExpansionGroup(id="workflow", mode=ExpansionMode.Independent,
                       section_ids=(SECTION_PRIMARY, SECTION_SECONDARY)),
        # Opening the department picker folds the insights away.
        ExpansionGroup(id="context", mode=ExpansionMode.Accordion,
                       section_ids=(SECTION_INSIGHTS, SECTION_DEPARTMENT)),
    ),
    DashboardArea.Learner: (
        ExpansionGroup(id="workflow", mode=ExpansionMode.Independent,
                       section_ids=(SECTION_PRIMARY, SECTION_SECONDARY,
                                    SECTION_INSIGHTS, SECTION_DEPARTMENT)),
    ),
    DashboardArea.Admin: (
        ExpansionGroup(id="workflow", mode=ExpansionMode.Accordion,
                       section_ids=(SECTION_PRIMARY, SECTION_SECONDARY, SECTION_INSIGHTS)),
    ),
}


# ==========================================================
# DEPARTMENT ACTIONS (flat, no groups)
# ==========================================================
DEPARTMENT_ACTIONS: Tuple[DepartmentActionItem, ...] = (
    # Staff
    DepartmentActionItem(id="dept-manage-courses", label="Manage Courses", icon="book-open",
                         path_template="/staff/departments/:deptId/courses",
                         required_permission="content:courses:read",
                         dashboards=frozenset({DashboardArea.Staff})),
    DepartmentActionItem(id="dept-manage-classes", label="Manage Classes", icon="calendar",
                         path_template="/staff/departments/:deptId/classes",
                         required_permission="content:classes:read",
                         dashboards=frozenset({DashboardArea.Staff})),
    DepartmentActionItem(id="dept-create-course", label="Create Course", icon="plus",
                         path_template="/staff/departments/:deptId/courses/create",
                         required_permission="content:courses:manage",
                         dashboards=frozenset({DashboardArea.Staff})),
    DepartmentActionItem(id="dept-students", label="Student Progress", icon="users",
                         path_template="/staff/departments/:deptId/students",
                         required_permission="enrollments:read",
                         dashboards=frozenset({DashboardArea.Staff})),
    DepartmentActionItem(id="dept-enrollments", label="Course Enrollments", icon="user-plus",
                         path_template="/staff/departments/:deptId/enrollments",
                         required_permission="enrollment:department:manage",
                         dashboards=frozenset({DashboardArea.Staff})),
    DepartmentActionItem(id="dept-reports", label="Department Reports", icon="file-text",
                         path_template="/staff/departments/:deptId/reports",
                         required_permission="reports:department:read",
                         dashboards=frozenset({DashboardArea.Staff})),
    DepartmentActionItem(id="dept-settings", label="Department Settings", icon="settings",
                         path_template="/staff/departments/:deptId/settings",
                         required_permission="department:settings:manage",
                         dashboards=frozenset({DashboardArea.Staff})),
    DepartmentActionItem(id="dept-management", label="Department Management", icon="building-2",
                         path_template="/staff/departments/:deptId/manage",
                         required_permission="content:programs:manage",
                         dashboards=frozenset({DashboardArea.Staff})),
    # Learner
    DepartmentActionItem(id="dept-browse-courses", label="Browse Courses", icon="search",
                         path_template="/learner/departments/:deptId/courses",
                         required_permission="content:courses:read",
                         dashboards=frozenset({DashboardArea.Learner})),
    DepartmentActionItem(id="dept-my-enrollments", label="My Enrollments", icon="book-open",
                         path_template="/learner/departments/:deptId/enrollments",
                         required_permission="enrollments:own:read",
                         dashboards=frozenset({DashboardArea.Learner})),
    DepartmentActionItem(id="dept-my-progress", label="My Progress", icon="trending-up",
                         path_template="/learner/departments/:deptId/progress",
                         required_permission="progress:own:read",
                         dashboards=frozenset({DashboardArea.Learner})),
)
