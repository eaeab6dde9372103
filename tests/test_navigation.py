import pytest

from lms_nav.core.nav_config import SECTION_DEPARTMENT, STAFF_SECTIONS
from lms_nav.core.navigation import (
    build_department_action_path,
    current_dashboard_path,
    default_dashboard,
    default_dashboard_path,
    department_actions_for_dashboard,
    resolve_navigation,
    sections_for_dashboard,
)
from lms_nav.core.permissions import PermissionEvaluator
from lms_nav.models.enums import DashboardArea, UserType
from lms_nav.models.role_hierarchy import (
    RoleGroup,
    RoleHierarchy,
    RoleHierarchyValidationError,
)


def find_item(tree, item_id):
    for section in tree.sections:
        for item in section.items:
            if item.id == item_id:
                return item
    return None


def item_ids(tree):
    return [item.id for section in tree.sections for item in section.items]


# ---------------------------------------------------------
# SECTION SELECTION
# ---------------------------------------------------------
def test_sections_follow_dashboard_order(staff_hierarchy):
    tree = resolve_navigation(staff_hierarchy, DashboardArea.Staff, None)
    assert [s.id for s in tree.sections] == [
        "overview", "primary", "secondary", "insights", "department", "footer",
    ]
    assert tree.sections[1].label == "Teaching"


def test_no_cross_area_leakage(staff_hierarchy):
    staff_ids = set(item_ids(resolve_navigation(staff_hierarchy, "staff", None)))
    learner_ids = set(item_ids(resolve_navigation(staff_hierarchy, "learner", None)))
    admin_ids = set(item_ids(resolve_navigation(staff_hierarchy, "admin", None)))

    assert all(i.startswith("staff-") for i in staff_ids)
    assert all(i.startswith("learner-") for i in learner_ids)
    assert all(i.startswith("admin-") for i in admin_ids)


def test_admin_dashboard_has_no_department_section(staff_hierarchy):
    tree = resolve_navigation(staff_hierarchy, DashboardArea.Admin, "dept-1")
    assert SECTION_DEPARTMENT not in [s.id for s in tree.sections]
    assert tree.departments == []
    assert tree.department_actions == []


# ---------------------------------------------------------
# USER-TYPE VISIBILITY
# ---------------------------------------------------------
def test_cross_area_item_is_grayed_out_for_wrong_user_type():
    hierarchy = RoleHierarchy(
        primary_user_type="staff",
        all_user_types=["staff"],
        all_permissions={"dashboard:view-my-progress"},
    )
    item = find_item(resolve_navigation(hierarchy, DashboardArea.Staff, None), "staff-my-progress")

    assert item is not None
    assert item.visible is True
    assert item.enabled is False


def test_cross_area_item_enabled_for_multi_type_user_with_permission():
    hierarchy = RoleHierarchy(
        primary_user_type="staff",
        all_user_types=["staff", "learner"],
        all_permissions={"dashboard:view-my-progress"},
    )
    item = find_item(resolve_navigation(hierarchy, DashboardArea.Staff, None), "staff-my-progress")

    assert item.visible is True
    assert item.enabled is True
    assert item.path == "/learner/progress"


def test_cross_area_item_disabled_without_permission():
    hierarchy = RoleHierarchy(
        primary_user_type="learner",
        all_user_types=["staff", "learner"],
    )
    item = find_item(resolve_navigation(hierarchy, DashboardArea.Staff, None), "staff-my-progress")
    assert item.visible is True
    assert item.enabled is False


def test_user_type_restricted_item_is_omitted_without_show_flag(monkeypatch, staff_hierarchy):
    from lms_nav.core import nav_config
    from lms_nav.models.navigation import NavItemSpec, NavSection

    hidden = NavSection(
        id="overview", label="Overview", collapsible=False, default_expanded=True,
        items=(
            NavItemSpec(id="staff-admin-only", label="Admin only", icon="lock",
                        path_template="/staff/secret",
                        user_types=frozenset({UserType.GlobalAdmin})),
            NavItemSpec(id="staff-anyone", label="Anyone", icon="home",
                        path_template="/staff/dashboard"),
        ),
    )
    monkeypatch.setitem(nav_config.SECTIONS_BY_DASHBOARD, DashboardArea.Staff, (hidden,))

    tree = resolve_navigation(staff_hierarchy, DashboardArea.Staff, None)
    assert item_ids(tree) == ["staff-anyone"]


# ---------------------------------------------------------
# PERMISSION GATING
# ---------------------------------------------------------
def test_global_items_follow_global_grants(staff_hierarchy):
    tree = resolve_navigation(staff_hierarchy, DashboardArea.Staff, None)
    assert find_item(tree, "staff-courses").enabled is True      # content:courses:read
    assert find_item(tree, "staff-classes").enabled is True      # class:view-own
    assert find_item(tree, "staff-dashboard").enabled is True    # no permission needed


def test_department_scoped_items_disabled_without_active_department(staff_hierarchy):
    tree = resolve_navigation(staff_hierarchy, DashboardArea.Staff, None)
    for item_id in ["staff-grading", "staff-course-summary", "staff-analytics", "staff-reports"]:
        item = find_item(tree, item_id)
        assert item.visible is True
        assert item.enabled is False


def test_department_scoped_items_use_active_department(staff_hierarchy):
    dept1 = resolve_navigation(staff_hierarchy, DashboardArea.Staff, "dept-1")
    assert find_item(dept1, "staff-analytics").enabled is True
    assert find_item(dept1, "staff-reports").enabled is False

    dept2 = resolve_navigation(staff_hierarchy, DashboardArea.Staff, "dept-2")
    assert find_item(dept2, "staff-analytics").enabled is False
    assert find_item(dept2, "staff-reports").enabled is True


def test_admin_items_need_admin_permissions():
    hierarchy = RoleHierarchy(
        primary_user_type=UserType.GlobalAdmin,
        all_user_types={UserType.GlobalAdmin},
        all_permissions={"user:*", "department:view"},
    )
    tree = resolve_navigation(hierarchy, DashboardArea.Admin, None)
    assert find_item(tree, "admin-users").enabled is True
    assert find_item(tree, "admin-departments").enabled is True
    assert find_item(tree, "admin-system-settings").enabled is False
    assert find_item(tree, "admin-reports").enabled is False


# ---------------------------------------------------------
# DEPARTMENT LIST & ACTIONS
# ---------------------------------------------------------
def test_no_actions_without_active_department(staff_hierarchy):
    tree = resolve_navigation(staff_hierarchy, DashboardArea.Staff, None)
    assert tree.department_actions == []


def test_actions_filtered_by_department_permission(staff_hierarchy):
    tree = resolve_navigation(staff_hierarchy, DashboardArea.Staff, "dept-1")
    ids = [a.id for a in tree.department_actions]

    # content:* covers courses/classes/programs; reports + enrollments are explicit
    assert ids == [
        "dept-manage-courses",
        "dept-manage-classes",
        "dept-create-course",
        "dept-students",
        "dept-reports",
        "dept-management",
    ]
    assert tree.department_actions[0].path == "/staff/departments/dept-1/courses"


def test_actions_for_department_without_matching_permissions(staff_hierarchy):
    tree = resolve_navigation(staff_hierarchy, DashboardArea.Staff, "dept-2")
    assert tree.department_actions == []


def test_actions_for_unassigned_department_are_empty(staff_hierarchy):
    tree = resolve_navigation(staff_hierarchy, DashboardArea.Staff, "dept-999")
    assert tree.department_actions == []


def test_learner_actions_only_on_learner_dashboard(assignment):
    hierarchy = RoleHierarchy(
        primary_user_type=UserType.Learner,
        all_user_types={UserType.Learner},
        department_roles={
            UserType.Learner: RoleGroup(department_assignments=(
                assignment("dept-456", ["content:courses:read", "progress:own:read"],
                           is_primary=True, role="course-taker"),
            )),
        },
    )

    learner_tree = resolve_navigation(hierarchy, DashboardArea.Learner, "dept-456")
    assert [a.id for a in learner_tree.department_actions] == [
        "dept-browse-courses", "dept-my-progress",
    ]
    assert [d.department_id for d in learner_tree.departments] == ["dept-456"]

    # Staff dashboard lists staff-axis departments only
    staff_tree = resolve_navigation(hierarchy, DashboardArea.Staff, "dept-456")
    assert staff_tree.departments == []
    assert [a.id for a in staff_tree.department_actions] == ["dept-manage-courses"]


def test_department_entries_mark_selection(staff_hierarchy):
    tree = resolve_navigation(staff_hierarchy, DashboardArea.Staff, "dept-2")
    entries = [(d.department_id, d.is_primary, d.selected) for d in tree.departments]
    assert entries == [("dept-1", True, False), ("dept-2", False, True)]
    assert tree.departments[0].department_name == "Psychology"


# ---------------------------------------------------------
# DETERMINISM & VALIDATION
# ---------------------------------------------------------
def test_resolution_is_idempotent(staff_hierarchy):
    evaluator = PermissionEvaluator(staff_hierarchy)
    first = resolve_navigation(staff_hierarchy, DashboardArea.Staff, "dept-1", evaluator)
    second = resolve_navigation(staff_hierarchy, DashboardArea.Staff, "dept-1", evaluator)

    assert first == second
    assert first.model_dump() == second.model_dump()
    assert first is not second


def test_invalid_hierarchy_yields_no_tree():
    broken = RoleHierarchy.model_construct(
        primary_user_type=UserType.Staff,
        all_user_types=frozenset({UserType.Learner}),
        all_permissions=frozenset(),
        department_roles={},
    )
    with pytest.raises(RoleHierarchyValidationError):
        resolve_navigation(broken, DashboardArea.Staff, None)


# ---------------------------------------------------------
# PATH HELPERS
# ---------------------------------------------------------
def test_profile_route_follows_dashboard(staff_hierarchy):
    assert find_item(resolve_navigation(staff_hierarchy, "staff", None), "staff-profile").path == "/staff/profile"
    assert find_item(resolve_navigation(staff_hierarchy, "learner", None), "learner-profile").path == "/learner/profile"
    assert find_item(resolve_navigation(staff_hierarchy, "admin", None), "admin-profile").path == "/admin/profile"


def test_build_department_action_path():
    assert build_department_action_path("/staff/departments/:deptId/reports", "d-7") == (
        "/staff/departments/d-7/reports"
    )


def test_dashboard_paths():
    assert current_dashboard_path(DashboardArea.Learner) == "/learner/dashboard"
    assert current_dashboard_path(None) == "/staff/dashboard"
    assert default_dashboard([UserType.Learner, UserType.Staff]) == DashboardArea.Staff
    assert default_dashboard([UserType.GlobalAdmin]) == DashboardArea.Staff
    assert default_dashboard_path([UserType.Learner]) == "/learner/dashboard"
    assert default_dashboard_path([]) == "/staff/dashboard"


def test_config_lookups():
    assert sections_for_dashboard(DashboardArea.Staff) is STAFF_SECTIONS
    staff_actions = department_actions_for_dashboard("staff")
    assert staff_actions and all(DashboardArea.Staff in a.dashboards for a in staff_actions)
    assert department_actions_for_dashboard(DashboardArea.Admin) == []
