# lms_nav/core/permissions.py

from typing import FrozenSet, Iterable, List, Optional

from lms_nav.models.enums import UserType
from lms_nav.models.role_hierarchy import RoleHierarchy

WILDCARD_SUFFIX = ":*"


def permission_matches(granted: Iterable[str], permission) -> bool:
    """
    Exact match, or a single-level `prefix:*` grant covering `permission`.

    `*` on its own, `a*` and grants with a wildcard anywhere but the last
    segment are never treated as wildcards.
    """
    if not isinstance(permission, str) or not permission:
        return False

    granted = granted if isinstance(granted, (set, frozenset)) else set(granted)
    if permission in granted:
        return True

    for grant in granted:
        if not isinstance(grant, str) or not grant.endswith(WILDCARD_SUFFIX):
            continue
        base = grant[: -len(WILDCARD_SUFFIX)]
        if not base or "*" in base:
            continue
        prefix = base + ":"
        if permission.startswith(prefix) and len(permission) > len(prefix):
            return True

    return False


def _permission_list(permissions) -> List[str]:
    # A lone string is one permission; anything non-iterable grants nothing.
    if isinstance(permissions, str):
        return [permissions]
    try:
        return list(permissions)
    except TypeError:
        return []


class PermissionEvaluator:
    """
    Answers permission questions against one role hierarchy snapshot.

    Every method returns False instead of raising: a missing hierarchy,
    unknown department or malformed permission string simply means the
    principal does not hold it.
    """

    def __init__(self, hierarchy: Optional[RoleHierarchy]):
        self.hierarchy = hierarchy

    # ------------------------------------------------------------
    # Core checks
    # ------------------------------------------------------------
    def has_global_permission(self, permission: str) -> bool:
        if self.hierarchy is None:
            return False
        return permission_matches(self.hierarchy.all_permissions, permission)

    def has_department_permission(self, permission: str, department_id: Optional[str]) -> bool:
        if self.hierarchy is None or not isinstance(department_id, str):
            return False
        granted = self._department_grants(department_id)
        if granted is None:
            return False
        return permission_matches(granted, permission)

    def has_permission(self, permission: str, department_id: Optional[str] = None) -> bool:
        if department_id is None:
            return self.has_global_permission(permission)
        return self.has_department_permission(permission, department_id)

    def has_any_permission(self, permissions: Iterable[str], department_id: Optional[str] = None) -> bool:
        return any(self.has_permission(p, department_id) for p in _permission_list(permissions))

    def has_all_permissions(self, permissions: Iterable[str], department_id: Optional[str] = None) -> bool:
        permissions = _permission_list(permissions)
        if not permissions:
            return False
        return all(self.has_permission(p, department_id) for p in permissions)

    # ------------------------------------------------------------
    # Department details
    # ------------------------------------------------------------
    def department_permissions(self, department_id: Optional[str]) -> List[str]:
        granted = self._department_grants(department_id) if self.hierarchy else None
        return sorted(granted) if granted else []

    def department_roles(self, department_id: Optional[str]) -> List[str]:
        if self.hierarchy is None:
            return []
        roles: List[str] = []
        for assignment in self.hierarchy.assignments_for(department_id):
            roles.extend(r for r in assignment.role_names if r not in roles)
        return roles

    def has_role(self, role: str, department_id: Optional[str] = None) -> bool:
        if self.hierarchy is None or not role:
            return False
        if department_id is not None:
            return role in self.department_roles(department_id)
        return any(
            role in assignment.role_names
            for group in self.hierarchy.department_roles.values()
            for assignment in group.department_assignments
        )

    def has_user_type(self, user_type: UserType) -> bool:
        if self.hierarchy is None:
            return False
        return user_type in self.hierarchy.all_user_types

    def _department_grants(self, department_id: Optional[str]) -> Optional[FrozenSet[str]]:
        # None means "no assignment at all", as opposed to an assignment
        # whose roles grant nothing.
        assignments = self.hierarchy.assignments_for(department_id)
        if not assignments:
            return None
        return frozenset().union(*(a.permissions for a in assignments))
