# lms_nav/models/role_hierarchy.py

from typing import Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from lms_nav.models.enums import UserType


class RoleHierarchyValidationError(ValueError):
    """A role hierarchy snapshot that must not be rendered."""


# Snapshots arrive from the auth collaborator in camelCase, but Python
# callers build them with field names.
SNAPSHOT_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


# ---------------------------------------------------------
# ROLE
# ---------------------------------------------------------
class Role(BaseModel):
    model_config = SNAPSHOT_CONFIG

    role: str
    permissions: FrozenSet[str] = frozenset()


# ---------------------------------------------------------
# DEPARTMENT ASSIGNMENT (one per user + department + axis)
# ---------------------------------------------------------
class DepartmentRoleAssignment(BaseModel):
    model_config = SNAPSHOT_CONFIG

    department_id: str
    department_name: str
    is_primary: bool = False
    roles: Tuple[Role, ...] = ()

    @property
    def permissions(self) -> FrozenSet[str]:
        """Union of the permissions granted by every role held here."""
        return frozenset().union(*(r.permissions for r in self.roles))

    @property
    def role_names(self) -> List[str]:
        return [r.role for r in self.roles]


# ---------------------------------------------------------
# ROLE GROUP (one per user-type axis)
# ---------------------------------------------------------
class RoleGroup(BaseModel):
    model_config = SNAPSHOT_CONFIG

    department_assignments: Tuple[DepartmentRoleAssignment, ...] = ()


# ---------------------------------------------------------
# ROLE HIERARCHY
# ---------------------------------------------------------
class RoleHierarchy(BaseModel):
    """
    Read-only snapshot of a principal's user types, global grants and
    department-scoped roles.

    `all_permissions` only carries global-scope grants. Department grants
    live on the assignments inside `department_roles`, keyed by the
    user-type axis they belong to (staff roles, learner roles).
    """

    model_config = SNAPSHOT_CONFIG

    primary_user_type: UserType
    all_user_types: FrozenSet[UserType]
    all_permissions: FrozenSet[str] = frozenset()
    department_roles: Dict[UserType, RoleGroup] = {}

    @model_validator(mode="after")
    def _check_invariants(self):
        ensure_valid(self)
        return self

    def departments(self, axis: UserType) -> List[DepartmentRoleAssignment]:
        """Assignments on one axis, primary first, otherwise in snapshot order."""
        group = self.department_roles.get(axis)
        if group is None:
            return []
        return sorted(group.department_assignments, key=lambda a: not a.is_primary)

    def assignments_for(self, department_id: Optional[str]) -> List[DepartmentRoleAssignment]:
        if not department_id:
            return []
        found = []
        for axis in UserType:
            group = self.department_roles.get(axis)
            if group is None:
                continue
            found.extend(
                a for a in group.department_assignments if a.department_id == department_id
            )
        return found

    def has_department(self, department_id: Optional[str]) -> bool:
        return bool(self.assignments_for(department_id))

    def has_any_department(self) -> bool:
        return any(g.department_assignments for g in self.department_roles.values())

    def primary_department(self, axis: UserType) -> Optional[DepartmentRoleAssignment]:
        for assignment in self.departments(axis):
            if assignment.is_primary:
                return assignment
        return None


def ensure_valid(hierarchy: RoleHierarchy) -> RoleHierarchy:
    """
    Check the structural invariants of a snapshot.

    Snapshots built with `model_construct` skip pydantic validation, so the
    resolver calls this at the start of every pass as well.
    """
    if not isinstance(hierarchy, RoleHierarchy):
        raise RoleHierarchyValidationError("Role hierarchy is missing")

    if not hierarchy.all_user_types:
        raise RoleHierarchyValidationError("all_user_types must not be empty")

    if hierarchy.primary_user_type not in hierarchy.all_user_types:
        raise RoleHierarchyValidationError(
            f"Primary user type '{_label(hierarchy.primary_user_type)}' "
            "is missing from all_user_types"
        )

    for axis, group in hierarchy.department_roles.items():
        seen = set()
        primaries = 0
        for assignment in group.department_assignments:
            if assignment.department_id in seen:
                raise RoleHierarchyValidationError(
                    f"Duplicate assignment for department '{assignment.department_id}' "
                    f"on axis '{_label(axis)}'"
                )
            seen.add(assignment.department_id)
            if assignment.is_primary:
                primaries += 1

        if primaries > 1:
            raise RoleHierarchyValidationError(
                f"More than one primary department on axis '{_label(axis)}'"
            )

    return hierarchy


def _label(value) -> str:
    return getattr(value, "value", str(value))
