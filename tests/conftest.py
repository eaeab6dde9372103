import os
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ------------------------------------------------------------------
# FORCE TESTING MODE
# Keep the app on the in-memory selection store, whatever .env says.
# ------------------------------------------------------------------
os.environ["SELECTION_STORE"] = "memory"

from lms_nav.main import app
from lms_nav.models.enums import UserType
from lms_nav.models.role_hierarchy import (
    DepartmentRoleAssignment,
    Role,
    RoleGroup,
    RoleHierarchy,
)
from lms_nav.services.department_selection import InMemoryDepartmentSelectionStore


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def assignment():
    def _make(department_id, permissions=(), name=None, is_primary=False, role="instructor"):
        return DepartmentRoleAssignment(
            department_id=department_id,
            department_name=name or department_id.replace("-", " ").title(),
            is_primary=is_primary,
            roles=(Role(role=role, permissions=frozenset(permissions)),),
        )
    return _make


@pytest.fixture
def staff_hierarchy(assignment):
    """Staff member with two departments; only dept-1 grants content rights."""
    return RoleHierarchy(
        primary_user_type=UserType.Staff,
        all_user_types={UserType.Staff},
        all_permissions={"content:courses:read", "class:view-own"},
        department_roles={
            UserType.Staff: RoleGroup(department_assignments=(
                assignment(
                    "dept-1",
                    ["content:*", "reports:department:read", "enrollments:read"],
                    name="Psychology",
                    is_primary=True,
                ),
                assignment("dept-2", ["reports:class:read"], name="Business Studies"),
            )),
        },
    )


@pytest.fixture
def store():
    return InMemoryDepartmentSelectionStore()
