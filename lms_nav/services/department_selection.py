# lms_nav/services/department_selection.py

from datetime import datetime, timezone
from typing import Dict, Optional, Protocol

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import Session

from lms_nav.core.config import settings
from lms_nav.models.department_selection import DepartmentSelection
from lms_nav.models.role_hierarchy import RoleHierarchy


class DepartmentSelectionStore(Protocol):
    def get(self, user_id: str) -> Optional[str]: ...

    def set(self, user_id: str, department_id: str) -> None: ...


# ============================================================================
# IN-MEMORY STORE
# ============================================================================
class InMemoryDepartmentSelectionStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._selections: Dict[str, str] = dict(initial or {})

    def get(self, user_id: str) -> Optional[str]:
        return self._selections.get(user_id)

    def set(self, user_id: str, department_id: str) -> None:
        self._selections[user_id] = department_id

    def as_dict(self) -> Dict[str, str]:
        return dict(self._selections)


# ============================================================================
# SQL STORE (department_selections table)
# ============================================================================
class SqlDepartmentSelectionStore:
    def __init__(self, bind: Optional[Engine] = None):
        if bind is None:
            from lms_nav.core.database import engine as bind
        self.engine = bind

    def get(self, user_id: str) -> Optional[str]:
        with Session(self.engine) as session:
            row = session.get(DepartmentSelection, user_id)
            return row.department_id if row else None

    def set(self, user_id: str, department_id: str) -> None:
        with Session(self.engine) as session:
            row = session.get(DepartmentSelection, user_id)
            if row is None:
                row = DepartmentSelection(user_id=user_id, department_id=department_id)
            else:
                row.department_id = department_id
                row.updated_at = datetime.now(timezone.utc)

            session.add(row)
            session.commit()


def create_selection_store(kind: Optional[str] = None) -> DepartmentSelectionStore:
    kind = (kind or settings.SELECTION_STORE).strip().lower()

    if kind == "memory":
        return InMemoryDepartmentSelectionStore()

    if kind == "sql":
        from lms_nav.core.database import engine, init_db

        init_db(engine)
        return SqlDepartmentSelectionStore(engine)

    raise ValueError(f"Unknown selection store '{kind}'")


# ============================================================================
# RESTORE ON LOAD
# ============================================================================
def restore_last_department(
    hierarchy: RoleHierarchy,
    store: DepartmentSelectionStore,
    user_id: str,
    active_department_id: Optional[str],
) -> Optional[str]:
    """
    Department to reselect when a sidebar starts, or None.

    Only applies when nothing is selected yet and the remembered department
    is still one of the user's current assignments. The caller restores it
    as a local selection; no switch request is sent.
    """
    if active_department_id is not None:
        return None

    if not hierarchy.has_any_department():
        return None

    last_department_id = store.get(user_id)
    if not last_department_id:
        return None

    if not hierarchy.has_department(last_department_id):
        logger.info(
            f"Ignoring remembered department {last_department_id} for user {user_id}: "
            "no longer assigned"
        )
        return None

    return last_department_id
