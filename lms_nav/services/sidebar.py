# lms_nav/services/sidebar.py

from typing import Callable, List, Optional

from loguru import logger

from lms_nav.core.expansion import SectionExpansionState
from lms_nav.core.navigation import default_dashboard, resolve_navigation
from lms_nav.core.permissions import PermissionEvaluator
from lms_nav.models.enums import DashboardArea
from lms_nav.models.role_hierarchy import RoleHierarchy, ensure_valid
from lms_nav.models.switch_state import DepartmentSwitchState, SwitchResult
from lms_nav.schemas.navigation import NavTree
from lms_nav.services.department_selection import (
    DepartmentSelectionStore,
    restore_last_department,
)
from lms_nav.services.department_switch import (
    DepartmentSwitchController,
    SwitchCollaborator,
)

TreeListener = Callable[[NavTree], None]


class SidebarSession:
    """
    Everything one rendered sidebar needs, passed around explicitly.

    Holds the current role hierarchy snapshot and dashboard area, owns the
    switch controller and the section expansion state, and hands a freshly
    resolved NavTree to subscribers whenever any input changes.
    """

    def __init__(
        self,
        hierarchy: RoleHierarchy,
        user_id: str,
        switch_department: SwitchCollaborator,
        store: DepartmentSelectionStore,
        dashboard: Optional[DashboardArea] = None,
    ):
        self._hierarchy = ensure_valid(hierarchy)
        self.user_id = user_id
        self.store = store
        self._dashboard = (
            DashboardArea(dashboard) if dashboard else default_dashboard(hierarchy.all_user_types)
        )
        self.expansion = SectionExpansionState.for_dashboard(self._dashboard)
        self._listeners: List[TreeListener] = []
        self.controller = DepartmentSwitchController(switch_department, store, user_id)
        self.controller.subscribe(lambda _controller: self._publish())

    # ------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------
    def initialize(self) -> Optional[str]:
        """Reselect the user's remembered department, if it is still valid."""
        restored = restore_last_department(
            self._hierarchy, self.store, self.user_id, self.controller.active_department_id
        )
        if restored:
            self.controller.restore(restored)
        return restored

    def close(self) -> None:
        self._listeners.clear()
        self.controller.close()

    def subscribe(self, listener: TreeListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------
    @property
    def hierarchy(self) -> RoleHierarchy:
        return self._hierarchy

    @property
    def dashboard(self) -> DashboardArea:
        return self._dashboard

    @property
    def active_department_id(self) -> Optional[str]:
        return self.controller.active_department_id

    @property
    def switch_state(self) -> DepartmentSwitchState:
        return self.controller.state

    @property
    def evaluator(self) -> PermissionEvaluator:
        return PermissionEvaluator(self._hierarchy)

    def set_dashboard(self, dashboard: DashboardArea) -> None:
        dashboard = DashboardArea(dashboard)
        if dashboard == self._dashboard:
            return
        self._dashboard = dashboard
        self.expansion = SectionExpansionState.for_dashboard(dashboard)
        self._publish()

    def update_hierarchy(self, hierarchy: RoleHierarchy) -> None:
        """Swap in a refreshed snapshot from the auth collaborator."""
        self._hierarchy = ensure_valid(hierarchy)

        active = self.controller.active_department_id
        if active is not None and not hierarchy.has_department(active) and not self.controller.is_switching:
            logger.info(f"Department {active} no longer assigned to user {self.user_id}; clearing")
            self.controller.clear()  # publishes
            return

        self._publish()

    async def select_department(self, department_id: Optional[str]) -> SwitchResult:
        return await self.controller.request_switch(department_id)

    # ------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------
    def navigation(self) -> NavTree:
        return resolve_navigation(
            self._hierarchy,
            self._dashboard,
            self.controller.active_department_id,
            self.evaluator,
        )

    def is_section_expanded(self, section_id: str) -> bool:
        return self.expansion.is_expanded(section_id, self.controller.state)

    def expanded_sections(self) -> List[str]:
        return self.expansion.expanded_sections(self.controller.state)

    def toggle_section(self, section_id: str) -> bool:
        self.expansion.toggle(section_id)
        return self.is_section_expanded(section_id)

    def _publish(self) -> None:
        if not self._listeners:
            return
        tree = self.navigation()
        for listener in list(self._listeners):
            listener(tree)
