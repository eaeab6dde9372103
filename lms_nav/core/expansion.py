# lms_nav/core/expansion.py

from typing import Dict, Iterable, List, Optional

from lms_nav.core.nav_config import EXPANSION_GROUPS, SECTION_DEPARTMENT
from lms_nav.core.navigation import sections_for_dashboard
from lms_nav.models.enums import DashboardArea, ExpansionMode
from lms_nav.models.navigation import ExpansionGroup, NavSection
from lms_nav.models.switch_state import Switching


class SectionExpansionState:
    """
    Which collapsible sidebar sections are open, for one sidebar instance.

    Sections inside an accordion group exclude each other; every other
    section toggles on its own. Non-collapsible sections are always open.
    While a department switch is in flight the department section reads as
    open, without touching the user's stored choice.
    """

    def __init__(
        self,
        sections: Iterable[NavSection],
        groups: Iterable[ExpansionGroup] = (),
        department_section_id: str = SECTION_DEPARTMENT,
    ):
        sections = list(sections)
        self.department_section_id = department_section_id
        self._order = [s.id for s in sections]
        self._collapsible = {s.id for s in sections if s.collapsible}
        self._group_of: Dict[str, ExpansionGroup] = {}
        for group in groups:
            for section_id in group.section_ids:
                self._group_of[section_id] = group

        self._expanded = set()
        for section in sections:
            if not (section.collapsible and section.default_expanded):
                continue
            # An accordion starts with at most its first default-open section.
            if self._open_siblings(section.id):
                continue
            self._expanded.add(section.id)

    @classmethod
    def for_dashboard(cls, dashboard: DashboardArea) -> "SectionExpansionState":
        dashboard = DashboardArea(dashboard)
        return cls(sections_for_dashboard(dashboard), EXPANSION_GROUPS.get(dashboard, ()))

    # ------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------
    def is_expanded(self, section_id: str, switch_state=None) -> bool:
        if section_id == self.department_section_id and section_id not in self._order:
            # Dashboards without a department picker never show it open.
            return False
        self._check_known(section_id)
        if section_id not in self._collapsible:
            return True
        if section_id == self.department_section_id and isinstance(switch_state, Switching):
            return True
        return section_id in self._expanded

    def expanded_sections(self, switch_state=None) -> List[str]:
        return [sid for sid in self._order if self.is_expanded(sid, switch_state)]

    def mode_for(self, section_id: str) -> ExpansionMode:
        group = self._group_of.get(section_id)
        return group.mode if group else ExpansionMode.Independent

    # ------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------
    def expand(self, section_id: str) -> None:
        self._check_known(section_id)
        if section_id not in self._collapsible:
            return
        if self.mode_for(section_id) == ExpansionMode.Accordion:
            self._expanded.difference_update(self._group_of[section_id].section_ids)
        self._expanded.add(section_id)

    def collapse(self, section_id: str) -> None:
        self._check_known(section_id)
        if section_id in self._collapsible:
            self._expanded.discard(section_id)

    def toggle(self, section_id: str) -> bool:
        """Flip the stored choice; returns the new stored value."""
        if section_id in self._expanded:
            self.collapse(section_id)
        else:
            self.expand(section_id)
        return section_id in self._expanded

    def _open_siblings(self, section_id: str) -> Optional[List[str]]:
        group = self._group_of.get(section_id)
        if group is None or group.mode != ExpansionMode.Accordion:
            return None
        return [sid for sid in group.section_ids if sid in self._expanded and sid != section_id]

    def _check_known(self, section_id: str) -> None:
        if section_id not in self._order:
            raise ValueError(f"Unknown sidebar section '{section_id}'")
