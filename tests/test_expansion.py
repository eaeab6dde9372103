import pytest

from lms_nav.core.expansion import SectionExpansionState
from lms_nav.models.enums import DashboardArea, ExpansionMode
from lms_nav.models.switch_state import SwitchError, SwitchIdle, Switching


def test_defaults_on_staff_dashboard():
    state = SectionExpansionState.for_dashboard(DashboardArea.Staff)
    assert state.expanded_sections() == ["overview", "primary", "footer"]
    assert state.is_expanded("department") is False


def test_non_collapsible_sections_stay_open():
    state = SectionExpansionState.for_dashboard(DashboardArea.Staff)
    state.collapse("overview")
    state.toggle("footer")
    assert state.is_expanded("overview")
    assert state.is_expanded("footer")


def test_independent_sections_toggle_on_their_own():
    state = SectionExpansionState.for_dashboard(DashboardArea.Staff)
    assert state.mode_for("primary") == ExpansionMode.Independent

    state.expand("secondary")
    assert state.is_expanded("primary") and state.is_expanded("secondary")

    assert state.toggle("primary") is False
    assert state.is_expanded("secondary")


def test_accordion_closes_siblings():
    state = SectionExpansionState.for_dashboard(DashboardArea.Staff)
    assert state.mode_for("department") == ExpansionMode.Accordion

    state.expand("insights")
    state.expand("department")
    assert state.is_expanded("department")
    assert not state.is_expanded("insights")
    # Other groups are untouched
    assert state.is_expanded("primary")

    state.toggle("insights")
    assert state.is_expanded("insights")
    assert not state.is_expanded("department")


def test_accordion_starts_with_one_open_section():
    # Admin: primary and insights both default open, same accordion group
    state = SectionExpansionState.for_dashboard(DashboardArea.Admin)
    assert state.is_expanded("primary")
    assert not state.is_expanded("insights")


def test_department_section_forced_open_while_switching():
    state = SectionExpansionState.for_dashboard(DashboardArea.Staff)
    state.collapse("department")

    switching = Switching(target_id="dept-1")
    assert state.is_expanded("department", switching) is True
    assert "department" in state.expanded_sections(switching)

    # Collapsing during the switch is remembered but not shown
    state.collapse("department")
    assert state.is_expanded("department", switching) is True

    # Back to the user's choice once the switch settles
    assert state.is_expanded("department", SwitchIdle()) is False
    assert state.is_expanded("department", SwitchError(target_id="dept-1", message="x")) is False


def test_user_choice_survives_forced_open():
    state = SectionExpansionState.for_dashboard(DashboardArea.Learner)
    state.expand("department")
    assert state.is_expanded("department", Switching(target_id="dept-2"))
    assert state.is_expanded("department", SwitchIdle())


def test_unknown_section_is_rejected():
    state = SectionExpansionState.for_dashboard(DashboardArea.Admin)
    with pytest.raises(ValueError):
        state.is_expanded("nope")
    with pytest.raises(ValueError):
        state.expand("nope")


def test_missing_department_section_reads_closed():
    state = SectionExpansionState.for_dashboard(DashboardArea.Admin)
    assert state.is_expanded("department") is False
    assert state.is_expanded("department", Switching(target_id="dept-1")) is False
    assert "department" not in state.expanded_sections(Switching(target_id="dept-1"))
