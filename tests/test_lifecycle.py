import pytest

from workboard.models.application import (
    ApplicationEvent,
    ApplicationStatus,
    IllegalTransition,
    TERMINAL_STATUSES,
    apply_event,
    can_transition,
    check_transition,
    is_terminal,
    legal_targets,
)


@pytest.mark.parametrize("current, event, expected", [
    ("pending", "shortlist", ApplicationStatus.INTERVIEW_SET),
    ("pending", "reject", ApplicationStatus.FAILED_SHORTLIST),
    ("interview_set", "hire", ApplicationStatus.PASSED),
    ("interview_set", "fail", ApplicationStatus.FAILED_INTERVIEW),
])
def test_events_follow_the_funnel(current, event, expected):
    assert apply_event(current, event) == expected


def test_only_five_statuses_exist():
    assert {s.value for s in ApplicationStatus} == {
        "pending", "interview_set", "passed", "failed_shortlist", "failed_interview",
    }


@pytest.mark.parametrize("terminal", sorted(TERMINAL_STATUSES))
def test_terminal_statuses_are_absorbing(terminal):
    assert is_terminal(terminal)
    assert legal_targets(terminal) == []
    for target in ApplicationStatus:
        assert not can_transition(terminal, target)
    for event in ApplicationEvent:
        with pytest.raises(IllegalTransition):
            apply_event(terminal, event)


def test_no_backward_moves():
    assert not can_transition("interview_set", "pending")
    assert not can_transition("pending", "pending")
    with pytest.raises(IllegalTransition):
        check_transition("interview_set", "failed_shortlist")


def test_pending_cannot_skip_to_hired():
    with pytest.raises(IllegalTransition) as excinfo:
        check_transition("pending", "passed")

    detail = excinfo.value.to_dict()
    assert detail["error"] == "illegal_transition"
    assert detail["current"] == "pending"
    assert detail["target"] == "passed"


def test_event_not_offered_from_status():
    with pytest.raises(IllegalTransition) as excinfo:
        apply_event("pending", "hire")
    assert "hire" in str(excinfo.value)
    assert excinfo.value.target is None


def test_legal_targets_are_the_offered_buttons():
    assert set(legal_targets("pending")) == {ApplicationStatus.INTERVIEW_SET, ApplicationStatus.FAILED_SHORTLIST}
    assert set(legal_targets("interview_set")) == {ApplicationStatus.PASSED, ApplicationStatus.FAILED_INTERVIEW}


def test_unknown_status_is_rejected():
    with pytest.raises(ValueError):
        check_transition("pending", "hired")
