"""Application status lifecycle.

An application starts as ``pending`` and moves forward through the hiring
funnel on employer actions only:

    pending --shortlist--> interview_set --hire--> passed
       |                        |
       +--reject--> failed_shortlist
                                +--fail--> failed_interview

``passed``, ``failed_shortlist`` and ``failed_interview`` are terminal.
"""

from enum import Enum
from typing import Dict, List, Tuple


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    INTERVIEW_SET = "interview_set"
    PASSED = "passed"
    FAILED_SHORTLIST = "failed_shortlist"
    FAILED_INTERVIEW = "failed_interview"


class ApplicationEvent(str, Enum):
    SHORTLIST = "shortlist"
    REJECT = "reject"
    HIRE = "hire"
    FAIL = "fail"


INITIAL_STATUS = ApplicationStatus.PENDING

TERMINAL_STATUSES = frozenset({
    ApplicationStatus.PASSED,
    ApplicationStatus.FAILED_SHORTLIST,
    ApplicationStatus.FAILED_INTERVIEW,
})

# (from, event) -> to
TRANSITIONS: Dict[Tuple[ApplicationStatus, ApplicationEvent], ApplicationStatus] = {
    (ApplicationStatus.PENDING, ApplicationEvent.SHORTLIST): ApplicationStatus.INTERVIEW_SET,
    (ApplicationStatus.PENDING, ApplicationEvent.REJECT): ApplicationStatus.FAILED_SHORTLIST,
    (ApplicationStatus.INTERVIEW_SET, ApplicationEvent.HIRE): ApplicationStatus.PASSED,
    (ApplicationStatus.INTERVIEW_SET, ApplicationEvent.FAIL): ApplicationStatus.FAILED_INTERVIEW,
}


class IllegalTransition(Exception):
    """Raised when a status change is not in the transition table."""

    def __init__(self, current, target, event=None):
        self.current = ApplicationStatus(current)
        self.target = ApplicationStatus(target) if target is not None else None
        self.event = event
        if event is not None and target is None:
            message = f"Cannot {event} an application that is {self.current.value}"
        else:
            message = f"Cannot move application from {self.current.value} to {self.target.value}"
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": "illegal_transition",
            "current": self.current.value,
            "target": self.target.value if self.target else None,
            "message": str(self),
        }


def is_terminal(status) -> bool:
    return ApplicationStatus(status) in TERMINAL_STATUSES


def legal_targets(status) -> List[ApplicationStatus]:
    """Statuses reachable in one step, i.e. the actions a UI may offer."""
    current = ApplicationStatus(status)
    return [to for (frm, _), to in TRANSITIONS.items() if frm == current]


def can_transition(current, target) -> bool:
    return ApplicationStatus(target) in legal_targets(current)


def check_transition(current, target) -> ApplicationStatus:
    if not can_transition(current, target):
        raise IllegalTransition(current, target)
    return ApplicationStatus(target)


def apply_event(current, event) -> ApplicationStatus:
    key = (ApplicationStatus(current), ApplicationEvent(event))
    if key not in TRANSITIONS:
        raise IllegalTransition(current, None, event=ApplicationEvent(event).value)
    return TRANSITIONS[key]
