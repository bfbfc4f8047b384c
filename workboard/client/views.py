"""Read-only views derived from store snapshots. Nothing here is cached."""

from typing import Iterable, List, NamedTuple, Optional

from workboard.models.application import ApplicationStatus
from workboard.schemas.application import ApplicationResponse
from workboard.schemas.job import JobResponse

ROADMAP_LABELS = ("Review", "Interview", "Hired")


class RoadmapStep(NamedTuple):
    label: str
    completed: bool
    failed: bool
    trophy: bool


def roadmap(status) -> List[RoadmapStep]:
    """Milestones Review -> Interview -> Hired as seen from ``status``.

    A failed step is never also shown as completed.
    """
    status = ApplicationStatus(status)
    failed_at = {
        ApplicationStatus.FAILED_SHORTLIST: 0,
        ApplicationStatus.FAILED_INTERVIEW: 1,
    }.get(status)
    completed_through = {
        ApplicationStatus.PENDING: 0,
        ApplicationStatus.INTERVIEW_SET: 1,
        ApplicationStatus.PASSED: 2,
    }.get(status, -1)

    steps = []
    for idx, label in enumerate(ROADMAP_LABELS):
        failed = idx == failed_at
        steps.append(RoadmapStep(
            label=label,
            completed=not failed and idx <= completed_through,
            failed=failed,
            trophy=status == ApplicationStatus.PASSED and idx == len(ROADMAP_LABELS) - 1,
        ))
    return steps


def is_failed(status) -> bool:
    return ApplicationStatus(status).value.startswith("failed")


def applications_for_job(applications: Iterable[ApplicationResponse], job_id: str) -> List[ApplicationResponse]:
    return [app for app in applications if app.job_id == job_id]


def applicant_total(applications: Iterable[ApplicationResponse], job_id: str) -> int:
    return len(applications_for_job(applications, job_id))


def pending_count(applications: Iterable[ApplicationResponse], job_id: str) -> int:
    """Applicants on ``job_id`` still waiting for review ("new applicants")."""
    return sum(1 for app in applications_for_job(applications, job_id) if app.status == ApplicationStatus.PENDING)


def candidate_applications(applications: Iterable[ApplicationResponse], candidate_id: str) -> List[ApplicationResponse]:
    return [app for app in applications if app.candidate_id == candidate_id]


def employer_jobs(jobs: Iterable[JobResponse], employer_id: str) -> List[JobResponse]:
    return [job for job in jobs if job.employer_id == employer_id]


def filter_jobs(
    jobs: Iterable[JobResponse],
    filter_type: str = "All",
    query: str = "",
    saved_ids: Optional[Iterable[str]] = None,
) -> List[JobResponse]:
    """Feed filtering: ``All``, ``Saved``, or a job type, plus free-text search."""
    saved = set(saved_ids or ())
    needle = query.strip().lower()

    result = []
    for job in jobs:
        if filter_type == "Saved" and job.id not in saved:
            continue
        if filter_type not in ("All", "Saved") and job.type != filter_type:
            continue
        if needle and not any(needle in field.lower() for field in (job.title, job.company, job.workplace)):
            continue
        result.append(job)
    return result
