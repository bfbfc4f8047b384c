"""In-memory view state for one signed-in session.

The store is the only place the session's jobs and applications live. Readers
get tuples (snapshots); writers go through the commands below.
"""

from typing import Iterable, Optional, Set, Tuple

from workboard.models.application import ApplicationStatus, check_transition
from workboard.schemas.application import ApplicationResponse
from workboard.schemas.job import JobResponse


class Store:
    def __init__(self):
        self._jobs: Tuple[JobResponse, ...] = ()
        self._applications: Tuple[ApplicationResponse, ...] = ()
        self._saved_job_ids: Set[str] = set()

    # Snapshots

    def jobs(self) -> Tuple[JobResponse, ...]:
        return self._jobs

    def applications(self) -> Tuple[ApplicationResponse, ...]:
        return self._applications

    def get(self, application_id: str) -> Optional[ApplicationResponse]:
        for app in self._applications:
            if app.id == application_id:
                return app
        return None

    def saved_ids(self) -> frozenset:
        return frozenset(self._saved_job_ids)

    # Commands

    def insert_application(self, application: ApplicationResponse):
        """Newest first, like the server ordering."""
        self._applications = (application,) + self._applications

    def patch_application_status(self, application_id: str, status) -> ApplicationResponse:
        """Change one record's status, leaving every other field as it was.

        Raises KeyError for an unknown id and IllegalTransition for a move
        the lifecycle does not allow.
        """
        current = self.get(application_id)
        if current is None:
            raise KeyError(application_id)

        target = check_transition(current.status, status)
        patched = current.model_copy(update={"status": ApplicationStatus(target)})
        self._applications = tuple(
            patched if app.id == application_id else app for app in self._applications
        )
        return patched

    def replace_all_from_poll(self, applications: Iterable[ApplicationResponse]):
        self._applications = tuple(applications)

    def replace_jobs(self, jobs: Iterable[JobResponse]):
        self._jobs = tuple(jobs)

    def remove_job(self, job_id: str):
        self._jobs = tuple(job for job in self._jobs if job.id != job_id)

    def toggle_saved(self, job_id: str) -> bool:
        """Bookmark or un-bookmark a job; returns True when it is now saved."""
        if job_id in self._saved_job_ids:
            self._saved_job_ids.discard(job_id)
            return False
        self._saved_job_ids.add(job_id)
        return True

    def clear(self):
        self._jobs = ()
        self._applications = ()
        self._saved_job_ids.clear()
