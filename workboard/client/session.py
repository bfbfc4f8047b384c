"""A signed-in user's view of the job board.

The session owns a :class:`Store` and keeps it in step with the backend by
re-fetching everything on start and then every ``poll_interval`` seconds.
Each poll replaces the collections wholesale. Local changes (a status move,
a new application) are applied to the store as soon as the backend accepts
them; a poll that lands before the backend serves the new data can briefly
show the old values again.

Commands never raise on backend failures. They return an :class:`Outcome`
and append the message to :attr:`Session.alerts`.
"""

import asyncio
import logging
from typing import List, Optional

from pydantic import BaseModel

from workboard.client.api import BackendClient, BackendError
from workboard.client.config import ClientSettings
from workboard.client.draft import ApplicationDraft
from workboard.client.face_scan import ScanResult, run_face_scan
from workboard.client.store import Store
from workboard.models.application import ApplicationEvent, IllegalTransition, apply_event, check_transition
from workboard.models.user import CANDIDATE, EMPLOYER
from workboard.schemas.application import ApplicationResponse
from workboard.schemas.job import JobCreate, JobResponse
from workboard.schemas.user import UserProfileUpdate, UserResponse

logger = logging.getLogger(__name__)


class Outcome(BaseModel):
    ok: bool
    message: Optional[str] = None
    application: Optional[ApplicationResponse] = None
    job: Optional[JobResponse] = None
    url: Optional[str] = None


class Session:
    def __init__(self, api: BackendClient, settings: Optional[ClientSettings] = None, store: Optional[Store] = None):
        self.api = api
        self.settings = settings or api.settings
        self.store = store or Store()
        self.user: Optional[UserResponse] = None
        self.alerts: List[str] = []
        self._poller: Optional[asyncio.Task] = None

    @property
    def active(self) -> bool:
        return self.user is not None

    @property
    def role(self) -> Optional[str]:
        return self.user.role if self.user else None

    def _fail(self, message: str, **extra) -> Outcome:
        self.alerts.append(message)
        return Outcome(ok=False, message=message, **extra)

    # ===========================
    # SESSION LIFECYCLE
    # ===========================

    async def sign_in(self, email: str, password: str) -> Outcome:
        try:
            await self.api.login(email, password)
            self.user = await self.api.profile()
        except BackendError as exc:
            return self._fail(str(exc))

        await self.start()
        return Outcome(ok=True)

    async def sign_up(self, full_name: str, email: str, password: str, role: str, company_name: str = "") -> Outcome:
        try:
            await self.api.register(full_name, email, password, role, company_name)
        except BackendError as exc:
            return self._fail(str(exc))
        return await self.sign_in(email, password)

    async def start(self):
        """Initial fetch, then the recurring poll."""
        await self.refresh()
        if self._poller is None or self._poller.done():
            self._poller = asyncio.create_task(self._poll_loop())

    async def end(self):
        """Stop polling and forget the signed-in user."""
        if self._poller is not None:
            self._poller.cancel()
            try:
                await self._poller
            except asyncio.CancelledError:
                pass
            self._poller = None
        self.api.logout()
        self.user = None
        self.store.clear()

    async def _poll_loop(self):
        while True:
            await asyncio.sleep(self.settings.poll_interval)
            try:
                await self.refresh()
            except Exception:
                logger.exception("Poll failed, retrying in %ss", self.settings.poll_interval)

    # ===========================
    # RECONCILIATION
    # ===========================

    async def refresh(self):
        """Re-fetch jobs and this user's applications, replacing the store contents."""
        if not self.active:
            return

        try:
            jobs = await self.api.list_jobs()
        except BackendError as exc:
            logger.warning("Job fetch failed, keeping the previous list: %s", exc)
        else:
            if jobs:
                self.store.replace_jobs(jobs)
            else:
                logger.debug("Job fetch returned nothing, keeping the previous list")

        applications = await self._fetch_applications()
        if applications is not None:
            self.store.replace_all_from_poll(applications)

    async def _fetch_applications(self) -> Optional[List[ApplicationResponse]]:
        if self.role == CANDIDATE:
            try:
                return await self.api.my_applications()
            except BackendError as exc:
                logger.warning("Application fetch failed: %s", exc)
                return None

        try:
            return await self.api.employer_applications()
        except BackendError as exc:
            logger.warning("Joined application fetch rejected (%s), querying by job ids", exc)

        try:
            job_ids = [job.id for job in await self.api.my_jobs(include_deleted=True)]
            if not job_ids:
                return None
            return await self.api.applications_for_jobs(job_ids)
        except BackendError as exc:
            logger.warning("Application fallback fetch failed: %s", exc)
            return None

    # ===========================
    # STATUS TRANSITIONS (Employer)
    # ===========================

    async def transition(self, application_id: str, new_status) -> Outcome:
        """Move one application to ``new_status`` on the backend, then locally."""
        current = self.store.get(application_id)
        if current is None:
            return self._fail("Application not found")

        # Validate before writing anything
        try:
            target = check_transition(current.status, new_status)
        except IllegalTransition as exc:
            return self._fail(f"Failed to update status: {exc}")
        except ValueError:
            return self._fail(f"Failed to update status: unknown status {new_status!r}")

        try:
            await self.api.update_status(application_id, target.value)
        except BackendError as exc:
            return self._fail(f"Failed to update status: {exc}")

        try:
            patched = self.store.patch_application_status(application_id, target)
        except (KeyError, IllegalTransition):
            # A poll replaced the record while the write was in flight
            logger.info("Application %s changed locally during the update; next poll will settle it", application_id)
            return Outcome(ok=True, application=self.store.get(application_id))
        return Outcome(ok=True, application=patched)

    async def _apply(self, application_id: str, event: ApplicationEvent) -> Outcome:
        current = self.store.get(application_id)
        if current is None:
            return self._fail("Application not found")
        try:
            target = apply_event(current.status, event)
        except IllegalTransition as exc:
            return self._fail(f"Failed to update status: {exc}")
        return await self.transition(application_id, target)

    async def shortlist(self, application_id: str) -> Outcome:
        return await self._apply(application_id, ApplicationEvent.SHORTLIST)

    async def reject(self, application_id: str) -> Outcome:
        return await self._apply(application_id, ApplicationEvent.REJECT)

    async def hire(self, application_id: str) -> Outcome:
        return await self._apply(application_id, ApplicationEvent.HIRE)

    async def fail(self, application_id: str) -> Outcome:
        return await self._apply(application_id, ApplicationEvent.FAIL)

    # ===========================
    # CANDIDATE ACTIONS
    # ===========================

    async def submit_application(self, job: JobResponse, draft: ApplicationDraft) -> Outcome:
        """Upload each drafted document, then create the application."""
        if self.role != CANDIDATE:
            return self._fail("Only candidates can apply")

        uploaded_docs = {}
        for requirement, doc in draft.items():
            try:
                stored = await self.api.upload_document(doc.filename, doc.contents, doc.content_type)
            except BackendError as exc:
                logger.warning("Upload of %r for %r failed, leaving it out: %s", doc.filename, requirement, exc)
                continue
            uploaded_docs[requirement] = stored.path

        try:
            application = await self.api.submit_application(job.id, uploaded_docs, self.user.full_name)
        except BackendError as exc:
            return self._fail(f"Failed to submit application: {exc}")

        self.store.insert_application(application)
        draft.clear()
        return Outcome(ok=True, application=application)

    async def face_scan(self, target_view: str, camera_available: bool = True) -> ScanResult:
        result = await run_face_scan(target_view, self.active, self.settings, camera_available)
        if result.message:
            self.alerts.append(result.message)
        return result

    async def verify_identity(self, image_base64: str) -> Outcome:
        """Match a captured photo against the signed-in user's name."""
        if not self.active:
            return self._fail("Please Sign In to continue.")
        try:
            result = await self.api.verify_identity(image_base64, self.user.full_name)
        except BackendError as exc:
            return self._fail(f"Identity check failed: {exc}")
        if not result.is_match:
            return self._fail(result.reason)
        return Outcome(ok=True, message=result.reason)

    def toggle_saved(self, job_id: str) -> bool:
        return self.store.toggle_saved(job_id)

    # ===========================
    # EMPLOYER ACTIONS
    # ===========================

    async def post_job(self, job: JobCreate) -> Outcome:
        """Record the company on the profile, then publish the job.

        The two writes are independent: a failed profile write is logged and
        the job is still posted.
        """
        if self.role != EMPLOYER:
            return self._fail("Only employers can post jobs")

        company = job.company or self.user.company_name
        if company and company != self.user.company_name:
            try:
                self.user = await self.api.update_profile(UserProfileUpdate(company_name=company))
            except BackendError as exc:
                logger.warning("Profile update warning: %s", exc)

        try:
            posted = await self.api.post_job(job.model_copy(update={"company": company or None}))
        except BackendError as exc:
            return self._fail(f"Failed to post job. {exc}")

        self.store.replace_jobs((posted,) + self.store.jobs())
        return Outcome(ok=True, job=posted)

    async def delete_job(self, job_id: str) -> Outcome:
        try:
            await self.api.delete_job(job_id)
        except BackendError as exc:
            return self._fail(f"Error deleting job: {exc}")

        self.store.remove_job(job_id)
        await self.refresh()
        return Outcome(ok=True)

    async def document_link(self, path: str) -> Outcome:
        try:
            signed = await self.api.signed_url(path)
        except BackendError as exc:
            return self._fail(f"Could not open document: {exc}")
        return Outcome(ok=True, url=signed.signed_url)
