"""Thin async wrapper over the Workboard HTTP API."""

import logging
from typing import Dict, List, Optional

import httpx
from pydantic import ValidationError

from workboard.client.config import ClientSettings
from workboard.schemas.application import ApplicationResponse, StatusUpdateResponse
from workboard.schemas.document import DocumentUploadResponse, SignedUrlResponse
from workboard.schemas.identity import IdentityCheckResult
from workboard.schemas.job import JobCreate, JobListItem, JobResponse
from workboard.schemas.user import UserProfileUpdate, UserResponse

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """A backend call failed. ``status_code`` is None when the request never got a response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def error_message(response: httpx.Response) -> str:
    """Readable message from an error response body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"

    detail = body.get("detail", body) if isinstance(body, dict) else body
    if isinstance(detail, str):
        return detail
    if isinstance(detail, dict) and detail.get("message"):
        return detail["message"]
    if isinstance(detail, list):
        parts = [item.get("msg", str(item)) if isinstance(item, dict) else str(item) for item in detail]
        return " ".join(parts)
    return str(detail)


def parse(model, data):
    """Build ``model`` from a response body, as a BackendError when the shape is wrong."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise BackendError(f"Unexpected response: {exc.error_count()} invalid field(s) for {model.__name__}") from exc


def parse_list(model, data) -> list:
    if not isinstance(data, list):
        raise BackendError(f"Unexpected response: expected a list of {model.__name__}")
    return [parse(model, item) for item in data]


class BackendClient:
    def __init__(self, settings: ClientSettings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.token: Optional[str] = None
        self._http = httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def aclose(self):
        await self._http.aclose()

    async def _request(self, method: str, url: str, **kwargs):
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            response = await self._http.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            raise BackendError(f"Network error: {exc}") from exc

        if response.status_code >= 400:
            raise BackendError(error_message(response), response.status_code)
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("%s %s returned a body that is not JSON", method, url)
            raise BackendError(f"Unreadable response from {url}", response.status_code) from exc

    # Accounts

    async def register(self, full_name: str, email: str, password: str, role: str, company_name: str = "") -> UserResponse:
        data = await self._request("POST", "/users/register", json={
            "full_name": full_name,
            "email": email,
            "password": password,
            "role": role,
            "company_name": company_name,
        })
        return parse(UserResponse, data)

    async def login(self, email: str, password: str) -> str:
        data = await self._request("POST", "/users/login", json={"email": email, "password": password})
        if not isinstance(data, dict) or "access_token" not in data:
            raise BackendError("Unexpected response: no access token")
        self.token = data["access_token"]
        return self.token

    def logout(self):
        self.token = None

    async def profile(self) -> UserResponse:
        return parse(UserResponse, await self._request("GET", "/users/profile"))

    async def update_profile(self, update: UserProfileUpdate) -> UserResponse:
        data = await self._request("PUT", "/users/profile", json=update.model_dump(exclude_unset=True))
        return parse(UserResponse, data)

    # Jobs

    async def list_jobs(self) -> List[JobResponse]:
        return parse_list(JobResponse, await self._request("GET", "/jobs"))

    async def post_job(self, job: JobCreate) -> JobResponse:
        return parse(JobResponse, await self._request("POST", "/jobs", json=job.model_dump(mode="json")))

    async def delete_job(self, job_id: str) -> dict:
        return await self._request("DELETE", f"/jobs/{job_id}")

    async def my_jobs(self, include_deleted: bool = False) -> List[JobListItem]:
        params = {"include_deleted": "true" if include_deleted else "false"}
        return parse_list(JobListItem, await self._request("GET", "/recruiter/my-jobs", params=params))

    # Applications

    async def my_applications(self) -> List[ApplicationResponse]:
        return parse_list(ApplicationResponse, await self._request("GET", "/my-applications"))

    async def employer_applications(self) -> List[ApplicationResponse]:
        return parse_list(ApplicationResponse, await self._request("GET", "/recruiter/applications"))

    async def applications_for_jobs(self, job_ids: List[str]) -> List[ApplicationResponse]:
        data = await self._request("GET", "/applications", params=[("job_id", jid) for jid in job_ids])
        return parse_list(ApplicationResponse, data)

    async def submit_application(self, job_id: str, uploaded_docs: Dict[str, str], candidate_name: Optional[str]) -> ApplicationResponse:
        data = await self._request("POST", "/applications", json={
            "job_id": job_id,
            "uploaded_docs": uploaded_docs,
            "candidate_name": candidate_name,
        })
        return parse(ApplicationResponse, data)

    async def update_status(self, application_id: str, status: str) -> StatusUpdateResponse:
        data = await self._request("PUT", f"/applications/{application_id}/status", json={"status": status})
        return parse(StatusUpdateResponse, data)

    # Documents and identity

    async def upload_document(self, filename: str, contents: bytes, content_type: str) -> DocumentUploadResponse:
        data = await self._request("POST", "/documents", files={"file": (filename, contents, content_type)})
        return parse(DocumentUploadResponse, data)

    async def signed_url(self, path: str) -> SignedUrlResponse:
        return parse(SignedUrlResponse, await self._request("POST", "/documents/signed-url", json={"path": path}))

    async def verify_identity(self, image_base64: str, name: str) -> IdentityCheckResult:
        data = await self._request("POST", "/verify-identity", json={"image_base64": image_base64, "name": name})
        return parse(IdentityCheckResult, data)
