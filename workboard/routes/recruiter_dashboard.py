# ========================================
# workboard/routes/recruiter_dashboard.py - employer's own postings
# ========================================

from fastapi import APIRouter, Depends, Query
from typing import List

from workboard.database import get_db
from workboard.models.application import ApplicationStatus
from workboard.models.user import EMPLOYER
from workboard.schemas.job import JobListItem
from workboard.utils.auth import get_current_user, require_role

router = APIRouter(prefix="/recruiter", tags=["Employer Dashboard"])


# 1. Get My Posted Jobs with applicant counts
@router.get("/my-jobs", response_model=List[JobListItem])
async def get_my_jobs(
    include_deleted: bool = Query(False, description="Also list removed postings"),
    current_user: dict = Depends(get_current_user)
):
    """All jobs posted by the current employer, with total and new (pending) applicants."""

    require_role(current_user, EMPLOYER, "Only employers can access this endpoint")

    db = get_db()

    query = {"employer_id": str(current_user["_id"])}
    if not include_deleted:
        query["deleted_at"] = None

    jobs = await db.jobs.find(query).sort("created_at", -1).to_list(500)

    result = []
    for job in jobs:
        total_apps = await db.applications.count_documents({"job_id": job["_id"]})
        pending_apps = await db.applications.count_documents({
            "job_id": job["_id"],
            "status": ApplicationStatus.PENDING.value
        })

        result.append({
            "id": str(job["_id"]),
            "title": job.get("title", ""),
            "company": job.get("company", ""),
            "workplace": job.get("workplace", ""),
            "posted_at": job["posted_at"],
            "application_count": total_apps,
            "new_applications": pending_apps,
        })

    return result
