# ========================================
# workboard/routes/job.py - job postings
# ========================================

import logging

from fastapi import APIRouter, Depends, HTTPException, status, Query
from bson import ObjectId
from datetime import datetime, timedelta
from typing import List, Optional

from workboard.database import get_db
from workboard.models.job import DEFAULT_LISTING_DAYS
from workboard.models.user import CANDIDATE, EMPLOYER
from workboard.schemas.job import JobCreate, JobResponse
from workboard.schemas.application import ApplicationCheck
from workboard.utils.auth import get_current_user, require_role

logger = logging.getLogger(__name__)

router = APIRouter()


def job_to_response(job: dict) -> dict:
    job["id"] = str(job.pop("_id"))
    return job


async def find_job(db, job_id: str, include_deleted: bool = False) -> dict:
    if not ObjectId.is_valid(job_id):
        raise HTTPException(status_code=400, detail="Invalid job ID")

    query = {"_id": ObjectId(job_id)}
    if not include_deleted:
        query["deleted_at"] = None

    job = await db.jobs.find_one(query)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job

# ===========================
# PUBLIC ENDPOINTS
# ===========================

# 1. LIST JOBS (Public)
@router.get("/jobs", response_model=List[JobResponse])
async def get_all_jobs(
    employer_id: Optional[str] = Query(None, description="Only postings by this employer"),
    limit: int = Query(100, le=500, description="Maximum number of results")
):
    """Get live (not soft-deleted) jobs, newest first."""

    db = get_db()

    query = {"deleted_at": None}
    if employer_id:
        query["employer_id"] = employer_id

    jobs = await db.jobs.find(query).sort("created_at", -1).limit(limit).to_list(limit)

    return [job_to_response(job) for job in jobs]


# 2. GET SINGLE JOB (Public)
@router.get("/jobs/{job_id}", response_model=JobResponse)
async def get_job_details(job_id: str):
    """Get a single live job posting."""

    db = get_db()
    job = await find_job(db, job_id)
    return job_to_response(job)


# 3. CHECK IF CANDIDATE HAS APPLIED
@router.get("/jobs/{job_id}/check-application", response_model=ApplicationCheck)
async def check_if_applied(
    job_id: str,
    current_user: dict = Depends(get_current_user)
):
    """Check whether the current candidate already has an application on this job."""

    require_role(current_user, CANDIDATE, "Only candidates have applications")

    db = get_db()
    job = await find_job(db, job_id, include_deleted=True)

    application = await db.applications.find_one({
        "job_id": job["_id"],
        "candidate_id": str(current_user["_id"])
    })

    return {
        "has_applied": application is not None,
        "application_id": str(application["_id"]) if application else None,
        "status": application.get("status") if application else None
    }

# ===========================
# EMPLOYER ENDPOINTS
# ===========================

# 4. POST A JOB (Employer)
@router.post("/jobs", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(job: JobCreate, current_user: dict = Depends(get_current_user)):
    """Publish a new job posting. Only employers can post jobs."""

    require_role(current_user, EMPLOYER, "Only employers can post jobs")

    db = get_db()
    now = datetime.utcnow()

    new_job = job.model_dump()
    new_job["employer_id"] = str(current_user["_id"])
    new_job["company"] = job.company or current_user.get("company_name") or "Hiring Company"
    new_job["end_date"] = (job.end_date or (now + timedelta(days=DEFAULT_LISTING_DAYS)).date()).isoformat()
    new_job["contact_email"] = current_user["email"]
    new_job["posted_at"] = now
    new_job["created_at"] = now
    new_job["deleted_at"] = None

    result = await db.jobs.insert_one(new_job)
    new_job["_id"] = result.inserted_id
    logger.info("Employer %s posted job %s", new_job["employer_id"], result.inserted_id)

    return job_to_response(new_job)


# 5. REMOVE JOB (Employer) - soft delete
@router.delete("/jobs/{job_id}")
async def delete_job(
    job_id: str,
    current_user: dict = Depends(get_current_user)
):
    """Hide a job posting from listings. Applications and history are kept."""

    require_role(current_user, EMPLOYER, "Only employers can remove jobs")

    db = get_db()
    job = await find_job(db, job_id)

    if job.get("employer_id") != str(current_user["_id"]):
        raise HTTPException(
            status_code=403,
            detail="You can only remove your own job postings"
        )

    deleted_at = datetime.utcnow()
    await db.jobs.update_one(
        {"_id": job["_id"]},
        {"$set": {"deleted_at": deleted_at}}
    )

    return {
        "message": "Job removed successfully",
        "job_id": job_id,
        "deleted_at": deleted_at
    }
