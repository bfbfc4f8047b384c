# ========================================
# workboard/routes/application.py - applications and the status lifecycle
# ========================================

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from bson import ObjectId
from datetime import datetime
from typing import List

from workboard.database import get_db
from workboard.models.application import (
    ApplicationEvent,
    ApplicationStatus,
    IllegalTransition,
    INITIAL_STATUS,
    apply_event,
    check_transition,
)
from workboard.models.user import CANDIDATE, EMPLOYER
from workboard.routes.job import find_job
from workboard.schemas.application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationStatusUpdate,
    StatusUpdateResponse,
)
from workboard.utils.auth import get_current_user, require_role

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Applications"])


def application_to_response(app: dict) -> dict:
    return {
        "id": str(app["_id"]),
        "job_id": str(app["job_id"]),
        "candidate_id": app["candidate_id"],
        "status": app["status"],
        "uploaded_docs": app.get("uploaded_docs") or {},
        "submitted_at": app["submitted_at"],
        "verified": app.get("verified", False),
        "candidate_name": app.get("candidate_name"),
    }


async def find_application(db, application_id: str) -> dict:
    if not ObjectId.is_valid(application_id):
        raise HTTPException(status_code=400, detail="Invalid application ID")

    application = await db.applications.find_one({"_id": ObjectId(application_id)})
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    return application


async def find_owned_job(db, job_id, current_user: dict) -> dict:
    """The job behind an application, which must belong to the current employer."""
    job = await db.jobs.find_one({"_id": ObjectId(job_id)})
    if not job or job.get("employer_id") != str(current_user["_id"]):
        raise HTTPException(status_code=403, detail="Not authorized for this job's applications")
    return job

# ===========================
# CANDIDATE ENDPOINTS
# ===========================

# 1. SUBMIT APPLICATION (Candidate)
@router.post("/applications", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def submit_application(application: ApplicationCreate, current_user: dict = Depends(get_current_user)):
    """Submit an application with already-uploaded documents. Only candidates can apply."""

    require_role(current_user, CANDIDATE, "Only candidates can apply")

    db = get_db()
    job = await find_job(db, application.job_id)

    # Identity was checked by the face scan before this point
    application_data = {
        "job_id": job["_id"],
        "candidate_id": str(current_user["_id"]),
        "candidate_name": application.candidate_name or current_user.get("full_name"),
        "status": INITIAL_STATUS.value,
        "uploaded_docs": application.uploaded_docs,
        "verified": True,
        "submitted_at": datetime.utcnow(),
    }

    result = await db.applications.insert_one(application_data)
    application_data["_id"] = result.inserted_id
    logger.info("Candidate %s applied to job %s", application_data["candidate_id"], job["_id"])

    return application_to_response(application_data)


# 2. GET MY APPLICATIONS (Candidate)
@router.get("/my-applications", response_model=List[ApplicationResponse])
async def get_my_applications(current_user: dict = Depends(get_current_user)):
    """All applications submitted by the current candidate, newest first."""

    require_role(current_user, CANDIDATE, "Only candidates can view their applications")

    db = get_db()
    applications = await db.applications.find(
        {"candidate_id": str(current_user["_id"])}
    ).sort("submitted_at", -1).to_list(500)

    return [application_to_response(app) for app in applications]


# 3. GET ONE APPLICATION (Candidate owner or Employer owning the job)
@router.get("/applications/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: str,
    current_user: dict = Depends(get_current_user)
):
    db = get_db()
    application = await find_application(db, application_id)

    if current_user["role"] == CANDIDATE:
        if application["candidate_id"] != str(current_user["_id"]):
            raise HTTPException(status_code=403, detail="Not authorized")
    else:
        await find_owned_job(db, application["job_id"], current_user)

    return application_to_response(application)

# ===========================
# EMPLOYER ENDPOINTS
# ===========================

# 4. APPLICATIONS ON MY JOBS, JOINED THROUGH THE JOB (Employer)
@router.get("/recruiter/applications", response_model=List[ApplicationResponse])
async def get_employer_applications(current_user: dict = Depends(get_current_user)):
    """Applications whose job belongs to the current employer, resolved with a join."""

    require_role(current_user, EMPLOYER, "Only employers can access this")

    db = get_db()
    pipeline = [
        {"$lookup": {
            "from": "jobs",
            "localField": "job_id",
            "foreignField": "_id",
            "as": "job",
        }},
        {"$unwind": "$job"},
        {"$match": {"job.employer_id": str(current_user["_id"])}},
        {"$sort": {"submitted_at": -1}},
    ]
    applications = await db.applications.aggregate(pipeline).to_list(1000)

    return [application_to_response(app) for app in applications]


# 5. APPLICATIONS BY JOB ID SET (Employer, no join)
@router.get("/applications", response_model=List[ApplicationResponse])
async def get_applications_for_jobs(
    job_id: List[str] = Query(..., description="Job ids, all owned by the current employer"),
    current_user: dict = Depends(get_current_user)
):
    """Applications filtered directly by job id."""

    require_role(current_user, EMPLOYER, "Only employers can access this")

    if not all(ObjectId.is_valid(jid) for jid in job_id):
        raise HTTPException(status_code=400, detail="Some job IDs are invalid")

    db = get_db()
    job_oids = [ObjectId(jid) for jid in set(job_id)]
    owned = await db.jobs.count_documents({
        "_id": {"$in": job_oids},
        "employer_id": str(current_user["_id"])
    })
    if owned != len(job_oids):
        raise HTTPException(status_code=403, detail="You can only view applications for your own jobs")

    applications = await db.applications.find(
        {"job_id": {"$in": job_oids}}
    ).sort("submitted_at", -1).to_list(1000)

    return [application_to_response(app) for app in applications]


async def _set_status(db, application: dict, target: ApplicationStatus, current_user: dict) -> dict:
    await find_owned_job(db, application["job_id"], current_user)

    current = ApplicationStatus(application["status"])
    try:
        check_transition(current, target)
    except IllegalTransition as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.to_dict())

    # Only write if nobody moved the application since we read it
    result = await db.applications.update_one(
        {"_id": application["_id"], "status": current.value},
        {"$set": {"status": target.value}}
    )
    if result.matched_count == 0:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Application status changed in the meantime, refresh and try again"
        )

    logger.info(
        "Application %s moved %s -> %s by %s",
        application["_id"], current.value, target.value, current_user["_id"]
    )
    return {
        "id": str(application["_id"]),
        "previous_status": current,
        "status": target,
    }


# 6. UPDATE APPLICATION STATUS (Employer)
@router.put("/applications/{application_id}/status", response_model=StatusUpdateResponse)
async def update_status(
    application_id: str,
    status_update: ApplicationStatusUpdate,
    current_user: dict = Depends(get_current_user)
):
    """Move an application to its next status. Illegal moves are rejected with 409."""

    require_role(current_user, EMPLOYER, "Only employers can change application status")

    db = get_db()
    application = await find_application(db, application_id)
    return await _set_status(db, application, status_update.status, current_user)


# 7. APPLY A FUNNEL EVENT (Employer)
@router.post("/applications/{application_id}/events/{event}", response_model=StatusUpdateResponse)
async def apply_status_event(
    application_id: str,
    event: ApplicationEvent,
    current_user: dict = Depends(get_current_user)
):
    """shortlist / reject / hire / fail, resolved against the application's current status."""

    require_role(current_user, EMPLOYER, "Only employers can change application status")

    db = get_db()
    application = await find_application(db, application_id)
    try:
        target = apply_event(application["status"], event)
    except IllegalTransition as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=exc.to_dict())

    return await _set_status(db, application, target, current_user)
