# ========================================
# workboard/routes/document.py - application documents in GridFS
# ========================================

import io
import logging
import time

from fastapi import APIRouter, File, UploadFile, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse
from datetime import datetime

from workboard.database import get_db, get_fs_bucket
from workboard.models.user import EMPLOYER
from workboard.services.integrity import hash_document
from workboard.schemas.document import DocumentUploadResponse, SignedUrlRequest, SignedUrlResponse
from workboard.utils.auth import get_current_user
from workboard.utils.security import InvalidSignature, read_signed_path, sign_document_path

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["Documents"])

MAX_DOCUMENT_BYTES = 5 * 1024 * 1024


def storage_path(user_id: str, filename: str) -> str:
    return f"{user_id}/{int(time.time() * 1000)}_{filename}"


async def _employer_can_read(db, current_user: dict, document: dict) -> bool:
    """True when the document is attached to an application on one of the employer's jobs."""
    jobs = await db.jobs.find({"employer_id": str(current_user["_id"])}).to_list(1000)
    if not jobs:
        return False

    applications = await db.applications.find({
        "candidate_id": document["owner_id"],
        "job_id": {"$in": [job["_id"] for job in jobs]}
    }).to_list(1000)
    return any(document["path"] in (app.get("uploaded_docs") or {}).values() for app in applications)


# 1. UPLOAD A DOCUMENT
@router.post("", response_model=DocumentUploadResponse)
async def upload_document(
    file: UploadFile = File(...),
    current_user: dict = Depends(get_current_user)
):
    contents = await file.read()

    if not contents:
        raise HTTPException(status_code=400, detail="Empty file")

    if len(contents) > MAX_DOCUMENT_BYTES:
        raise HTTPException(status_code=400, detail="File size exceeds 5MB limit")

    db = get_db()
    fs_bucket = get_fs_bucket()

    owner_id = str(current_user["_id"])
    path = storage_path(owner_id, file.filename)
    digest = hash_document(contents)

    try:
        file_id = await fs_bucket.upload_from_stream(
            path,
            io.BytesIO(contents),
            metadata={
                "owner_id": owner_id,
                "content_type": file.content_type,
                "original_filename": file.filename,
                "sha256": digest,
            }
        )
    except Exception as e:
        logger.exception("Storing %s failed", path)
        raise HTTPException(status_code=500, detail=f"Upload failed: {str(e)}")

    await db.documents.insert_one({
        "path": path,
        "file_id": file_id,
        "owner_id": owner_id,
        "filename": file.filename,
        "content_type": file.content_type or "application/octet-stream",
        "file_size": len(contents),
        "sha256": digest,
        "uploaded_at": datetime.utcnow(),
    })

    return {
        "path": path,
        "filename": file.filename,
        "sha256": digest,
        "size_kb": round(len(contents) / 1024, 2)
    }


# 2. ISSUE A TIME-LIMITED READ LINK
@router.post("/signed-url", response_model=SignedUrlResponse)
async def create_signed_url(
    body: SignedUrlRequest,
    request: Request,
    current_user: dict = Depends(get_current_user)
):
    db = get_db()

    document = await db.documents.find_one({"path": body.path})
    if not document:
        raise HTTPException(status_code=404, detail="Document not found")

    # Uploader, or the employer reviewing an application that carries it
    if document["owner_id"] != str(current_user["_id"]):
        if current_user["role"] != EMPLOYER or not await _employer_can_read(db, current_user, document):
            raise HTTPException(status_code=403, detail="Access denied")

    token, expires_at = sign_document_path(document["path"])
    signed_url = str(request.url_for("read_signed_document", token=token))

    return {"signed_url": signed_url, "expires_at": expires_at}


# 3. READ THROUGH A SIGNED LINK (no bearer token needed)
@router.get("/signed/{token}", name="read_signed_document")
async def read_signed_document(token: str):
    try:
        path = read_signed_path(token)
    except InvalidSignature:
        raise HTTPException(status_code=403, detail="Link expired or invalid")

    db = get_db()
    fs_bucket = get_fs_bucket()

    document = await db.documents.find_one({"path": path})
    if not document:
        raise HTTPException(status_code=404, detail="Document not found")

    try:
        grid_out = await fs_bucket.open_download_stream(document["file_id"])
        contents = await grid_out.read()
    except Exception as e:
        logger.exception("Reading %s failed", path)
        raise HTTPException(status_code=500, detail=f"Download failed: {str(e)}")

    return StreamingResponse(
        io.BytesIO(contents),
        media_type=document["content_type"],
        headers={
            "Content-Disposition": f'inline; filename="{document["filename"]}"'
        }
    )
