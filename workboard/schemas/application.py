from pydantic import BaseModel, Field
from typing import Dict, Optional
from datetime import datetime

from workboard.models.application import ApplicationStatus

# 1. Input: Submit Application
class ApplicationCreate(BaseModel):
    job_id: str
    uploaded_docs: Dict[str, str] = Field(default_factory=dict)  # requirement name -> storage path
    candidate_name: Optional[str] = None

# 2. Input: Update Status
class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus

# 3. Output: Application record
class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    candidate_id: str
    status: ApplicationStatus
    uploaded_docs: Dict[str, str] = Field(default_factory=dict)
    submitted_at: datetime
    verified: bool = False
    candidate_name: Optional[str] = None

    class Config:
        from_attributes = True

# 4. Output: Status change acknowledgement
class StatusUpdateResponse(BaseModel):
    id: str
    previous_status: ApplicationStatus
    status: ApplicationStatus

# 5. Output: Has the current candidate applied?
class ApplicationCheck(BaseModel):
    has_applied: bool
    application_id: Optional[str] = None
    status: Optional[ApplicationStatus] = None
