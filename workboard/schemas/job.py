from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date, datetime

from workboard.models.job import JobType, RequirementDetail, default_requirements

# 1. Input: What the Employer sends
class JobCreate(BaseModel):
    title: str
    workplace: str
    salary: str
    working_hours: str
    type: JobType = "Full-time"
    sector: str = "Technology"
    company: Optional[str] = None
    description: str = ""
    role_details: str = ""
    requirements: List[RequirementDetail] = Field(default_factory=default_requirements)
    end_date: Optional[date] = None
    contact_phone: Optional[str] = None

    @field_validator("title", "workplace", "salary", "working_hours")
    @classmethod
    def required_text(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Please fill in all required fields (Title, Workplace, Salary, Hours).")
        return value.strip()

# 2. Output: Job as listed in the feed
class JobResponse(BaseModel):
    id: str
    employer_id: str
    title: str
    company: str
    workplace: str
    type: JobType
    sector: str
    salary: str
    working_hours: str
    requirements: List[RequirementDetail] = []
    description: str = ""
    role_details: str = ""
    posted_at: datetime
    end_date: date
    contact_email: str
    contact_phone: Optional[str] = None
    created_at: datetime
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# 3. Output: Employer dashboard row
class JobListItem(BaseModel):
    """Employer's own posting with applicant counts"""
    id: str
    title: str
    company: str
    workplace: str
    posted_at: datetime
    application_count: int
    new_applications: int  # Applications still "pending"
