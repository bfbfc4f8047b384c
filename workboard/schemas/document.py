from pydantic import BaseModel
from datetime import datetime


class DocumentUploadResponse(BaseModel):
    path: str
    filename: str
    sha256: str
    size_kb: float


class SignedUrlRequest(BaseModel):
    path: str


class SignedUrlResponse(BaseModel):
    signed_url: str
    expires_at: datetime
