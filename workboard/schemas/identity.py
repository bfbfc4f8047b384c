from pydantic import BaseModel
from typing import Optional


class IdentityCheckRequest(BaseModel):
    image_base64: str
    name: str


class IdentityCheckResult(BaseModel):
    is_match: bool
    confidence: Optional[float] = None
    reason: str
