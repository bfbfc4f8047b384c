from pydantic import BaseModel, EmailStr
from typing import Optional

from workboard.models.user import UserRole

# 1. For Registration (Input)
class UserCreate(BaseModel):
    full_name: str
    email: EmailStr
    password: str
    role: UserRole
    company_name: Optional[str] = ""

# 2. For Login (Input)
class UserLogin(BaseModel):
    email: str
    password: str

# 3. For Responses (Output)
class UserResponse(BaseModel):
    id: str
    full_name: str
    email: EmailStr
    role: UserRole
    company_name: Optional[str] = ""
    is_verified: bool = False

    class Config:
        from_attributes = True

class TokenResponse(BaseModel):
    access_token: str
    token_type: str

# 4. For Updating Profile (Input)
class UserProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    company_name: Optional[str] = None
    is_verified: Optional[bool] = None
