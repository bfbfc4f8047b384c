# ========================================
# workboard/routes/user.py - accounts and profiles
# ========================================

import logging

from fastapi import APIRouter, HTTPException, Depends

from workboard.schemas.user import UserCreate, UserResponse, UserLogin, TokenResponse, UserProfileUpdate
from workboard.database import get_db
from workboard.utils.security import get_password_hash, verify_password
from workboard.utils.auth import create_access_token, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def _profile_out(user: dict) -> dict:
    return {
        "id": str(user["_id"]),
        "full_name": user.get("full_name") or user["email"],
        "email": user["email"],
        "role": user["role"],
        "company_name": user.get("company_name") or "",
        "is_verified": user.get("is_verified", False),
    }

# ===========================
# PUBLIC ENDPOINTS
# ===========================

# 1. REGISTER
@router.post("/register", response_model=UserResponse)
async def register_user(user: UserCreate):
    """Register a new candidate or employer account."""
    db = get_db()

    existing_user = await db.users.find_one({"email": user.email})
    if existing_user:
        raise HTTPException(status_code=400, detail="Account already exists. Please Sign In.")

    user_dict = user.model_dump()
    user_dict["password"] = get_password_hash(user.password)
    user_dict["is_verified"] = True

    result = await db.users.insert_one(user_dict)
    user_dict["_id"] = result.inserted_id
    logger.info("Registered %s account %s", user.role, user.email)

    return _profile_out(user_dict)


# 2. LOGIN
@router.post("/login", response_model=TokenResponse)
async def login(user_credentials: UserLogin):
    """Login and get JWT access token."""

    db = get_db()

    user = await db.users.find_one({"email": user_credentials.email})
    if not user:
        raise HTTPException(status_code=401, detail="Invalid login credentials")

    if not verify_password(user_credentials.password, user["password"]):
        raise HTTPException(status_code=401, detail="Invalid login credentials")

    access_token = create_access_token(data={"sub": user["email"]})

    return {"access_token": access_token, "token_type": "bearer"}


# ===========================
# AUTHENTICATED USER ENDPOINTS
# ===========================

# 3. GET MY PROFILE
@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: dict = Depends(get_current_user)):
    """Get the current user's profile."""

    return _profile_out(current_user)


# 4. UPDATE MY PROFILE
@router.put("/profile", response_model=UserResponse)
async def update_profile(
    profile_data: UserProfileUpdate,
    current_user: dict = Depends(get_current_user)
):
    """Update the current user's display name, company or verification flag."""

    db = get_db()

    update_data = profile_data.model_dump(exclude_unset=True)
    if update_data:
        await db.users.update_one(
            {"_id": current_user["_id"]},
            {"$set": update_data}
        )
        current_user.update(update_data)

    return _profile_out(current_user)
