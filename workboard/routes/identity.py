from fastapi import APIRouter, Depends

from workboard.schemas.identity import IdentityCheckRequest, IdentityCheckResult
from workboard.services import identity
from workboard.utils.auth import get_current_user

router = APIRouter(tags=["Identity"])


@router.post("/verify-identity", response_model=IdentityCheckResult)
async def verify_identity(
    body: IdentityCheckRequest,
    current_user: dict = Depends(get_current_user)
):
    """Ask the identity model whether the photo matches the given name."""
    return await identity.verify_identity_match(body.image_base64, body.name)
