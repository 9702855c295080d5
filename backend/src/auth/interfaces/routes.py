from fastapi import APIRouter, Depends

from auth.domain.entities import Identity
from auth.interfaces.schemas import IdentityResponse
from shared.dependencies import get_token_identity

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/me", response_model=IdentityResponse)
async def me(identity: Identity = Depends(get_token_identity)):
    return identity
