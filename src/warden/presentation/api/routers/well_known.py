"""Public discovery endpoints."""

from typing import Any

from fastapi import APIRouter

from warden.presentation.api.dependencies import JWTServiceDep

router = APIRouter()


@router.get("/jwks.json", summary="Public signing keys (JWKS)")
async def get_jwks(jwt_service: JWTServiceDep) -> dict[str, Any]:
    """
    Return the key set that verifies access tokens issued by this service.
    """
    return jwt_service.get_jwks()
