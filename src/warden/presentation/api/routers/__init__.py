from warden.presentation.api.routers.auth import router as auth_router
from warden.presentation.api.routers.well_known import router as well_known_router

__all__ = [
    "auth_router",
    "well_known_router",
]
