from fastapi import APIRouter, Depends

from lunaris_api.config import Settings
from lunaris_api.dependencies import get_settings

router = APIRouter(prefix="", tags=["health"])


@router.get("/health")
def health_check(settings: Settings = Depends(get_settings)):
    return {"status": "OK", "message": f"{settings.service_name} API is running"}
