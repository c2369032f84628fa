from fastapi import APIRouter, Depends

from ..schemas import HealthResponse
from ..settings import Settings, get_settings

router = APIRouter(tags=["health"])


@router.get("/healthz", response_model=HealthResponse)
def healthz() -> HealthResponse:
	return HealthResponse(status="ok")


@router.get("/info")
def info(settings: Settings = Depends(get_settings)):
	return {
		"status": "ok",
		"provider": settings.provider,
		"provider_configured": bool(settings.active_api_key),
	}
