from fastapi import APIRouter, Depends

from transcriptly.models.config import DEFAULT_CACHE_DIR
from transcriptly_api.core.config import Settings, get_settings
from transcriptly_api.schemas.v1.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Report service version and how outbound transcript fetches are configured."""
    return HealthResponse(
        version=settings.version,
        proxy_configured=bool(settings.proxy_url),
        cache_dir=str(DEFAULT_CACHE_DIR),
    )
