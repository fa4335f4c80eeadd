from fastapi import APIRouter

from transcriptly_api.api.v1.endpoints import health, transcript

api_router = APIRouter()

for endpoint_router, tag in ((health.router, "health"), (transcript.router, "transcript")):
    api_router.include_router(endpoint_router, tags=[tag])
