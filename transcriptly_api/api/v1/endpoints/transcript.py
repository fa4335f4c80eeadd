import logging
from functools import lru_cache

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from transcriptly.components.sources import FetchConfig
from transcriptly.errors import InvalidInputError, RetrievalFailedError
from transcriptly.run import TranscriptRetriever
from transcriptly_api.core.config import get_settings
from transcriptly_api.schemas.v1.requests import TranscriptRequest
from transcriptly_api.schemas.v1.responses import (
    ErrorResponse,
    TranscriptMetadata,
    TranscriptResponse,
)

router = APIRouter()
_logger = logging.getLogger(__name__)


@lru_cache
def get_retriever() -> TranscriptRetriever:
    """Build the process-wide retriever from settings."""
    settings = get_settings()
    return TranscriptRetriever(config=FetchConfig(proxy_url=settings.proxy_url))


@router.post(
    "/transcript",
    response_model=TranscriptResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Invalid YouTube URL or ID"},
    },
)
async def get_transcript(
    request: TranscriptRequest,
    retriever: TranscriptRetriever = Depends(get_retriever),
):
    """
    Extract the transcript from a YouTube video URL or ID.

    Invalid input is rejected with a 422. If every transcript source fails, the
    response is still a 200 with ``is_error`` set and the failure in ``text``.
    """
    try:
        result = await retriever.retrieve(request.url, request.lang)
    except InvalidInputError as exc:
        _logger.info("Rejected transcript request: %s", exc)
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(error="InvalidInput", message=str(exc)).model_dump(),
        )
    except RetrievalFailedError as exc:
        _logger.error("Transcript extraction failed: %s", exc)
        return TranscriptResponse(text=f"Error: {exc}", is_error=True)

    return TranscriptResponse(
        text=result.text,
        metadata=TranscriptMetadata(
            video_id=result.video_id,
            language=result.language,
            char_count=result.char_count,
            timestamp=result.completed_at,
            source=result.source,
        ),
    )
