"""FastAPI route for search-augmented chat completions."""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from searchchat.chat.service import (
    MissingQueryError,
    SearchOfflineError,
    WebSearchChatService,
)
from searchchat.models import WebSearchChatRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["chat"])


def get_web_search_service() -> WebSearchChatService:
    """Dependency placeholder, replaced at app startup."""
    raise RuntimeError("WebSearchChatService not initialized")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def _parse_body(request: Request) -> WebSearchChatRequest:
    """Parse the body; only an unusable body or a missing query is a client error.

    Other malformed fields raise ValidationError, which the route reports as 500.
    """
    try:
        data = await request.json()
    except ValueError:
        raise MissingQueryError()
    if not isinstance(data, dict) or not data.get("query"):
        raise MissingQueryError()
    return WebSearchChatRequest.model_validate(data)


@router.post("/web-search")
async def web_search_chat(
    request: Request,
    service: WebSearchChatService = Depends(get_web_search_service),
) -> JSONResponse:
    try:
        body = await _parse_body(request)
        message = await service.respond(body)
    except MissingQueryError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except SearchOfflineError as e:
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, str(e))
    except Exception as e:
        logger.exception("web-search error")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(e) or "Unexpected server error")
    return JSONResponse({"message": message}, status_code=status.HTTP_200_OK)
