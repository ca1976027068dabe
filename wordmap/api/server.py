"""
Word Genetic Map: API Server
============================

HTTP surface over EtymologyService.

Endpoints (also served under /api):
- GET  /health        -> Liveness probe
- GET  /word/{word}   -> Etymology entry
- POST /story         -> Persona story generated by the model chain

Every failure is returned as {"success": false, "error": ...}.

Usage:
    uvicorn wordmap.api.server:create_app --factory
"""
import logging
import traceback
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from storyteller.contracts import GenerationError
from storyteller.providers import LLMProvider
from ..config import AppConfig, load_config
from ..contracts.errors import WordMapError
from ..contracts.words import StoryRequest
from ..service import EtymologyService
from .mapper import map_entry_to_dto, map_story_to_dto

logger = logging.getLogger(__name__)


class StoryRequestBody(BaseModel):
    """POST /story body. Presence checks happen in the service, not here."""
    word: Optional[str] = None
    character: Optional[str] = None
    language: Optional[str] = "ko"


# =============================================================================
# ENDPOINTS
# =============================================================================

router = APIRouter()


def _service(request: Request) -> EtymologyService:
    return request.app.state.service


@router.get("/health")
async def health_check():
    """System status."""
    return {"status": "ok"}


@router.get("/word/{word}")
async def get_word(word: str, request: Request):
    """Look up one word (case-insensitive)."""
    entry = _service(request).lookup_word(word)
    return {
        "success": True,
        "word": entry.word,
        "data": map_entry_to_dto(entry),
    }


@router.post("/story")
def create_story(body: StoryRequestBody, request: Request):
    """
    Generate a story.

    Sync on purpose: the provider call blocks, so FastAPI runs this
    in its threadpool and other requests keep flowing.
    """
    result = _service(request).generate_story(StoryRequest(
        word=body.word,
        character=body.character,
        language=body.language
    ))
    return map_story_to_dto(result)


# =============================================================================
# ERROR ENVELOPE
# =============================================================================

def _error_response(
    request: Request,
    status_code: int,
    exc: Exception,
    message: Optional[str] = None
) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "error": message or str(exc)}
    config: AppConfig = request.app.state.config
    if status_code >= 500 and config.is_development:
        content["details"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return JSONResponse(status_code=status_code, content=content)


async def _handle_wordmap_error(request: Request, exc: WordMapError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return _error_response(request, exc.http_status, exc)


async def _handle_generation_error(request: Request, exc: GenerationError) -> JSONResponse:
    logger.error("Story generation failed: %s", exc)
    return _error_response(request, 500, exc)


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(
        request, 400, exc,
        message="Request body must be a JSON object with string fields word and character"
    )


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(request, 500, exc, message=str(exc) or "Internal server error")


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    service: EtymologyService = app.state.service
    logger.info("Serving %d words: %s", len(service.table), ", ".join(service.table.words()))
    yield
    logger.info("Shutting down")


def create_app(
    config: Optional[AppConfig] = None,
    provider: Optional[LLMProvider] = None,
    service: Optional[EtymologyService] = None
) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        config: Resolved configuration (defaults to load_config())
        provider: Provider override, mainly for tests
        service: Fully built service override
    """
    config = config or load_config()
    service = service or EtymologyService.from_config(config, provider=provider)

    app = FastAPI(
        title="Word Genetic Map API",
        version="0.1.0",
        description="Etymology lookups and persona stories",
        lifespan=lifespan
    )
    app.state.config = config
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials="*" not in config.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.add_exception_handler(WordMapError, _handle_wordmap_error)
    app.add_exception_handler(GenerationError, _handle_generation_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)

    app.include_router(router)
    app.include_router(router, prefix="/api")

    # Static front-end last so it never shadows the API routes
    if config.static_dir:
        static_dir = Path(config.static_dir)
        if static_dir.is_dir():
            app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")
        else:
            logger.warning("WORDMAP_STATIC_DIR %s is not a directory; not serving static files", static_dir)

    return app
