# orchestrator/main.py
"""Orchestrator service: voice query in, stock analysis out."""
import logging
import time
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, File, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agents.api_agent.client import SearchClient, close_search_client, get_search_client
from agents.language_agent.config import settings as language_settings
from agents.language_agent.extractor import extract_symbols
from agents.language_agent.llm_client import TextGenerator, get_text_generator
from agents.voice_agent.config import settings as voice_settings
from agents.voice_agent.models import AudioBlob
from agents.voice_agent.stt_client import Transcriber, get_transcriber
from orchestrator.config import settings
from orchestrator.models import ChatResponse, HealthResponse
from orchestrator.pipeline import NO_SYMBOLS_MESSAGE, analyze_symbols, combine_analyses

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Orchestrator",
    description="Voice-driven stock analysis: transcription, symbol extraction, market search and LLM synthesis.",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS, allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)


def _json(payload: ChatResponse, status_code: int = status.HTTP_200_OK, always: tuple = ()) -> JSONResponse:
    """Serialize without unset fields; names in `always` are emitted even when None."""
    content = payload.model_dump(exclude_none=True)
    for field in always:
        content[field] = getattr(payload, field)
    return JSONResponse(status_code=status_code, content=content)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logging.getLogger("orchestrator.request").info(
        "%s %s -> %s in %.1fms",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


@app.on_event("shutdown")
async def shutdown_event():
    await close_search_client()


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Request validation error for {request.url.path}: {exc.errors()}")
    return _json(
        ChatResponse(success=False, error="Invalid request", details=str(exc.errors())),
        status.HTTP_400_BAD_REQUEST,
    )


@app.exception_handler(Exception)  # Generic fallback
async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception for {request.url.path}: {exc}", exc_info=True)
    return _json(
        ChatResponse(success=False, error="An unexpected internal server error occurred.", details=str(exc)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


@app.get("/health", response_model=HealthResponse, tags=["Utility"])
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        agent="Orchestrator",
        version=app.version,
        timestamp=datetime.utcnow(),
        text_model=language_settings.GEMINI_MODEL,
        audio_model=voice_settings.GEMINI_AUDIO_MODEL,
    )


@app.post("/api/chat", response_model=ChatResponse, response_model_exclude_none=True, tags=["Core"])
async def chat(
    audio: Optional[UploadFile] = File(None),
    transcriber: Transcriber = Depends(get_transcriber),
    generator: TextGenerator = Depends(get_text_generator),
    search_client: SearchClient = Depends(get_search_client),
):
    """Transcribe an uploaded recording and answer it with a per-symbol stock analysis."""
    if audio is None:
        return _json(ChatResponse(success=False, error="No audio file provided"), status.HTTP_400_BAD_REQUEST)

    content_type = audio.content_type or ""
    if not content_type.startswith("audio/"):
        logger.warning(f"Rejected upload with content type '{content_type}'")
        return _json(
            ChatResponse(success=False, error="Invalid file type. Please provide an audio file."),
            status.HTTP_400_BAD_REQUEST,
        )

    transcription: Optional[str] = None
    try:
        blob = AudioBlob(data=await audio.read(), mime_type=content_type)
        transcription = await transcriber.transcribe(blob)

        symbols = await extract_symbols(transcription, generator)
        if not symbols:
            return _json(
                ChatResponse(success=True, transcription=transcription, symbols=[], analysis=NO_SYMBOLS_MESSAGE)
            )

        results = await analyze_symbols(symbols, transcription, search_client, generator)
        return _json(
            ChatResponse(
                success=True,
                transcription=transcription,
                symbols=symbols,
                analysis=combine_analyses(results),
            )
        )
    except Exception as e:
        logger.error(f"Error in voice stock analysis: {e}", exc_info=True)
        return _json(
            ChatResponse(
                success=False,
                error="Error processing voice stock analysis",
                details=str(e),
                transcription=transcription,
            ),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            always=("transcription",),
        )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("orchestrator.main:app", host=settings.HOST, port=settings.PORT, reload=settings.RELOAD)
