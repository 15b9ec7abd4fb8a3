"""
FastAPI Application - REST API for the guessing game UI.

Endpoints:
    POST   /api/v1/sessions                    Create and start a session
    GET    /api/v1/sessions                    List sessions
    GET    /api/v1/sessions/{id}               Get session status
    DELETE /api/v1/sessions/{id}               End session
    POST   /api/v1/sessions/{id}/guess         Guess (engine hides)
    POST   /api/v1/sessions/{id}/feedback      Answer the engine's guess (engine guesses)
    GET    /api/v1/sessions/{id}/transcript    Ordered transcript
    POST   /api/v1/self-play                   Headless self-play game

UI contract:
    - INVALID_INPUT / UNCLEAR_FEEDBACK (422): re-prompt, the session is unchanged
    - CONTRADICTION (200, success=false): game over, show the restart message
    - INVALID_STATE / SESSION_BUSY (409), SESSION_NOT_FOUND (404)
"""

from typing import Optional, Union
import logging
import os

from ..config import load_config
from ..engine_core.errors import ErrorCode

# Environment configuration
HILO_ENV = os.getenv("HILO_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

log = logging.getLogger("hilo.api")

ERROR_STATUS = {
    ErrorCode.INVALID_INPUT: 422,
    ErrorCode.UNCLEAR_FEEDBACK: 422,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.INVALID_STATE: 409,
    ErrorCode.SESSION_BUSY: 409,
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.CONTRADICTION: 409,
    ErrorCode.INTERNAL_ERROR: 500,
}


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .. import __version__
    from .service import APIService
    from .schemas import (
        CreateSessionRequest,
        GuessRequest,
        FeedbackRequest,
        SelfPlayRequest,
        ErrorResponse,
        SessionResponse,
        TurnResponse,
        TranscriptResponse,
        SelfPlayResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
    )

    app = FastAPI(
        title="Hilo Engine API",
        description="""
Higher/lower number guessing over 1..100.

## Roles

- `role=hider`: the engine keeps a secret; `POST /guess` with your guesses.
- `role=guesser`: you keep a secret; answer each engine guess with
  `POST /feedback` (`higher`, `lower`, `correct`, or free text).

## Error Codes

| Code | Description |
|------|-------------|
| `INVALID_INPUT` | Number outside 1..100; ask again |
| `UNCLEAR_FEEDBACK` | Feedback text not understood; ask again |
| `INVALID_STATE` | Game already over, or wrong move for this role |
| `SESSION_BUSY` | Another request is advancing this session |
| `SESSION_NOT_FOUND` | Session does not exist |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService(config=load_config())

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Render an ErrorResponse with its mapped HTTP status."""
        status_code = ERROR_STATUS.get(error.error_code, 400)
        if status_code >= 500:
            log.error("API error: %s", error.error)
        return JSONResponse(status_code=status_code, content=error.model_dump(mode="json"))

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Create and start a game session",
    )
    async def create_session(request: CreateSessionRequest) -> Union[SessionResponse, JSONResponse]:
        """
        Start a game where the engine plays `role`.

        A guesser session's response already contains the engine's first guess
        as `last_guess`.
        """
        return respond(api_service.create_session(request))

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List sessions",
    )
    async def list_sessions(
        active_only: bool = Query(False, description="Only games still in play"),
    ) -> SessionListResponse:
        sessions = api_service.list_sessions(active_only=active_only)
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        return respond(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        """End a game session and release it."""
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Loop Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/guess",
        response_model=TurnResponse,
        responses={
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
            422: {"model": ErrorResponse},
        },
        tags=["Game Loop"],
        summary="Guess the engine's secret",
    )
    async def submit_guess(
        session_id: str,
        request: GuessRequest,
    ) -> Union[TurnResponse, JSONResponse]:
        return respond(api_service.submit_guess(session_id, request))

    @app.post(
        "/api/v1/sessions/{session_id}/feedback",
        response_model=TurnResponse,
        responses={
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse},
            422: {"model": ErrorResponse},
        },
        tags=["Game Loop"],
        summary="Answer the engine's last guess",
    )
    async def submit_feedback(
        session_id: str,
        request: FeedbackRequest,
    ) -> Union[TurnResponse, JSONResponse]:
        """
        Answer with `outcome` (higher/lower/correct) or free `text`.

        Unclear text returns UNCLEAR_FEEDBACK and leaves the game as it was.
        """
        return respond(api_service.submit_feedback(session_id, request))

    @app.get(
        "/api/v1/sessions/{session_id}/transcript",
        response_model=TranscriptResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game Loop"],
        summary="Get the transcript",
    )
    async def get_transcript(session_id: str) -> Union[TranscriptResponse, JSONResponse]:
        return respond(api_service.get_transcript(session_id))

    @app.post(
        "/api/v1/self-play",
        response_model=SelfPlayResponse,
        responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
        tags=["Self-Play"],
        summary="Run a complete self-play game",
    )
    async def self_play(
        request: Optional[SelfPlayRequest] = None,
    ) -> Union[SelfPlayResponse, JSONResponse]:
        return respond(api_service.self_play(request or SelfPlayRequest()))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="hilo-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Hilo Engine API",
            "version": __version__,
            "environment": HILO_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn hilo.api.app:app
app = create_app()
