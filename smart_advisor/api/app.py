# PURPOSE: FastAPI backend. Exposes POST /api/recommend and GET /api/health for the
#          Streamlit UI and the CLI.
# CONTEXT: The app is built by create_app() from a Settings value; the service (and
#          its Bedrock client, if any) is constructed once here and kept on app.state.

from __future__ import annotations

import time
import uuid
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from smart_advisor import __version__
from smart_advisor.config import Settings, load_settings
from smart_advisor.logging_setup import configure_logging
from smart_advisor.observability import init_observability
from smart_advisor.service import (
    MIN_LENGTH_MESSAGE,
    RecommendationService,
    build_service,
    health_payload,
    recommend_response,
)

log = structlog.get_logger(__name__)


class RecommendIn(BaseModel):
    # Optional so a missing field becomes our 400, not FastAPI's 422.
    userInput: Optional[str] = None


def create_app(settings: Optional[Settings] = None, service: Optional[RecommendationService] = None) -> FastAPI:
    """
    Build the FastAPI application.

    parameters:
    - settings: Settings – defaults to load_settings().
    - service: RecommendationService – defaults to build_service(settings); tests
      inject one with a fake completion client.
    """
    settings = settings or load_settings()
    service = service or build_service(settings)

    app = FastAPI(title="Smart Investment Advisor API", version=__version__)
    app.state.settings = settings
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        # Path only; bodies carry user free text.
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        structlog.contextvars.bind_contextvars(request_id=request_id)
        t0 = time.time()
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        latency_ms = round((time.time() - t0) * 1000, 1)
        level = "error" if response.status_code >= 500 else "warning" if response.status_code >= 400 else "info"
        getattr(log, level)(
            "request.finished",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            latency_ms=latency_ms,
        )
        response.headers["x-request-id"] = request_id
        return response

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": MIN_LENGTH_MESSAGE})

    @app.post("/api/recommend")
    def recommend(body: RecommendIn):
        """
        Main endpoint: userInput in, {"success": true, "data": Recommendation} out.
        AI failures still return 200 with data.isAI == false.
        """
        status, payload = recommend_response(app.state.service, body.userInput)
        return JSONResponse(status_code=status, content=payload)

    @app.get("/api/health")
    def health():
        return health_payload(app.state.service)

    return app


def main() -> None:
    """Run the API with uvicorn on HOST:PORT."""
    configure_logging()
    init_observability()
    settings = load_settings()
    app = create_app(settings)
    log.info(
        "api.starting",
        port=settings.port,
        ai="Enabled (Bedrock)" if app.state.service.ai_enabled else "Disabled (Mock Data)",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
