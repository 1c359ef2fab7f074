# src/api/server.py — v2
"""HTTP entry point.

    POST /analyze-content   {type, content, fileData?, fileSize?}
        200 → AnalysisResult (camelCase)
        400 → {error, truthScore: 0, status: "error"} for empty submissions
        500 → same shape for any fatal failure, including unknown types
              and bodies that do not parse
    GET  /health

Run with:  truthgen serve   (or uvicorn "truthgen.api.server:create_app" --factory)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from truthgen.api.facade import AnalysisComponents, build_components
from truthgen.api.models import AnalyzeRequest, ErrorResponse
from truthgen.config.settings import Settings
from truthgen.core.errors import AnalysisFailed, ValidationError
from truthgen.version import __version__

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    components: AnalysisComponents | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Used to build components when none are injected.
        components: Pre-built components; the caller keeps ownership.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = components is None
        comps = components or build_components(settings or Settings())
        removed = await comps.startup()
        logger.info("Server ready (evicted %d expired local entries)", removed)
        app.state.components = comps
        try:
            yield
        finally:
            if owned:
                comps.close()

    app = FastAPI(title="truthgen", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Unparsable or mistyped bodies fail like any other fatal request error
        logger.warning("Rejected malformed request body: %s", exc.errors())
        return _error_response(500, "Invalid request body")

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @app.post("/analyze-content")
    async def analyze_content(body: AnalyzeRequest, request: Request) -> JSONResponse:
        comps: AnalysisComponents = request.app.state.components
        logger.info("Analyzing %s content...", body.type)

        if not body.has_known_type:
            return _error_response(500, "Invalid analysis type")

        try:
            submission = body.to_submission()
            result = await comps.orchestrator.run(submission)
        except ValidationError as e:
            return _error_response(400, str(e))
        except AnalysisFailed as e:
            return _error_response(500, str(e.cause) or e.user_message)

        return JSONResponse(result.to_wire())

    return app


def _error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=message)
    return JSONResponse(body.model_dump(by_alias=True), status_code=status_code)
