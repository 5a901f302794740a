from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from resume_pipeline.core.errors import ResumePipelineError

logger = logging.getLogger(__name__)


async def pipeline_error_handler(request: Request, exc: ResumePipelineError) -> JSONResponse:
    logger.info(
        "resume_request_failed path=%s code=%s status=%s cause=%r",
        request.url.path,
        exc.code,
        exc.status_code,
        exc.__cause__,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.code, "detail": str(exc)})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("resume_request_crashed path=%s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_error", "detail": "Something went wrong. Please try again."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ResumePipelineError, pipeline_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
