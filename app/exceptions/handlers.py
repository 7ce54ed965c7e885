import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from app.mappers.error_report import render_error_report

from .custom import DataUnavailableError, RequestRejectedError

logger = logging.getLogger(__name__)


async def data_unavailable_error_handler(_request: Request, exc: DataUnavailableError) -> JSONResponse:
    logger.error("Data unavailable: %s (source=%s)", exc.message, exc.source)
    return JSONResponse(
        status_code=503,
        content={"detail": exc.message},
    )


async def request_rejected_error_handler(_request: Request, exc: RequestRejectedError) -> Response:
    logger.warning("Availability request rejected: %s", "; ".join(exc.messages))
    return Response(
        status_code=400,
        content=render_error_report(exc.messages),
        media_type="application/xml",
    )
