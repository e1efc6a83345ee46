"""Placement errors → discrete JSON signals for the frontend dialogs."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from knitcanvas.engine.errors import (
    ImageLoadFailed,
    MotifNotFound,
    MotifsCannotFit,
    PlacementError,
)
from knitcanvas.models.responses import ErrorResponse, MotifOut

logger = logging.getLogger(__name__)


def _status_for(exc: PlacementError) -> int:
    if isinstance(exc, MotifNotFound):
        return 404
    if isinstance(exc, ImageLoadFailed):
        return 422
    return 409


def error_payload(exc: PlacementError) -> ErrorResponse:
    payload = ErrorResponse(error=exc.code, message=exc.user_message, detail=str(exc))
    if isinstance(exc, MotifsCannotFit):
        payload.unplaced_ids = list(exc.unplaced_ids)
        payload.motifs = [MotifOut(**m.to_dict()) for m in exc.motifs]
    return payload


async def placement_error_handler(request: Request, exc: PlacementError) -> JSONResponse:
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc)
    return JSONResponse(
        status_code=_status_for(exc),
        content=error_payload(exc).model_dump(),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PlacementError, placement_error_handler)
