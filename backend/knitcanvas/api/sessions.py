"""/api/sessions: motif sessions driven by the canvas frontend.

Each route is a thin adapter over ``MotifSession``. Placement errors propagate
to the handlers in ``knitcanvas.api.errors``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from knitcanvas.api.garments import compute_layout
from knitcanvas.dependencies import get_dimension_calculator, get_manager, get_store
from knitcanvas.engine.audit import audit_layout
from knitcanvas.engine.bounds import Bounds
from knitcanvas.engine.garment import DimensionCalculator
from knitcanvas.engine.motif_manager import MotifManager
from knitcanvas.engine.session import MotifSession, SessionStore
from knitcanvas.models.requests import (
    AddMotifRequest,
    BoundsModel,
    CommitRequest,
    CreateSessionRequest,
    DragRequest,
    GarmentLayoutRequest,
    GaugeChangeRequest,
    SelectRequest,
)
from knitcanvas.models.responses import (
    AuditResponse,
    CommitResponse,
    DragResponse,
    MotifOut,
    SessionResponse,
)

router = APIRouter(prefix="/sessions")
logger = logging.getLogger(__name__)


def _session_response(session: MotifSession) -> SessionResponse:
    snap = session.snapshot().to_dict()
    return SessionResponse(id=session.id, max_motifs=session.manager.max_motifs, **snap)


def _get_session(session_id: str, store: SessionStore) -> MotifSession:
    session = store.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return session


def _to_bounds(model: BoundsModel) -> Bounds:
    try:
        return Bounds(**model.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


def _explicit_size(width: float | None, height: float | None) -> tuple[float, float] | None:
    if width is None and height is None:
        return None
    if width is None or height is None:
        raise HTTPException(status_code=422, detail="motif_width and motif_height go together")
    return (width, height)


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(
    req: CreateSessionRequest,
    store: SessionStore = Depends(get_store),
    manager: MotifManager = Depends(get_manager),
    calculator: DimensionCalculator = Depends(get_dimension_calculator),
) -> SessionResponse:
    motif_size = _explicit_size(req.motif_width, req.motif_height)
    if req.bounds is not None:
        bounds = _to_bounds(req.bounds)
    else:
        layout, garment_size = compute_layout(req.garment or GarmentLayoutRequest(), calculator)
        bounds = layout.bounds
        motif_size = motif_size or garment_size

    session = MotifSession(manager, bounds, motif_size)
    store.add(session)
    logger.info("Session %s created with bounds %s", session.id, bounds.to_dict())
    return _session_response(session)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, store: SessionStore = Depends(get_store)) -> SessionResponse:
    return _session_response(_get_session(session_id, store))


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, store: SessionStore = Depends(get_store)) -> None:
    if not store.delete(session_id):
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")


@router.post("/{session_id}/motifs", response_model=SessionResponse, status_code=201)
async def add_motif(
    session_id: str,
    req: AddMotifRequest,
    store: SessionStore = Depends(get_store),
) -> SessionResponse:
    session = _get_session(session_id, store)
    await session.add_motif(req.image, req.fallback_image)
    return _session_response(session)


@router.post("/{session_id}/motifs/{motif_id}/duplicate", response_model=SessionResponse, status_code=201)
async def duplicate_motif(
    session_id: str,
    motif_id: str,
    store: SessionStore = Depends(get_store),
) -> SessionResponse:
    session = _get_session(session_id, store)
    session.duplicate(motif_id)
    return _session_response(session)


@router.delete("/{session_id}/motifs/{motif_id}", response_model=SessionResponse)
async def delete_motif(
    session_id: str,
    motif_id: str,
    store: SessionStore = Depends(get_store),
) -> SessionResponse:
    session = _get_session(session_id, store)
    session.delete(motif_id)
    return _session_response(session)


@router.post("/{session_id}/selection", response_model=SessionResponse)
async def select_motif(
    session_id: str,
    req: SelectRequest,
    store: SessionStore = Depends(get_store),
) -> SessionResponse:
    session = _get_session(session_id, store)
    session.select(req.motif_id)
    return _session_response(session)


@router.delete("/{session_id}/selection/motif", response_model=SessionResponse)
async def delete_selected(session_id: str, store: SessionStore = Depends(get_store)) -> SessionResponse:
    session = _get_session(session_id, store)
    session.delete_selected()
    return _session_response(session)


@router.post("/{session_id}/motifs/{motif_id}/drag", response_model=DragResponse)
async def drag_motif(
    session_id: str,
    motif_id: str,
    req: DragRequest,
    store: SessionStore = Depends(get_store),
) -> DragResponse:
    session = _get_session(session_id, store)
    x, y = session.drag_move(motif_id, req.x, req.y)
    return DragResponse(x=x, y=y)


@router.post("/{session_id}/motifs/{motif_id}/commit", response_model=CommitResponse)
async def commit_motif(
    session_id: str,
    motif_id: str,
    req: CommitRequest,
    store: SessionStore = Depends(get_store),
) -> CommitResponse:
    session = _get_session(session_id, store)
    result = session.commit_transform(motif_id, req.x, req.y, req.scale_x, req.scale_y, req.rotation)
    return CommitResponse(
        outcome=result.outcome.value,
        motif=MotifOut(**result.motif.to_dict()),
        session=_session_response(session),
    )


@router.post("/{session_id}/gauge", response_model=SessionResponse)
async def change_gauge(
    session_id: str,
    req: GaugeChangeRequest,
    store: SessionStore = Depends(get_store),
    calculator: DimensionCalculator = Depends(get_dimension_calculator),
) -> SessionResponse:
    session = _get_session(session_id, store)
    motif_size = _explicit_size(req.motif_width, req.motif_height)
    bounds = session.bounds
    if req.garment is not None:
        layout, garment_size = compute_layout(req.garment, calculator)
        bounds = layout.bounds
        motif_size = motif_size or garment_size
    if req.bounds is not None:
        bounds = _to_bounds(req.bounds)
    if motif_size is None:
        raise HTTPException(
            status_code=422,
            detail="A motif size is required: pass motif_width/motif_height or a garment with gauge and chart size",
        )

    session.apply_gauge(bounds, motif_size)
    return _session_response(session)


@router.get("/{session_id}/audit", response_model=AuditResponse)
async def audit_session(session_id: str, store: SessionStore = Depends(get_store)) -> AuditResponse:
    session = _get_session(session_id, store)
    audit = audit_layout(session.motifs, session.bounds, session.manager.config.collision_padding)
    return AuditResponse(**audit.to_dict())
