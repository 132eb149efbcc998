from fastapi import APIRouter, Depends, Request, WebSocket, WebSocketDisconnect
from loguru import logger
from pydantic import ValidationError
from sqlalchemy.orm import Session

from fittrack.api.workouts import workout_read
from fittrack.core.time_utils import seconds_to_hhmmss
from fittrack.db import get_db
from fittrack.schemas.session import (
    AuthorizationUpdate,
    GeoPointRead,
    GeoSampleIn,
    SampleAck,
    SampleBatch,
    SessionRead,
    SessionStart,
)
from fittrack.schemas.workout import WorkoutRead
from fittrack.services.recorder import save_tracked_session
from fittrack.services.tracking import SessionSlot, TrackingSession

router = APIRouter(prefix="/sessions", tags=["sessions"])


def get_session_slot(request: Request) -> SessionSlot:
    """The app owns the single tracking slot; routes borrow it."""
    return request.app.state.tracking


def _session_read(session: TrackingSession) -> SessionRead:
    snap = session.snapshot()
    return SessionRead(
        state=snap.state,
        name=session.name,
        template_id=session.template_id,
        distance_km=snap.distance_km,
        elapsed_seconds=snap.elapsed_seconds,
        paused_seconds=snap.paused_seconds,
        duration=seconds_to_hhmmss(snap.elapsed_seconds),
        points_count=len(snap.points),
        error=snap.error,
    )


def _save_and_release(db: Session, slot: SessionSlot, session: TrackingSession) -> WorkoutRead:
    # On PersistenceError the completed session stays in the slot for a retry
    workout = save_tracked_session(db, session)
    slot.clear()
    return workout_read(db, workout)


@router.post("/", response_model=SessionRead)
def start_session(payload: SessionStart, slot: SessionSlot = Depends(get_session_slot)):
    session = slot.begin(name=payload.name, template_id=payload.template_id)
    return _session_read(session)


@router.get("/current", response_model=SessionRead)
def get_current_session(slot: SessionSlot = Depends(get_session_slot)):
    return _session_read(slot.require())


@router.get("/current/route", response_model=list[GeoPointRead])
def get_current_route(slot: SessionSlot = Depends(get_session_slot)):
    session = slot.require()
    points = session.route.points if session.route else ()
    return [
        GeoPointRead(
            sequence=p.sequence,
            latitude=p.latitude,
            longitude=p.longitude,
            elevation=p.elevation,
            timestamp=p.timestamp,
        )
        for p in points
    ]


@router.post("/current/samples", response_model=SampleAck)
def post_samples(payload: SampleBatch, slot: SessionSlot = Depends(get_session_slot)):
    session = slot.require()
    accepted = sum(1 for s in payload.samples if session.ingest(s.to_sample()))
    return SampleAck(accepted=accepted, distance_km=session.distance_km)


@router.websocket("/current/stream")
async def stream_samples(websocket: WebSocket):
    """One JSON sample per message; each gets an ack with the live distance."""
    slot: SessionSlot = websocket.app.state.tracking
    await websocket.accept()
    try:
        while True:
            payload = await websocket.receive_text()
            try:
                # malformed JSON surfaces as a ValidationError too
                sample = GeoSampleIn.model_validate_json(payload).to_sample()
            except ValidationError as exc:
                await websocket.send_json({"accepted": False, "error": str(exc)})
                continue
            session = slot.current
            accepted = session.ingest(sample) if session is not None else False
            await websocket.send_json(
                {"accepted": accepted, "distance_km": session.distance_km if session else 0.0}
            )
    except WebSocketDisconnect:
        logger.debug("Location stream disconnected")


@router.post("/current/pause", response_model=SessionRead)
def pause_session(slot: SessionSlot = Depends(get_session_slot)):
    session = slot.require()
    session.pause()
    return _session_read(session)


@router.post("/current/resume", response_model=SessionRead)
def resume_session(slot: SessionSlot = Depends(get_session_slot)):
    session = slot.require()
    session.resume()
    return _session_read(session)


@router.post("/current/stop", response_model=WorkoutRead)
def stop_session(slot: SessionSlot = Depends(get_session_slot), db: Session = Depends(get_db)):
    session = slot.require()
    session.stop()
    return _save_and_release(db, slot, session)


@router.post("/current/save", response_model=WorkoutRead)
def save_session(slot: SessionSlot = Depends(get_session_slot), db: Session = Depends(get_db)):
    """Save a session that completed without being stored (failed save, lost authorization)."""
    return _save_and_release(db, slot, slot.require())


@router.post("/current/authorization", response_model=SessionRead)
def update_authorization(payload: AuthorizationUpdate, slot: SessionSlot = Depends(get_session_slot)):
    session = slot.require()
    session.authorization_changed(payload.status)
    return _session_read(session)


@router.delete("/current")
def discard_session(slot: SessionSlot = Depends(get_session_slot)):
    slot.require()
    slot.clear()
    logger.info("Tracking session discarded")
    return {"discarded": True}
