"""REST API route handlers for session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from snake_arcade.server.models import CreateSessionRequest, SessionSummary

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request):
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new waiting session."""
    manager = _get_manager(request)
    client_ip = request.client.host if request.client else "unknown"
    try:
        session = manager.create_session(
            **body.model_dump(), client_ip=client_ip,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List waiting and active sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the current game state."""
    session = _get_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    async with session.lock:
        state = session.game.get_state()
    return {
        "session_id": session.session_id,
        "status": session.status.value,
        "frame_rate": session.frame_rate,
        "tick_interval_ms": session.tick_interval_ms,
        "controllers": len(session.controllers),
        "spectators": len(session.spectators),
        "state": state,
    }


@router.post("/{session_id}/start", status_code=200)
async def start_session(session_id: str, request: Request) -> dict:
    """Start the session's frame loop."""
    manager = _get_manager(request)
    try:
        manager.start_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"status": "started", "session_id": session_id}


@router.post("/{session_id}/stop", status_code=200)
async def stop_session(session_id: str, request: Request) -> dict:
    """Stop the session and disconnect its sockets."""
    manager = _get_manager(request)
    try:
        await manager.stop_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"status": "stopped", "session_id": session_id}
