"""WebSocket handlers feeding held keys in and streaming state out."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from snake_arcade.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _parse_keys(raw: str) -> list[str] | None:
    """Extract the ``keys`` list from a client message, or None if malformed."""
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(msg, dict):
        return None
    keys = msg.get("keys")
    if not isinstance(keys, list) or not all(isinstance(k, str) for k in keys):
        return None
    return keys


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Controller WebSocket: send held keys, receive state after each tick."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.controllers.append(websocket)
    logger.info("Controller connected to session %s.", session_id)

    # Send initial state snapshot so the client gets immediate feedback.
    async with session.lock:
        state = session.game.get_state()
    await websocket.send_text(json.dumps(state, separators=(",", ":")))

    try:
        while True:
            keys = _parse_keys(await websocket.receive_text())
            if keys is None:
                continue
            async with session.lock:
                manager.set_keys(session, keys)
    except WebSocketDisconnect:
        logger.info("Controller disconnected from session %s.", session_id)
    finally:
        if websocket in session.controllers:
            session.controllers.remove(websocket)
        if not session.controllers:
            session.held_keys = frozenset()


@ws_router.websocket("/sessions/{session_id}/spectate")
async def spectate(websocket: WebSocket, session_id: str) -> None:
    """Spectator WebSocket: receive-only game state stream."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    session.spectators.append(websocket)
    logger.info("Spectator connected to session %s.", session_id)

    async with session.lock:
        state = session.game.get_state()
    await websocket.send_text(json.dumps(state, separators=(",", ":")))

    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Spectator disconnected from session %s.", session_id)
    finally:
        if websocket in session.spectators:
            session.spectators.remove(websocket)
