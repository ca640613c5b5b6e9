"""Live request log stream over WebSocket.

Protocol (JSON text frames):

    client -> {"event": "join-logs", "data": {"projectId", "method", "status", "level"}}
    client -> {"event": "leave-logs"}
    client -> {"event": "ping"}
    server -> {"event": "joined-logs", "data": {"filters": {...}}}
    server -> {"event": "left-logs"}
    server -> {"event": "new-log", "data": <log>}
    server -> {"event": "error", "data": {"message": "..."}}

Joining again replaces the current filters.
"""

import asyncio
import json
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from src.oroya.core.exceptions import ValidationError
from src.oroya.core.logging import get_logger
from src.oroya.services.log_stream import LogBroadcaster, LogStreamFilter, Subscription

logger = get_logger(__name__)

router = APIRouter(tags=["logs"])


async def _pump(websocket: WebSocket, subscription: Subscription) -> None:
    """Forward queued logs to the socket until cancelled or the socket goes away."""
    try:
        while True:
            log = await subscription.get()
            await websocket.send_json(
                {"event": "new-log", "data": log.model_dump(mode="json", by_alias=True)}
            )
    except (WebSocketDisconnect, RuntimeError) as e:
        logger.debug("log_stream_send_stopped", reason=str(e))


class LogStreamSession:
    """One connected client and its (optional) active subscription."""

    def __init__(self, websocket: WebSocket, broadcaster: LogBroadcaster):
        self.websocket = websocket
        self.broadcaster = broadcaster
        self.subscription: Subscription | None = None
        self._pump_task: asyncio.Task[None] | None = None

    async def send(self, event: str, data: Any = None) -> None:
        message: dict[str, Any] = {"event": event}
        if data is not None:
            message["data"] = data
        await self.websocket.send_json(message)

    async def join(self, payload: Any) -> None:
        try:
            filters = LogStreamFilter.from_payload(payload if isinstance(payload, dict) else None)
        except ValidationError as e:
            await self.send("error", {"message": e.message})
            return
        await self.leave()
        self.subscription = self.broadcaster.subscribe(filters)
        self._pump_task = asyncio.create_task(_pump(self.websocket, self.subscription))
        logger.info("log_stream_joined", filters=filters.as_dict())
        await self.send("joined-logs", {"filters": filters.as_dict()})

    async def leave(self) -> None:
        if self._pump_task is not None:
            self._pump_task.cancel()
            await asyncio.gather(self._pump_task, return_exceptions=True)
            self._pump_task = None
        if self.subscription is not None:
            self.subscription.close()
            self.subscription = None

    async def handle(self, message: Any) -> None:
        event = message.get("event") if isinstance(message, dict) else None
        if event == "join-logs":
            await self.join(message.get("data"))
        elif event == "leave-logs":
            await self.leave()
            await self.send("left-logs")
        elif event == "ping":
            await self.send("pong")
        else:
            await self.send("error", {"message": f"Unknown event: {event}"})


@router.websocket("/ws/logs")
async def logs_stream(websocket: WebSocket) -> None:
    await websocket.accept()
    session = LogStreamSession(websocket, websocket.app.state.log_broadcaster)
    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                logger.debug("log_stream_disconnected", code=frame.get("code"))
                break
            raw = frame.get("text")
            if raw is None:
                await session.send("error", {"message": "Messages must be JSON text frames"})
                continue
            try:
                message = json.loads(raw)
            except ValueError:
                await session.send("error", {"message": "Messages must be JSON"})
                continue
            await session.handle(message)
    except WebSocketDisconnect:
        logger.debug("log_stream_disconnected")
    finally:
        await session.leave()
