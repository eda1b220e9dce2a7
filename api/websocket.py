"""
WebSocket Gateway

職責：
1. 接收 client 的 JSON envelope，解析成 inbound tagged union
2. 在 SessionLock 內呼叫 ClassroomSession.dispatch
3. 把回傳的通知送給單一連線或所有連線

送出採 fire-and-forget：每條連線有自己的 queue 與 writer task，
dispatch 只負責 enqueue，送出失敗不影響任何 handler
"""
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError
from typing import Dict, Iterable
from uuid import uuid4
import asyncio
import json
import logging

from models import Audience, Notification
from schemas import Disconnect, Outbound, inbound_adapter
from core.exceptions import MalformedMessage

router = APIRouter(tags=["websocket"])
logger = logging.getLogger(__name__)


def parse_message(raw: str):
    """
    解析一則 inbound 訊息

    異常：
        MalformedMessage: 非 JSON、未知事件、或 payload 欄位錯誤
    """
    try:
        payload = json.loads(raw)
    except ValueError as e:
        raise MalformedMessage(f"Not JSON: {e}")

    try:
        return inbound_adapter.validate_python(payload)
    except ValidationError as e:
        raise MalformedMessage(f"Invalid message: {e.error_count()} error(s)") from e


class ConnectionManager:
    """目前所有開著的 WebSocket 連線"""

    def __init__(self):
        self._queues: Dict[str, asyncio.Queue] = {}
        self._writers: Dict[str, asyncio.Task] = {}

    def connect(self, connection_id: str, websocket: WebSocket) -> None:
        queue: asyncio.Queue = asyncio.Queue()
        self._queues[connection_id] = queue
        self._writers[connection_id] = asyncio.create_task(
            self._writer(connection_id, websocket, queue)
        )

    def disconnect(self, connection_id: str) -> None:
        self._queues.pop(connection_id, None)
        writer = self._writers.pop(connection_id, None)
        if writer is not None:
            writer.cancel()

    def __contains__(self, connection_id) -> bool:
        return connection_id in self._queues

    def __len__(self) -> int:
        return len(self._queues)

    def send(self, connection_id: str, message: dict) -> None:
        queue = self._queues.get(connection_id)
        if queue is None:
            logger.debug(f"Dropping message for closed connection {connection_id}")
            return
        queue.put_nowait(message)

    def broadcast(self, message: dict) -> None:
        for connection_id in list(self._queues):
            self.send(connection_id, message)

    def deliver(self, notifications: Iterable[Notification]) -> None:
        for notification in notifications:
            message = Outbound(event=notification.event, data=notification.data).model_dump()
            if notification.audience == Audience.ONE:
                self.send(notification.connection_id, message)
            else:
                self.broadcast(message)

    async def _writer(self, connection_id: str, websocket: WebSocket, queue: asyncio.Queue):
        while True:
            message = await queue.get()
            try:
                await websocket.send_json(message)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning(f"Failed to send to {connection_id}: {e}", exc_info=True)
                # 不再有 writer 消化這個 queue，停止接收新的通知
                if self._queues.get(connection_id) is queue:
                    self._queues.pop(connection_id)
                return


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """
    單一 WebSocket 入口（老師與學生共用）

    流程：
    1. 指派連線 ID 並註冊 writer
    2. 迴圈讀取訊息 -> 解析 -> 在 lock 內 dispatch -> enqueue 通知
    3. 斷線時移除連線，並以 Disconnect 事件通知其他人
    """
    session = websocket.app.state.session
    lock = websocket.app.state.session_lock
    manager = websocket.app.state.connections

    await websocket.accept()
    connection_id = uuid4().hex
    manager.connect(connection_id, websocket)
    logger.info(f"Connection opened: {connection_id}")

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = parse_message(raw)
            except MalformedMessage as e:
                logger.warning(f"Ignoring message from {connection_id}: {e}")
                continue

            async with lock:
                manager.deliver(session.dispatch(connection_id, message))

    except WebSocketDisconnect:
        logger.info(f"Connection closed: {connection_id}")
    finally:
        manager.disconnect(connection_id)
        async with lock:
            manager.deliver(session.dispatch(connection_id, Disconnect()))
