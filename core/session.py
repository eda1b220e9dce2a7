"""
Classroom Session：單一教室的完整狀態與事件分派

職責：
1. 持有網格、Session Registry、Round Manager、Buzz Arbiter
2. 對 inbound 訊息（tagged union）做單一、窮舉的 dispatch
3. 回傳需要送出的通知清單（不負責送出）

狀態轉換與送出通知分離：dispatch 是「舊狀態 + 事件 -> 新狀態 + 通知」，
不碰任何網路連線，所以可以直接做單元測試

注意：
- 一個 process 只有一個 session；呼叫端必須在 SessionLock 內呼叫 dispatch
"""
from typing import Callable, List, Optional
import logging
import time

from models import Audience, GridLayout, Notification, PlayerState
from schemas import (
    Buzz,
    BuzzLog,
    CreateGame,
    Disconnect,
    GridStateView,
    JoinGame,
    Message,
    Reset,
    SetMode,
    StateSnapshot,
)
from core.buzz_arbiter import BuzzArbiter
from core.exceptions import InvalidSeat, InvalidTarget
from core.round_state import RoundManager
from core.session_registry import SessionRegistry

logger = logging.getLogger(__name__)

INVALID_SEAT_MESSAGE = "無效的座號"


def now_ms() -> int:
    return int(time.time() * 1000)


def to_one(connection_id: str, event: str, data=None) -> Notification:
    return Notification(event=event, data=data, audience=Audience.ONE, connection_id=connection_id)


def to_all(event: str, data=None) -> Notification:
    return Notification(event=event, data=data, audience=Audience.ALL)


class ClassroomSession:

    def __init__(self, clock: Callable[[], int] = now_ms):
        self.clock = clock
        self.layout = GridLayout()
        self.registry = SessionRegistry(self.layout)
        self.rounds = RoundManager(self.layout)
        self.arbiter = BuzzArbiter(self.registry, self.rounds)

    def dispatch(self, connection_id: str, message: Message) -> List[Notification]:
        """
        處理一則 inbound 訊息

        參數：
            connection_id: 發送者的連線 ID
            message: CreateGame / SetMode / Reset / JoinGame / Buzz / Disconnect

        返回：
            依序送出的通知清單（可能為空）
        """
        if isinstance(message, CreateGame):
            return self.create_game(GridLayout(rows=message.data.rows, cols=message.data.cols))
        elif isinstance(message, SetMode):
            return self.set_mode(connection_id, message)
        elif isinstance(message, Reset):
            return self.reset()
        elif isinstance(message, JoinGame):
            return self.join(connection_id, message.data)
        elif isinstance(message, Buzz):
            return self.buzz(connection_id)
        elif isinstance(message, Disconnect):
            return self.disconnect(connection_id)
        raise TypeError(f"Unhandled message type: {type(message).__name__}")

    # ============ 老師端 ============

    def create_game(self, layout: GridLayout) -> List[Notification]:
        """替換網格並清空所有玩家（學生必須重新加入）"""
        self.layout = layout
        self.registry.layout = layout
        self.rounds.create_game(layout)
        self.registry.reset_all()
        return []

    def set_mode(self, connection_id: str, message: SetMode) -> List[Notification]:
        """
        設定模式後對每位玩家做完整重新同步（不是 diff），
        並只把整體網格狀態回給發出指令的老師
        """
        try:
            active, locked = self.rounds.set_mode(message.data.mode, message.data.target)
        except InvalidTarget as e:
            logger.warning(f"Ignoring setMode from {connection_id}: {e}")
            return []

        notifications = [
            to_one(player_id, "player:setState", self.rounds.classify(seat).value)
            for player_id, seat in self.registry.items()
        ]
        view = GridStateView(active=sorted(active), locked=sorted(locked))
        notifications.append(to_one(connection_id, "host:updateGridState", view.model_dump()))
        return notifications

    def reset(self) -> List[Notification]:
        self.rounds.reset()
        return [to_all("player:setState", PlayerState.STANDBY.value)]

    # ============ 學生端 ============

    def join(self, connection_id: str, seat_number) -> List[Notification]:
        try:
            seat = self.registry.join(connection_id, seat_number)
        except InvalidSeat as e:
            logger.warning(f"Rejected join from {connection_id}: {e}")
            return [to_one(connection_id, "player:error", INVALID_SEAT_MESSAGE)]
        return [to_all("host:playerJoined", seat)]

    def buzz(self, connection_id: str) -> List[Notification]:
        event = self.arbiter.buzz(connection_id, self.clock())
        if event is None:
            return []
        log = BuzzLog(seat=event.seat, valid=event.valid, time=event.time)
        return [to_all("host:logBuzz", log.model_dump())]

    def disconnect(self, connection_id: str) -> List[Notification]:
        seat = self.registry.leave(connection_id)
        if seat is None:
            return []
        return [to_all("host:playerLeft", seat)]

    # ============ 查詢 ============

    def seat_of(self, connection_id: str) -> Optional[int]:
        return self.registry.seat_of(connection_id)

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(players=self.registry.seats(), **self.rounds.snapshot())
