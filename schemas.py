"""
WebSocket 訊息格式

所有訊息都是 JSON envelope：{"event": "<名稱>", "data": <payload>}
事件名稱沿用 host:* / player:* 的命名

Inbound 訊息是以 event 欄位區分的 tagged union，dispatch 只需要對這個 union 做窮舉
"""
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, NonNegativeInt, TypeAdapter, field_validator

from models import ZoneMode


# ============ Payloads ============

class LayoutData(BaseModel):
    rows: NonNegativeInt
    cols: NonNegativeInt


class SetModeData(BaseModel):
    mode: ZoneMode
    target: Optional[int] = None

    @field_validator("target", mode="before")
    @classmethod
    def blank_target_means_all(cls, v):
        # 0 / 空字串視同沒有指定目標（= 全部座位）
        if v in (0, "", None):
            return None
        return v


class GridStateView(BaseModel):
    active: List[int]
    locked: List[int]


class BuzzLog(BaseModel):
    seat: int
    valid: bool
    time: int


class StateSnapshot(BaseModel):
    rows: int
    cols: int
    mode: ZoneMode
    active: List[int]
    locked: List[int]
    buzzes_open: bool
    players: List[int]


# ============ Inbound（老師端） ============

class CreateGame(BaseModel):
    event: Literal["host:createGame"]
    data: LayoutData


class SetMode(BaseModel):
    event: Literal["host:setMode"]
    data: SetModeData


class Reset(BaseModel):
    event: Literal["host:reset"]
    data: Optional[object] = None


# ============ Inbound（學生端） ============

class JoinGame(BaseModel):
    event: Literal["player:joinGame"]
    # 座號可以是數字或字串，範圍驗證交給 SessionRegistry
    data: Any = None


class Buzz(BaseModel):
    event: Literal["player:buzz"]
    data: Optional[object] = None


# ============ 連線層事件（不接受從 client 送來） ============

class Disconnect(BaseModel):
    event: Literal["disconnect"] = "disconnect"


InboundMessage = Annotated[
    Union[CreateGame, SetMode, Reset, JoinGame, Buzz],
    Field(discriminator="event")
]

Message = Union[CreateGame, SetMode, Reset, JoinGame, Buzz, Disconnect]

inbound_adapter = TypeAdapter(InboundMessage)


class Outbound(BaseModel):
    event: str
    data: Optional[object] = None
