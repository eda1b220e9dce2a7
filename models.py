"""
領域模型

所有狀態都只存在記憶體中，沒有資料庫；這裡只定義資料結構，不包含任何狀態轉換邏輯
"""
import enum
from dataclasses import dataclass, field
from typing import Optional, Set


class ZoneMode(str, enum.Enum):
    """搶答範圍模式"""
    ALL = "all"
    CROSS = "cross"
    SQUARE = "square"


class PlayerState(str, enum.Enum):
    """學生端按鈕狀態"""
    ACTIVE = "active"
    LOCKED = "locked"
    STANDBY = "standby"


class Audience(str, enum.Enum):
    """通知對象"""
    ONE = "one"
    ALL = "all"


@dataclass(frozen=True)
class GridLayout:
    """教室座位網格，座號以 row-major 編號 1..rows*cols"""
    rows: int = 0
    cols: int = 0

    @property
    def total_seats(self) -> int:
        return self.rows * self.cols


@dataclass
class RoundState:
    mode: ZoneMode = ZoneMode.ALL
    active_zone: Set[int] = field(default_factory=set)
    locked_zone: Set[int] = field(default_factory=set)
    buzzes_open: bool = False


@dataclass(frozen=True)
class BuzzEvent:
    """一次被受理的搶答（不保存，交給 gateway 通知後即丟棄）"""
    seat: int
    valid: bool
    time: int


@dataclass(frozen=True)
class Notification:
    """
    一則待送出的通知

    audience=ONE 時只送給 connection_id；audience=ALL 時送給所有連線
    """
    event: str
    data: object = None
    audience: Audience = Audience.ALL
    connection_id: Optional[str] = None
