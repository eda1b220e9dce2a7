"""
Session Registry：管理「連線 -> 座號」的對應

職責：
1. 學生加入（驗證座號範圍）
2. 學生離線
3. 建立新遊戲時清空所有玩家

注意：
- 不檢查座號唯一性：兩條連線可以宣告同一個座號，後寫入者覆蓋前者的紀錄，
  但前一條連線不會被踢除（目前行為，尚待產品決定）
"""
from typing import Dict, Iterator, Optional, Tuple
import logging
import re

from models import GridLayout
from core.exceptions import InvalidSeat

logger = logging.getLogger(__name__)


def parse_seat(value) -> int:
    """
    將學生送來的座號（int 或數字字串）轉成 int

    異常：
        InvalidSeat: 非數字、bool、或空字串
    """
    if isinstance(value, bool):
        raise InvalidSeat(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if re.fullmatch(r"[+-]?\d+", text):
            try:
                return int(text)
            except ValueError as e:
                # 超過 int 字串轉換的位數上限
                raise InvalidSeat(value) from e
    raise InvalidSeat(value)


class SessionRegistry:
    """連線與座號的對應表"""

    def __init__(self, layout: GridLayout = GridLayout()):
        self.layout = layout
        self._seats: Dict[str, int] = {}

    def join(self, connection_id: str, seat_number) -> int:
        """
        學生以座號加入

        參數：
            connection_id: 連線 ID
            seat_number: 座號（int 或數字字串）

        返回：
            登記的座號

        異常：
            InvalidSeat: 座號不在 1..rows*cols 之間（登記表不變）
        """
        seat = parse_seat(seat_number)
        if not 1 <= seat <= self.layout.total_seats:
            raise InvalidSeat(seat_number)

        previous = self._seats.get(connection_id)
        self._seats[connection_id] = seat

        if previous is not None and previous != seat:
            logger.info(f"Connection {connection_id} moved from seat {previous} to seat {seat}")
        else:
            logger.info(f"Connection {connection_id} joined as seat {seat}")
        return seat

    def leave(self, connection_id: str) -> Optional[int]:
        """
        移除連線的座號

        返回：
            空出來的座號；若該連線從未加入（或遊戲已重建）則為 None
        """
        seat = self._seats.pop(connection_id, None)
        if seat is not None:
            logger.info(f"Seat {seat} left (connection {connection_id})")
        return seat

    def reset_all(self) -> None:
        """清空所有玩家（建立新遊戲時使用，不通知學生）"""
        count = len(self._seats)
        self._seats.clear()
        logger.info(f"Registry cleared ({count} players removed)")

    def seat_of(self, connection_id: str) -> Optional[int]:
        return self._seats.get(connection_id)

    def items(self) -> Iterator[Tuple[str, int]]:
        return iter(list(self._seats.items()))

    def seats(self):
        return sorted(self._seats.values())

    def __contains__(self, connection_id) -> bool:
        return connection_id in self._seats

    def __len__(self) -> int:
        return len(self._seats)
