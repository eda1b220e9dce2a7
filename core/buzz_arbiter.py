"""
Buzz Arbiter：決定誰搶到這一回合

規則：
- 只在 buzzes_open 時受理
- 沒有座號的連線按鈴直接忽略
- 第一個被受理的搶答（不論是否在可搶答區）立刻關閉回合：每回合最多一位勝出者
- 關閉後的搶答直接丟棄，不排隊

「檢查 buzzes_open → 判定 → 關閉」必須在同一個臨界區內完成，
由 core.locks.SessionLock 保證
"""
from typing import Optional
import logging

from models import BuzzEvent
from core.exceptions import RoundClosed, UnregisteredBuzzer
from core.round_state import RoundManager
from core.session_registry import SessionRegistry

logger = logging.getLogger(__name__)


class BuzzArbiter:

    def __init__(self, registry: SessionRegistry, rounds: RoundManager):
        self.registry = registry
        self.rounds = rounds

    def arbitrate(self, connection_id: str, timestamp: int) -> BuzzEvent:
        """
        判定一次搶答

        返回：
            BuzzEvent（valid = 座號是否在可搶答區）

        異常：
            RoundClosed: 搶答未開放
            UnregisteredBuzzer: 連線沒有座號
        """
        if not self.rounds.buzzes_open:
            raise RoundClosed("Buzzing is closed")

        seat = self.registry.seat_of(connection_id)
        if seat is None:
            raise UnregisteredBuzzer(connection_id)

        valid = seat in self.rounds.state.active_zone
        # 違規搶答也會用掉本回合唯一的名額
        self.rounds.close()

        logger.info(f"Buzz accepted: seat {seat} ({'valid' if valid else 'invalid'})")
        return BuzzEvent(seat=seat, valid=valid, time=timestamp)

    def buzz(self, connection_id: str, timestamp: int) -> Optional[BuzzEvent]:
        """同 arbitrate，但未開放或未加入時回傳 None（靜默丟棄）"""
        try:
            return self.arbitrate(connection_id, timestamp)
        except (RoundClosed, UnregisteredBuzzer) as e:
            logger.debug(f"Buzz dropped from {connection_id}: {e}")
            return None
