"""
Round Manager：管理網格配置與搶答回合的狀態

職責：
1. 建立遊戲（替換整個網格）
2. 設定搶答模式（計算可搶答區 / 禁答區，開放搶答）
3. 重設回合（關閉搶答）

狀態機（buzzes_open）：
    CLOSED --set_mode--> OPEN --第一次搶答 或 reset--> CLOSED

不變量：
- set_mode 之後，active_zone 與 locked_zone 互斥，且聯集為 {1..total_seats}
- buzzes_open 是受理搶答的唯一閘門
"""
from typing import Optional, Set, Tuple
import logging

from models import GridLayout, RoundState, ZoneMode, PlayerState
from core.exceptions import InvalidTarget
from services.zone_service import compute_zones

logger = logging.getLogger(__name__)


class RoundManager:
    """目前唯一一個回合的權威狀態"""

    def __init__(self, layout: GridLayout = GridLayout()):
        self.layout = layout
        self.state = RoundState()

    @property
    def buzzes_open(self) -> bool:
        return self.state.buzzes_open

    def create_game(self, layout: GridLayout) -> None:
        """
        替換網格配置

        注意：
            - 可搶答區保留舊值（stale），直到下一次 set_mode
            - 老師端必須先 set_mode 才有意義地開放搶答（本元件不強制）
        """
        self.layout = layout
        logger.info(f"Game created: {layout.rows} rows x {layout.cols} cols")

    def set_mode(
        self,
        mode: ZoneMode,
        target: Optional[int] = None
    ) -> Tuple[Set[int], Set[int]]:
        """
        設定搶答模式並開放搶答

        流程：
        1. 驗證目標座號
        2. 透過 zone_service 計算可搶答區與禁答區
        3. 儲存模式與區域，buzzes_open = True

        參數：
            mode: ALL / CROSS / SQUARE
            target: 目標座號；None 表示全部座位

        返回：
            (active, locked) tuple

        異常：
            InvalidTarget: 非 ALL 模式下 target 不在 1..total_seats（狀態不變）
        """
        total = self.layout.total_seats
        if mode != ZoneMode.ALL and target is not None and not 1 <= target <= total:
            raise InvalidTarget(target)

        active, locked = compute_zones(mode, target, self.layout.rows, self.layout.cols)

        self.state.mode = mode
        self.state.active_zone = active
        self.state.locked_zone = locked
        self.state.buzzes_open = True

        logger.info(
            f"Mode set: {mode.value}, target={target}, "
            f"active={sorted(active)}"
        )
        return active, locked

    def reset(self) -> None:
        self.state.buzzes_open = False
        logger.info("Round reset")

    def close(self) -> None:
        self.state.buzzes_open = False

    def classify(self, seat: int) -> PlayerState:
        if seat in self.state.active_zone:
            return PlayerState.ACTIVE
        return PlayerState.LOCKED

    def snapshot(self) -> dict:
        return {
            "rows": self.layout.rows,
            "cols": self.layout.cols,
            "mode": self.state.mode.value,
            "active": sorted(self.state.active_zone),
            "locked": sorted(self.state.locked_zone),
            "buzzes_open": self.state.buzzes_open,
        }
