"""
自定義異常類別

集中管理所有業務邏輯異常，方便 dispatch 層與 WebSocket 層統一處理
"""


class BuzzerException(Exception):
    """所有搶答系統異常的基類"""
    pass


# ============ 座位相關異常 ============

class InvalidSeat(BuzzerException):
    """座號不在 1..rows*cols 範圍內，或不是數字"""
    def __init__(self, seat):
        self.seat = seat
        super().__init__(f"Invalid seat {seat!r}")


class InvalidTarget(BuzzerException):
    """setMode 的目標座號超出目前網格"""
    def __init__(self, target):
        self.target = target
        super().__init__(f"Target seat {target!r} is outside the current layout")


# ============ 搶答相關異常（靜默丟棄） ============

class UnregisteredBuzzer(BuzzerException):
    """尚未加入（沒有座號）的連線按下搶答"""
    def __init__(self, connection_id):
        self.connection_id = connection_id
        super().__init__(f"Connection {connection_id} has no seat")


class RoundClosed(BuzzerException):
    """搶答尚未開放或本回合已被搶走"""
    pass


# ============ 訊息相關異常 ============

class MalformedMessage(BuzzerException):
    """無法解析的 WebSocket 訊息（非 JSON、未知事件、欄位錯誤）"""
    pass
