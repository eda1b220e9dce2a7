"""
並發控制工具

所有 session 狀態的修改都必須經過同一把 asyncio.Lock，
讓「第一個搶答者勝出」不依賴執行環境剛好是單執行緒

使用方式：
    async with session_lock:
        notifications = session.dispatch(connection_id, message)
        manager.deliver(notifications)

注意：
    - 臨界區內不要 await 網路 I/O；送出通知只做 enqueue
"""
import asyncio


class SessionLock:
    """包住單一 session 的互斥鎖"""

    def __init__(self):
        self._lock = asyncio.Lock()

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    async def __aenter__(self):
        await self._lock.acquire()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self._lock.release()
        return False
