"""
Logging 設定

整個服務共用 root logger，各模組透過 logging.getLogger(__name__) 取得自己的 logger
"""
import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """
    設定 root logger 輸出到 stdout

    參數：
        level: logging 等級名稱（例如 "DEBUG", "INFO"）

    注意：
        - 重複呼叫（例如 uvicorn reload）會先清除既有 handler，避免重複輸出
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    if root.hasHandlers():
        root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    ))
    root.addHandler(handler)

    logging.getLogger(__name__).info(f"Logging initialized at level {level.upper()}")
