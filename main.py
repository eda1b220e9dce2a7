from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from pathlib import Path
import logging

from config import Settings, get_settings
from logging_config import setup_logging
from core.locks import SessionLock
from core.session import ClassroomSession
from api import pages, websocket

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Classroom Buzzer API",
        description="Realtime buzzer coordinator for classroom seat grids",
        version="1.0.0"
    )

    # 單一教室：整個 process 共用一個 session 與一把鎖
    app.state.settings = settings
    app.state.session = ClassroomSession()
    app.state.session_lock = SessionLock()
    app.state.connections = websocket.ConnectionManager()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(pages.router)
    app.include_router(websocket.router)

    # 其他路徑由部署根目錄提供靜態檔案（必須最後掛載）
    if Path(settings.static_dir).is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir), name="static")
    else:
        logger.warning(f"Static directory {settings.static_dir} not found, serving API only")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info(f"Teacher console: http://localhost:{settings.port}/host")
    logger.info(f"Student page: http://localhost:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)
