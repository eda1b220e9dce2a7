"""
HTTP Endpoints

- GET /          學生頁面（player.html）
- GET /host      老師頁面（host.html）
- GET /health    健康檢查
- GET /api/state 目前回合狀態（老師頁面重新整理後用來還原網格）
"""
from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse
from pathlib import Path

from schemas import StateSnapshot

router = APIRouter(tags=["pages"])


def _page(request: Request, name: str) -> FileResponse:
    path = Path(request.app.state.settings.static_dir) / name
    if not path.is_file():
        raise HTTPException(status_code=404, detail=f"{name} not found")
    return FileResponse(path)


@router.get("/")
def player_page(request: Request):
    return _page(request, "player.html")


@router.get("/host")
def host_page(request: Request):
    return _page(request, "host.html")


@router.get("/health")
def health():
    return {"status": "healthy"}


@router.get("/api/state", response_model=StateSnapshot)
def get_state(request: Request):
    return request.app.state.session.snapshot()
