from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    port: int = 3000
    host: str = "0.0.0.0"
    # 部署根目錄：player.html、host.html 與其他靜態檔案都放在這裡
    static_dir: str = "public"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"


@lru_cache()
def get_settings():
    return Settings()
