from enum import Enum

from pydantic_settings import BaseSettings


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    env: Env = Env.local
    db_url: str = "sqlite+aiosqlite:///ohmycook.db"
    overview_model: str = "gpt-4o-mini"
    detail_model: str = "gpt-4o-mini"
    chat_model: str = "gpt-4o"
    vision_model: str = "gpt-4o"
    transcription_model: str = "whisper-1"
    recipe_count: int = 5
    search_limit: int = 20
    google_api_key: str | None = None
    google_search_cx: str | None = None
    request_timeout: float = 60 * 2
    log_level: str = "INFO"
