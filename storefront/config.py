"""Environment configuration."""
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from storefront.errors import ConfigError

# Load .env from the working directory if present; real env vars win
load_dotenv(override=False)

SESSION_BACKEND_FILE = "file"
SESSION_BACKEND_REDIS = "redis"

DEFAULT_STATE_PATH = Path.home() / ".storefront" / "state.json"


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_key: str
    session_backend: str = SESSION_BACKEND_FILE
    state_path: Path = DEFAULT_STATE_PATH
    redis_url: str = ""
    redis_token: str = ""
    log_level: str = "INFO"

    def require_supabase(self) -> None:
        if not self.supabase_url or not self.supabase_key:
            raise ConfigError("SUPABASE_URL and SUPABASE_KEY must be set")

    def require_redis(self) -> None:
        if not self.redis_url or not self.redis_token:
            raise ConfigError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")


def get_settings() -> Settings:
    """Read settings from the environment (re-read on every call)."""
    state_path = os.environ.get("STOREFRONT_STATE_PATH")
    backend = os.environ.get("STOREFRONT_SESSION_BACKEND", SESSION_BACKEND_FILE).lower()
    if backend not in (SESSION_BACKEND_FILE, SESSION_BACKEND_REDIS):
        raise ConfigError(f"Unknown STOREFRONT_SESSION_BACKEND: {backend}")

    return Settings(
        supabase_url=os.environ.get("SUPABASE_URL", ""),
        supabase_key=os.environ.get("SUPABASE_KEY", ""),
        session_backend=backend,
        state_path=Path(state_path).expanduser() if state_path else DEFAULT_STATE_PATH,
        redis_url=os.environ.get("UPSTASH_REDIS_REST_URL", ""),
        redis_token=os.environ.get("UPSTASH_REDIS_REST_TOKEN", ""),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )
