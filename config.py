import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Runtime configuration, read once from the environment (and .env)"""
    firebase_credentials_path: str = "./firebase.json"
    firebase_project_id: Optional[str] = None
    posts_collection: str = "posts"
    users_collection: str = "users"
    api_prefix: str = ""
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"
    auth_check_revoked: bool = True
    auth_clock_skew_seconds: int = 10

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS", "http://localhost:3000")
        return cls(
            firebase_credentials_path=os.getenv("FIREBASE_CREDENTIALS_PATH", "./firebase.json"),
            firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
            posts_collection=os.getenv("POSTS_COLLECTION", "posts"),
            users_collection=os.getenv("USERS_COLLECTION", "users"),
            api_prefix=os.getenv("API_PREFIX", "").rstrip("/"),
            cors_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            auth_check_revoked=_get_bool("AUTH_CHECK_REVOKED", True),
            auth_clock_skew_seconds=int(os.getenv("AUTH_CLOCK_SKEW_SECONDS", "10")),
        )


settings = Settings.from_env()
