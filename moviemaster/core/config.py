"""
Environment-driven settings, read once at startup.

A local .env file is honoured through python-dotenv; real environment
variables win over it.
"""
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

EAGER = "eager"
LAZY = "lazy"
CONNECTION_MODES = (EAGER, LAZY)


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default


def _parse_origins(raw: str) -> List[str]:
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


@dataclass(frozen=True)
class Settings:
    mongo_uri: str = "mongodb://localhost:27017"
    db_name: str = "moviemaster"
    movies_collection: str = "movies"
    host: str = "0.0.0.0"
    port: int = 3000
    connection_mode: str = EAGER
    connect_timeout_ms: int = 5000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    def __post_init__(self):
        if self.connection_mode not in CONNECTION_MODES:
            raise ValueError(
                f"CONNECTION_MODE must be one of {CONNECTION_MODES}, got {self.connection_mode!r}"
            )

    @property
    def lazy_connect(self) -> bool:
        return self.connection_mode == LAZY

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            mongo_uri=os.getenv("MONGO_URI", cls.mongo_uri),
            db_name=os.getenv("DB_NAME", cls.db_name),
            movies_collection=os.getenv("MOVIES_COLLECTION", cls.movies_collection),
            host=os.getenv("HOST", cls.host),
            port=_env_int("PORT", cls.port),
            connection_mode=os.getenv("CONNECTION_MODE", EAGER).strip().lower(),
            connect_timeout_ms=_env_int("MONGO_CONNECT_TIMEOUT_MS", cls.connect_timeout_ms),
            cors_origins=_parse_origins(os.getenv("CORS_ORIGINS", "*")),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
        )
