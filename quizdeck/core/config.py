import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    mongodb_uri: str = "mongodb://localhost:27017/quizdb"
    default_db_name: str = "quizdb"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    frontend_dir: str = "www"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (and `.env`, if present)."""
        return cls(
            mongodb_uri=os.getenv("MONGODB_URI", cls.mongodb_uri),
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", cls.port)),
            log_level=os.getenv("LOG_LEVEL", cls.log_level).upper(),
            frontend_dir=os.getenv("FRONTEND_DIR", cls.frontend_dir),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
        )


settings = Settings.from_env()
