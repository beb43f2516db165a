"""Application configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List
import os

from secreport import __version__

# DB lives next to the backend package unless overridden
DEFAULT_SQLITE_PATH = Path(__file__).parent.parent.parent / "reports.db"


def _split_origins(raw: str) -> List[str]:
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]


@dataclass(frozen=True)
class Settings:
    app_name: str = "Security Report Service"
    version: str = __version__
    api_prefix: str = "/api"
    host: str = "0.0.0.0"
    port: int = 3001
    sqlite_path: str = str(DEFAULT_SQLITE_PATH)
    static_dir: str = "dist"
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3001")),
            sqlite_path=os.getenv("REPORTS_SQLITE_PATH") or str(DEFAULT_SQLITE_PATH),
            static_dir=os.getenv("REPORTS_STATIC_DIR", "dist"),
            cors_allow_origins=_split_origins(os.getenv("REPORTS_CORS_ORIGINS", "*")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
