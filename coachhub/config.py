from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the coaching backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("COACHHUB_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("COACHHUB_DB_PATH") or (self.data_root / "coachhub.db")
        ).expanduser()
        self.upload_dir: Path = Path(
            os.environ.get("COACHHUB_UPLOAD_DIR") or (self.data_root / "uploads")
        ).expanduser()
        # In production you MUST set COACHHUB_JWT_SECRET. The dev secret keeps local runs easy.
        self.jwt_secret: str = os.environ.get("COACHHUB_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("COACHHUB_TOKEN_TTL_DAYS") or "7")
        self.cookie_secure: bool = (os.environ.get("COACHHUB_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}
        self.max_upload_mb: int = int(os.environ.get("COACHHUB_MAX_UPLOAD_MB") or "10")

        # ---- Check-in cadence ----
        self.checkin_cadence_days: float = float(
            os.environ.get("COACHHUB_CHECKIN_CADENCE_DAYS") or "7"
        )
        self.checkin_grace_hours: float = float(
            os.environ.get("COACHHUB_CHECKIN_GRACE_HOURS") or "0"
        )

        # ---- Versioned records ----
        self.version_retry_limit: int = int(
            os.environ.get("COACHHUB_VERSION_RETRY_LIMIT") or "3"
        )

        cors = os.environ.get("COACHHUB_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
