from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the NutriTrack companion service."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("NUTRITRACK_DATA_ROOT") or data_root_default
        ).expanduser()
        # Flat key/value JSON file, the service-side counterpart of browser localStorage.
        self.store_path: Path = Path(
            os.environ.get("NUTRITRACK_STORE_PATH") or (self.data_root / "local_store.json")
        ).expanduser()

        self.api_base_url: str = os.environ.get(
            "NUTRITRACK_API_URL", "http://localhost:4000/api"
        )
        self.api_timeout: float = float(os.environ.get("NUTRITRACK_API_TIMEOUT") or "30")

        # Empty means the host's local timezone.
        self.timezone: str = (os.environ.get("NUTRITRACK_TZ") or "").strip()
        self.notify_auto_grant: bool = (
            os.environ.get("NUTRITRACK_NOTIFY_AUTO_GRANT") or "1"
        ).strip() in {"1", "true", "True"}
        self.outbox_size: int = int(os.environ.get("NUTRITRACK_OUTBOX_SIZE") or "100")
        self.summary_time: str = os.environ.get("NUTRITRACK_SUMMARY_TIME") or "21:00"

        self.host: str = os.environ.get("NUTRITRACK_HOST") or "127.0.0.1"
        self.port: int = int(os.environ.get("NUTRITRACK_PORT") or "8000")

        cors = os.environ.get("NUTRITRACK_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
