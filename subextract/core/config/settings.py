# File: subextract/core/config/settings.py

import os
import shutil
from pathlib import Path


class Settings:
    # --- Mounts ---
    # /files is read-only, /cache and /output are writable by this service.
    FILES_ROOT: Path = Path(os.getenv("FILES_ROOT", "/files"))
    CACHE_DIR: Path = Path(os.getenv("CACHE_DIR", "/cache"))
    OUTPUT_DIR: Path = Path(os.getenv("OUTPUT_DIR", "/output"))

    # --- Metadata Store ---
    META_CORE_URL: str = os.getenv("META_CORE_URL", "")

    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "localhost")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "subextract_db")

    @property
    def DATABASE_URL(self) -> str:
        explicit = os.getenv("DATABASE_URL")
        if explicit:
            return explicit

        if os.getenv("USE_POSTGRES", "false").lower() == "true":
            return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

        return f"sqlite:///{self.CACHE_DIR / 'subextract.db'}"

    # --- Remote File Access ---
    WEBDAV_URL: str = os.getenv("WEBDAV_URL", "")
    HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

    # --- External Tools ---
    FFMPEG_BINARY: str = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")

    # --- Extraction Limits ---
    EXTRACTION_TIMEOUT_SECONDS: float = float(os.getenv("EXTRACTION_TIMEOUT_SECONDS", "120"))
    MIN_SUBTITLE_BYTES: int = int(os.getenv("MIN_SUBTITLE_BYTES", "10"))
    # Upper bound for the subtitle_{i}_codec fallback scan.
    MAX_INDEXED_SUBTITLE_STREAMS: int = int(os.getenv("MAX_INDEXED_SUBTITLE_STREAMS", "20"))
    EXTRACTION_WORKERS: int = int(os.getenv("EXTRACTION_WORKERS", "1"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def ensure_dirs(self):
        """Creates the writable directories if they don't exist."""
        self.CACHE_DIR.mkdir(parents=True, exist_ok=True)
        self.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
