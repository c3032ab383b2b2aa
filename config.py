"""Environment-driven settings for the CLI and the web app."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_DATA_DIR = Path("data")


@dataclass
class Settings:
    """Application settings, read from the environment at construction."""

    data_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("TRUCKLOG_DATA_DIR", DEFAULT_DATA_DIR))
    )
    owner: Optional[str] = field(
        default_factory=lambda: os.environ.get("TRUCKLOG_OWNER") or None
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("TRUCKLOG_LOG_LEVEL", "WARNING").upper()
    )
    secret_key: str = field(
        default_factory=lambda: os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")
    )
    web_port: int = field(
        default_factory=lambda: int(os.environ.get("TRUCKLOG_WEB_PORT", "5001"))
    )


def setup_logging(level: str) -> None:
    """Configure root logging once for a command line or server process."""
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
