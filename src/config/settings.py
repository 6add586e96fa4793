# src/config/settings.py

"""Central configuration for the listro backend client."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_url(name: str, default: str) -> str:
    """Read a base URL from the environment, treating '' as unset."""
    return (os.getenv(name) or default).rstrip("/")


def _env_float(name: str) -> float | None:
    """Read an optional float (seconds) from the environment."""
    raw = os.getenv(name)
    if not raw:
        return None
    return float(raw)


class Settings:
    """Central configuration for the listro backend client."""

    # --- Backends ---
    PRIMARY_BACKEND_URL: str = _env_url(
        "NODE_BACKEND_URL", "http://localhost:8080"
    )
    AI_BACKEND_URL: str = _env_url(
        "PYTHON_BACKEND_URL", PRIMARY_BACKEND_URL
    )
    REQUEST_TIMEOUT: float | None = _env_float(
        "LISTRO_REQUEST_TIMEOUT"
    )                                   # None = wait indefinitely
    HEALTH_TIMEOUT: int = 10            # Seconds per backend probe
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
    }

    # --- Normalization ---
    ALL_CATEGORIES: str = "All Categories"
    PLACEHOLDER_VALUES: tuple[str, ...] = ("N/A", "null", "undefined")

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"

    # --- Backend registry (health checks) ---
    BACKENDS: list[dict[str, str]] = [
        {
            "id": "primary",
            "label": "Data / scraping backend",
            "setting": "PRIMARY_BACKEND_URL",
        },
        {
            "id": "ai",
            "label": "AI generation backend",
            "setting": "AI_BACKEND_URL",
        },
    ]


@dataclass(frozen=True)
class GatewayConfig:
    """Base URLs and transport options handed to a BackendGateway."""

    primary_base_url: str
    ai_base_url: str
    request_timeout: float | None = None

    @classmethod
    def from_settings(cls) -> "GatewayConfig":
        """Build a config from the process-wide Settings."""
        return cls(
            primary_base_url=Settings.PRIMARY_BACKEND_URL,
            ai_base_url=Settings.AI_BACKEND_URL,
            request_timeout=Settings.REQUEST_TIMEOUT,
        )


# Shared with collaborators that build their own primary-backend links
API_URL: str = Settings.PRIMARY_BACKEND_URL
