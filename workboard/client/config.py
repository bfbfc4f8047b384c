"""Client-side settings."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class ClientSettings(BaseModel):
    """Where the backend lives and how the session keeps in sync with it."""

    base_url: str = "http://localhost:8000"
    poll_interval: float = 10.0
    # None leaves calls without an explicit timeout
    request_timeout: Optional[float] = None
    face_scan_seconds: float = 3.0
    face_scan_fallback_seconds: float = 2.0


def load_settings(**overrides) -> ClientSettings:
    """Settings from WORKBOARD_* environment variables, then explicit overrides."""
    data = {}
    if os.getenv("WORKBOARD_API_URL"):
        data["base_url"] = os.environ["WORKBOARD_API_URL"]
    if os.getenv("WORKBOARD_POLL_INTERVAL"):
        data["poll_interval"] = os.environ["WORKBOARD_POLL_INTERVAL"]
    data.update(overrides)
    return ClientSettings(**data)
