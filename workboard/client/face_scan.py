"""Simulated face scan shown before sensitive steps.

No image is analysed; the scan is a fixed wait followed by a routing decision.
"""

import asyncio
import logging
from typing import NamedTuple, Optional

from workboard.client.config import ClientSettings

logger = logging.getLogger(__name__)

SIGN_IN_MESSAGE = "Please Sign In to continue."


class ScanResult(NamedTuple):
    view: str
    message: Optional[str] = None


async def run_face_scan(
    target_view: str,
    signed_in: bool,
    settings: ClientSettings,
    camera_available: bool = True,
) -> ScanResult:
    delay = settings.face_scan_seconds if camera_available else settings.face_scan_fallback_seconds
    if not camera_available:
        logger.info("No camera available, running the short scan")
    await asyncio.sleep(delay)

    if not signed_in:
        return ScanResult(view="login", message=SIGN_IN_MESSAGE)
    return ScanResult(view=target_view)
