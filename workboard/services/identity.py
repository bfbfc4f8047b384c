"""Identity match against a profile photo, delegated to Gemini.

The check is advisory: any failure of the model call or of its output maps to
a "no match" result instead of an error.
"""

import base64
import json
import logging
import os

import google.generativeai as genai
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

IDENTITY_MODEL = os.getenv("IDENTITY_MODEL", "models/gemini-2.5-flash")
BUSY_REASON = "Verification system busy."

_api_key = os.getenv("GOOGLE_API_KEY")
if _api_key:
    genai.configure(api_key=_api_key)
else:
    logger.warning("GOOGLE_API_KEY not set, identity checks will report no match")

PROMPT = (
    'Verify if this user image matches the identity of "{name}". '
    "This is a simulated identity check for a professional job platform. "
    "Respond with JSON only: "
    '{{"isMatch": boolean, "confidence": number between 0 and 1, "reason": short string}}.'
)


def no_match(reason: str = BUSY_REASON) -> dict:
    return {"is_match": False, "confidence": None, "reason": reason}


async def _ask_model(image_bytes: bytes, name: str) -> str:
    model = genai.GenerativeModel(IDENTITY_MODEL)
    generation_config = genai.GenerationConfig(response_mime_type="application/json")
    response = await model.generate_content_async(
        [
            PROMPT.format(name=name),
            {"mime_type": "image/jpeg", "data": image_bytes},
        ],
        generation_config=generation_config,
    )
    return response.text or "{}"


def parse_verdict(raw: str) -> dict:
    data = json.loads(raw)
    if "isMatch" not in data or "reason" not in data:
        raise ValueError(f"Incomplete verdict: {raw!r}")

    confidence = data.get("confidence")
    return {
        "is_match": bool(data["isMatch"]),
        "confidence": float(confidence) if confidence is not None else None,
        "reason": str(data["reason"]),
    }


async def verify_identity_match(image_base64: str, name: str) -> dict:
    try:
        image_bytes = base64.b64decode(image_base64, validate=True)
    except ValueError:
        return no_match("Image could not be decoded.")

    try:
        raw = await _ask_model(image_bytes, name)
        return parse_verdict(raw)
    except Exception:
        logger.exception("Identity verification failed for %r", name)
        return no_match()
