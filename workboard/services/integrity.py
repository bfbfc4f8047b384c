"""Document fingerprinting.

``verify_on_chain`` only simulates a ledger lookup; nothing is published.
"""

import hashlib
import secrets
from datetime import datetime, timezone


def hash_document(contents: bytes) -> str:
    return hashlib.sha256(contents).hexdigest()


async def verify_on_chain(document_hash: str) -> dict:
    return {
        "hash": document_hash,
        "verified": True,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "transaction_id": "0x" + secrets.token_hex(8),
    }
