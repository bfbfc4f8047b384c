from datetime import datetime, timedelta
from passlib.context import CryptContext
from jose import JWTError, jwt
import os

# 1. THE KEYS
SECRET_KEY = os.getenv("SECRET_KEY", "super_secret_random_key_CHANGE_THIS")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
SIGNED_URL_TTL_SECONDS = int(os.getenv("SIGNED_URL_TTL_SECONDS", "60"))

# 2. THE PASSWORD TOOLS (Argon2)
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

def verify_password(plain_password, hashed_password):
    """Checks if the typed password matches the saved hash."""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password):
    """Converts a plain password into an argon2 hash."""
    return pwd_context.hash(password)


# 3. SIGNED DOCUMENT LINKS
class InvalidSignature(Exception):
    pass


def sign_document_path(path: str, ttl_seconds: int = None):
    """Returns (token, expires_at) granting read access to one stored path."""
    ttl = SIGNED_URL_TTL_SECONDS if ttl_seconds is None else ttl_seconds
    expires_at = datetime.utcnow() + timedelta(seconds=ttl)
    token = jwt.encode(
        {"path": path, "scope": "document", "exp": expires_at},
        SECRET_KEY,
        algorithm=ALGORITHM,
    )
    return token, expires_at


def read_signed_path(token: str) -> str:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise InvalidSignature(str(exc)) from exc
    if payload.get("scope") != "document" or not payload.get("path"):
        raise InvalidSignature("Token does not grant document access")
    return payload["path"]
