import base64
import hashlib
import hmac
import secrets

from taskmaster.config import settings

_ALGO = "pbkdf2_sha256"

def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii").rstrip("=")

def _derive(password: str, salt: str, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("ascii"), iterations)

def hash_password(password: str, iterations: int | None = None) -> str:
    iterations = iterations or settings.password_hash_iterations
    salt = secrets.token_urlsafe(16)
    digest = _derive(password, salt, iterations)
    return f"{_ALGO}${iterations}${salt}${_b64(digest)}"

def verify_password(password: str, encoded: str) -> bool:
    try:
        algo, raw_iterations, salt, expected = encoded.split("$", 3)
        iterations = int(raw_iterations)
    except ValueError:
        return False
    if algo != _ALGO:
        return False
    digest = _b64(_derive(password, salt, iterations))
    return hmac.compare_digest(digest, expected)
