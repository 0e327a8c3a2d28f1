from collections.abc import Callable

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from taskmaster.config import settings
from taskmaster.db import db_ping
from taskmaster.redis_client import redis_ping

router = APIRouter(tags=["health"])

PROBES: tuple[tuple[str, Callable[[], bool]], ...] = (
    ("db", lambda: db_ping()),
    ("redis", lambda: redis_ping()),
)

def _describe(exc: Exception) -> str:
    msg = str(exc).strip()
    return f"{type(exc).__name__}: {msg}" if msg else type(exc).__name__

@router.get("/health")
def health() -> dict:
    return {"status": "ok"}

@router.get("/ready")
def ready() -> JSONResponse:
    checks: dict[str, bool] = {}
    errors: dict[str, str] = {}

    for name, probe in PROBES:
        try:
            checks[name] = bool(probe())
        except Exception as e:
            checks[name] = False
            errors[name] = _describe(e)

    ok = all(checks.values())
    body: dict = {"status": "ok" if ok else "unready", "env": settings.app_env, "checks": checks}
    if errors:
        body["errors"] = errors
    return JSONResponse(status_code=200 if ok else 503, content=body)
