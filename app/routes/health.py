from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.auth.tokens import now_utc
from app.db import db_ping
from app.redis_client import redis_ping

router = APIRouter(tags=["health"])

@router.get("/")
def index() -> dict:
    return {
        "success": True,
        "message": "Backend is running",
        "api": {
            "auth": "/api/auth",
            "tasks": "/api/tasks",
            "health": "/api/health",
        },
    }

@router.get("/api/health")
def health() -> dict:
    return {"success": True, "message": "Server is healthy", "time": now_utc().isoformat()}

# readiness probe
@router.get("/api/ready")
def ready():
    checks: dict[str, bool] = {}
    errors: dict[str, str] = {}

    for name, fn in (("db", db_ping), ("redis", redis_ping)):
        try:
            checks[name] = bool(fn())
        except Exception as e:
            checks[name] = False
            msg = str(e).strip()
            errors[name] = f"{e.__class__.__name__}{(': ' + msg) if msg else ''}"

    ok = all(checks.values())

    body: dict = {"success": ok, "status": "ok" if ok else "unready", "checks": checks}
    if errors:
        body["errors"] = errors

    # 200 only when db + redis are reachable, 503 with details if not
    return JSONResponse(status_code=200 if ok else 503, content=body)
