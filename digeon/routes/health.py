"""
Digeon Health Check Routes
Liveness and readiness probes
"""
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

import psutil
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_db

router = APIRouter(prefix="/api/health", tags=["health"])

settings = get_settings()
START_TIME = datetime.now(timezone.utc)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def get_uptime() -> str:
    """Get service uptime as human-readable string"""
    delta = datetime.now(timezone.utc) - START_TIME
    hours, remainder = divmod(delta.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if delta.days > 0:
        return f"{delta.days}d {hours}h {minutes}m"
    elif hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    else:
        return f"{minutes}m {seconds}s"


def check_database(db: Session) -> Dict[str, Any]:
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy"}
    except SQLAlchemyError as e:
        return {"status": "unhealthy", "error": str(e)}


def check_storage() -> Dict[str, Any]:
    """Free space on the volume holding the upload directory"""
    path = Path(settings.upload_dir).resolve()
    while not path.exists() and path != path.parent:
        path = path.parent

    try:
        usage = psutil.disk_usage(str(path))
    except OSError as e:
        return {"status": "unhealthy", "error": str(e)}

    free_percent = usage.free / usage.total * 100 if usage.total else 0
    status = "healthy" if free_percent > 10 else "warning" if free_percent > 5 else "critical"
    return {
        "status": status,
        "path": str(path),
        "free_gb": round(usage.free / (1024 ** 3), 2),
        "free_percent": round(free_percent, 1),
    }


@router.get("")
@router.get("/live")
def health_live():
    """Liveness probe - is the service running?"""
    return {
        "ok": True,
        "status": "alive",
        "environment": settings.environment,
        "uptime": get_uptime(),
        "timestamp": _timestamp(),
    }


@router.get("/ready")
def health_ready(db: Session = Depends(get_db)):
    """Readiness probe - can the service reach its database and storage?"""
    database = check_database(db)
    storage = check_storage()
    ready = database["status"] == "healthy" and storage["status"] in ("healthy", "warning")
    return {
        "ok": ready,
        "status": "ready" if ready else "not_ready",
        "checks": {"database": database, "storage": storage},
        "timestamp": _timestamp(),
    }
