from __future__ import annotations

from fastapi import APIRouter

from payroll_app.core.config import settings
from payroll_app.services.employee_repository import employee_repository

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    services: dict[str, str] = {}

    try:
        if employee_repository.initialized:
            ok = await employee_repository.check_connection()
            services["employee_api"] = "ok" if ok else "error"
        else:
            services["employee_api"] = "not_configured"
    except Exception:
        services["employee_api"] = "error"

    all_ok = all(v in ("ok", "not_configured") for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": settings.APP_VERSION,
        "repository": "remote" if employee_repository.initialized else "in_memory",
        "services": services,
    }


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}
