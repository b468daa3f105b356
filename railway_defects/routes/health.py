from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from railway_defects.config.settings import Settings
from railway_defects.dependencies.stores import get_report_store, get_settings, get_user_store

router = APIRouter()


@router.get("/health")
async def health(
    settings: Settings = Depends(get_settings),
    reports=Depends(get_report_store),
    users=Depends(get_user_store),
):
    return {
        "status": "ok",
        "store": "mongodb" if settings.mongodb_uri else "memory",
        "reports": await reports.count(),
        "users": await users.count(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
