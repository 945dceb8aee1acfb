import logging
import platform
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from athletic_balance.core.config import Settings, get_settings
from athletic_balance.core.errors import AppError
from athletic_balance.db.init_db import initialize_database

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict[str, Any]:
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": {
            "pythonVersion": platform.python_version(),
            "platform": platform.system().lower(),
            "apiKeysConfigured": {
                "primary": bool(settings.openai_api_key),
                "secondary": bool(settings.openai_api_key_secondary),
            },
        },
    }


@router.post("/init-db")
def init_db():
    try:
        initialize_database()
    except (SQLAlchemyError, AppError):
        logger.exception("Database initialization failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Database initialization failed"},
        )
    return {"success": True, "message": "Database initialized successfully"}
