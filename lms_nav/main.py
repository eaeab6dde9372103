# lms_nav/main.py

import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from lms_nav.core.config import settings
from lms_nav.api.endpoints import navigation as navigation_router

# ------------------------------------------------------------
# LOGURU CONFIGURATION
# ------------------------------------------------------------
logger.remove()
logger.add(
    sys.stdout,
    level=settings.LOG_LEVEL,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
           "<level>{level}</level> | "
           "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
           "<level>{message}</level>",
    colorize=True,
    backtrace=True,
    diagnose=settings.ENV != "prod",
)

# ------------------------------------------------------------
# FASTAPI APP INIT
# ------------------------------------------------------------
app = FastAPI(
    title="LMS Navigation Engine",
    version="1.0.0",
    description="Role-aware sidebar navigation and department permission resolution.",
)

# ------------------------------------------------------------
# CORS CONFIGURATION
# ------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "*"],
)

# ------------------------------------------------------------
# REGISTER ROUTERS
# ------------------------------------------------------------
app.include_router(navigation_router.router)


@app.on_event("startup")
async def on_startup():
    logger.info(f"Starting LMS Navigation Engine ({settings.ENV})")
    if settings.SELECTION_STORE == "sql":
        try:
            from lms_nav.core.database import check_connection, init_db

            check_connection()
            init_db()
            logger.success("Department selection table ready.")
        except Exception:
            logger.exception("Department selection store unavailable.")


# ------------------------------------------------------------
# ROOT HEALTH CHECK
# ------------------------------------------------------------
@app.get("/", tags=["System"])
async def root():
    return {
        "status": "ok",
        "service": "LMS Navigation Engine",
        "version": app.version,
    }
