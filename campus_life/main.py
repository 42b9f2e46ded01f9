from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from datetime import datetime
import logging
import os
import socket
from pathlib import Path

from campus_life.auto_migrate import init_db
from campus_life.constants import (
    CORS_ALLOWED_ORIGINS,
    DEFAULT_LOG_DIRECTORY_DEV,
    DEFAULT_LOG_DIRECTORY_PROD,
    ENVIRONMENT,
    PORT,
)
from campus_life.routes import auth, checkin, missions, user
from campus_life.services.scheduler_service import start_scheduler, stop_scheduler

LOG_DIR = os.getenv("CAMPUS_LIFE_LOG_DIR", DEFAULT_LOG_DIRECTORY_PROD)
LOG_FILE = os.getenv("CAMPUS_LIFE_LOG_FILE", "app.log")

# Create log directory if it doesn't exist (for development)
try:
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    log_path = Path(LOG_DIR) / LOG_FILE
except PermissionError:
    # Fallback to local directory if no permissions for /var/log
    LOG_DIR = DEFAULT_LOG_DIRECTORY_DEV
    Path(LOG_DIR).mkdir(parents=True, exist_ok=True)
    log_path = Path(LOG_DIR) / LOG_FILE

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(log_path),
        logging.StreamHandler()  # Also log to console
    ]
)

logger = logging.getLogger("campus_life")

app = FastAPI(
    title="Campus Life API",
    description="Daily check-ins, streaks and missions for students",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error bodies are {"error": "..."} everywhere
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request"}
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Unhandled database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Request failed"}
    )


@app.on_event("startup")
async def startup_event():
    try:
        init_db()
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        # Don't crash the app - continue with existing schema
    logger.info(f"Campus Life API started. Logging to: {log_path}")
    start_scheduler()


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down Campus Life API")
    stop_scheduler()


# Health check (no auth required)
@app.get("/api/health")
async def health():
    return {
        "status": "ok",
        "timestamp": datetime.now().isoformat(),
        "message": "Campus Life API is running"
    }


# Deployment details for checking which instance answered (no auth required)
@app.get("/api/debug")
async def debug():
    return {
        "status": "ok",
        "timestamp": datetime.now().isoformat(),
        "hostname": socket.gethostname(),
        "port": PORT,
        "environment": ENVIRONMENT,
        "cors": CORS_ALLOWED_ORIGINS
    }


app.include_router(auth.router)
app.include_router(user.router)
app.include_router(checkin.router)
app.include_router(missions.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("campus_life.main:app", host="0.0.0.0", port=PORT, reload=False)
