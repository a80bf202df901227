# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from app.core.config import get_settings
from app.core.errors import register_exception_handlers

# Routers
from app.routers.profile import router as profile_router
from app.routers.ai import router as ai_router
from app.routers.navigation import router as navigation_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Report which remote providers are configured. Clients are built
        lazily on first use, so a missing key only breaks the routes
        that need it.
    """
    missing = [
        name
        for name in ("SUPABASE_SERVICE_ROLE_KEY", "XAI_API_KEY", "GEMINI_API_KEY")
        if not getattr(settings, name)
    ]
    if missing:
        logger.warning(f"Startup: not configured: {', '.join(missing)}")
    else:
        logger.info("Startup: Supabase, xAI and Gemini credentials present.")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API prefix, e.g. /api
app.include_router(profile_router, prefix=settings.API_PREFIX)
app.include_router(ai_router, prefix=settings.API_PREFIX)
app.include_router(navigation_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "docbrief-backend"}
