"""Main FastAPI application entry point"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import uvicorn

from fieldops.api.auth import router as auth_router
from fieldops.api.boards import router as boards_router
from fieldops.api.contacts import router as contacts_router
from fieldops.api.errors import PROBLEM_RESPONSES, register_exception_handlers
from fieldops.api.health import API_VERSION, router as health_router
from fieldops.api.locations import router as locations_router
from fieldops.api.messages import router as messages_router
from fieldops.api.photos import router as photos_router, uploads_router
from fieldops.api.projects import router as projects_router
from fieldops.api.time_cards import admin_router as admin_time_cards_router
from fieldops.api.time_cards import router as time_cards_router
from fieldops.api.users import router as users_router
from fieldops.config import settings
from fieldops.services.redis_service import RedisService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting FieldOps API ({settings.environment})")
    yield
    await RedisService.close()
    logger.info("FieldOps API stopped")


app = FastAPI(
    title="FieldOps API",
    description="Field operations backend: time cards, projects, photos, chat and live locations",
    version=API_VERSION,
    lifespan=lifespan,
)

# Configure CORS; credentials are required for the session cookie
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
    max_age=3600,
)

register_exception_handlers(app)

# Include routers
app.include_router(health_router)
app.include_router(auth_router, responses=PROBLEM_RESPONSES)
app.include_router(users_router, responses=PROBLEM_RESPONSES)
app.include_router(time_cards_router, responses=PROBLEM_RESPONSES)
app.include_router(admin_time_cards_router, responses=PROBLEM_RESPONSES)
app.include_router(projects_router, responses=PROBLEM_RESPONSES)
app.include_router(contacts_router, responses=PROBLEM_RESPONSES)
app.include_router(photos_router, responses=PROBLEM_RESPONSES)
app.include_router(uploads_router, responses=PROBLEM_RESPONSES)
app.include_router(boards_router, responses=PROBLEM_RESPONSES)
app.include_router(messages_router, responses=PROBLEM_RESPONSES)
app.include_router(locations_router, responses=PROBLEM_RESPONSES)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "FieldOps API",
        "version": API_VERSION,
        "status": "running",
    }


def run():
    """Console entry point: serve the app with uvicorn"""
    uvicorn.run(
        "fieldops.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
