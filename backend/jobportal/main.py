from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobportal.core.config import settings
from jobportal.core.exceptions import register_exception_handlers
from jobportal.core.logger import get_logger
from jobportal.db.base import Base
from jobportal.db.session import engine

# Import all models so SQLAlchemy can discover them for table creation
from jobportal.models import User, Job, JobApplication, Candidate, Recruiter  # noqa: F401

# Import API router
from jobportal.api.api import api_router

logger = get_logger("jobportal")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup."""
    Base.metadata.create_all(bind=engine)
    logger.info(f"{settings.APP_NAME} started")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Job board API for candidates, recruiters and job applications",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    max_age=3600,
)

register_exception_handlers(app)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint."""
    return {"message": f"Welcome to {settings.APP_NAME} API"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Include API router with /api prefix
app.include_router(api_router, prefix="/api")
