"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session
import logging

from .config import settings
from .database import Base, SessionLocal, engine, get_db
from .auth import models as auth_models  # noqa: F401 - registers tables
from .doctors import models as doctor_models  # noqa: F401 - registers tables
from .auth.router import router as auth_router
from .doctors.router import router as doctors_router
from .core.bootstrap import bootstrap_admin_if_needed
from .core.middleware import setup_middlewares
from .deps import get_password_hasher
from .exceptions import register_exception_handlers

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

# Create database tables if they don't exist
Base.metadata.create_all(bind=engine)

# Bootstrap admin creation
logger.info("Starting Hospital Management API...")
with SessionLocal() as db:
    try:
        bootstrap_admin_if_needed(
            db,
            get_password_hasher(),
            settings.bootstrap_admin_email,
            settings.bootstrap_admin_password,
            settings.bootstrap_admin_name
        )
    except Exception as e:
        logger.error(f"Bootstrap process failed: {e}")

# Create FastAPI application
app = FastAPI(
    title="Hospital Management API",
    description="Authentication, role-based access and doctor profile management",
    version="1.0.0"
)

# Register exception handlers
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(auth_router)
app.include_router(doctors_router)

# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint for API health check.

    Returns:
        dict: Simple welcome message
    """
    return {"message": "Welcome to Hospital Management API", "version": app.version}

# Health check endpoint
@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """
    Health check endpoint for monitoring.

    Returns:
        dict: Health status information
    """
    db.execute(text("SELECT 1"))
    return {"status": "healthy", "database": "connected"}
