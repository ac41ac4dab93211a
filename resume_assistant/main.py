from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from resume_assistant.routers import files, jobs, ollama, resume

from resume_assistant.utils.logging_config import configure_for_environment, get_logger
from resume_assistant.middleware.error_handlers import (
    ExceptionHandlerMiddleware,
    RequestLoggingMiddleware,
    PerformanceMiddleware,
)
from resume_assistant.services.inference import gateway

# Configure logging first
configure_for_environment()
logger = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager"""
    logger.info("Resume Assistant API starting up...")
    logger.info(f"Model server: {gateway.base_url}, model: {gateway.settings.model_name}")

    if not await gateway.check_connection():
        logger.warning("Ollama is not reachable yet - AI endpoints will return 503 until it is")

    logger.info("Resume Assistant API startup completed")

    yield

    logger.info("Resume Assistant API shutting down...")

app = FastAPI(title="Resume Assistant API", version="1.0.0", lifespan=lifespan)

# Add middleware in order (LIFO - Last In, First Out)
app.add_middleware(ExceptionHandlerMiddleware)
app.add_middleware(PerformanceMiddleware, slow_request_threshold=2.0)
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
@app.head("/")
async def root():
    """Root endpoint - handles both GET and HEAD requests for health checks"""
    logger.debug("Root endpoint accessed")
    return {"message": "Welcome to the Resume Assistant API", "version": "1.0.0", "status": "ok"}

@app.get("/health")
@app.head("/health")
async def health_check():
    """Health check endpoint - handles both GET and HEAD requests"""
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

app.include_router(files.router, prefix="/api/file", tags=["files"])
app.include_router(ollama.router, prefix="/api/ollama", tags=["ollama"])
app.include_router(resume.router, prefix="/api/resume", tags=["resume"])
app.include_router(jobs.router, prefix="/api/job", tags=["jobs"])

logger.info("Resume Assistant API initialized successfully")
