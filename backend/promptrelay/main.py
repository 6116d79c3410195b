"""
PromptRelay - Main FastAPI Application
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .config import settings
from .api import sessions_router, ai_router, stt_router, transcriptions_router
from .core.exceptions import MissingApiKeyError
from .core.logging_config import setup_logging
from .llm.gateway import create_gateway
from .middleware import RequestLoggingMiddleware
from .services.transcription import TranscriptionService
from .storage import (
    MongoDocumentStore,
    RedisCache,
    SessionStore,
    CompletionStore,
    TranscriptionStore,
    SttTranscriptionStore,
    create_mongo_client,
    create_redis_client,
)
from .storage.session_store import SESSION_COLLECTION

# Logger will be initialized after setup_logging() is called
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    setup_logging(settings)

    mongo_client = create_mongo_client(settings.mongodb_uri)
    redis_client = create_redis_client(settings.redis_uri)
    database = mongo_client[settings.mongodb_database]

    app.state.session_store = SessionStore(
        MongoDocumentStore.for_collection(database, SESSION_COLLECTION),
        RedisCache(redis_client),
        cache_ttl=settings.session_cache_ttl_seconds,
    )
    app.state.completion_store = CompletionStore(
        MongoDocumentStore.for_collection(database, CompletionStore.collection_name)
    )
    app.state.transcription_store = TranscriptionStore(
        MongoDocumentStore.for_collection(database, TranscriptionStore.collection_name)
    )
    app.state.stt_store = SttTranscriptionStore(
        MongoDocumentStore.for_collection(database, SttTranscriptionStore.collection_name)
    )

    try:
        app.state.gateway = create_gateway(settings)
        logger.info(
            f"LLM provider: {app.state.gateway.provider_name}, "
            f"default model: {app.state.gateway.default_model}"
        )
    except MissingApiKeyError as e:
        app.state.gateway = None
        logger.warning(f"LLM endpoints disabled: {e}")

    app.state.transcription_service = TranscriptionService.from_settings(settings)
    if not app.state.transcription_service.is_configured():
        logger.warning("STT endpoints disabled: no Groq API key")

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"MongoDB database: {settings.mongodb_database}")
    logger.info(f"Log level: {settings.log_level.upper()}")
    logger.info(f"Debug mode: {settings.debug}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")
    await redis_client.aclose()
    mongo_client.close()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Conversation sessions and LLM / speech-to-text relay",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware (after CORS)
if settings.log_api_requests:
    app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(sessions_router)
app.include_router(ai_router)
app.include_router(stt_router)
app.include_router(transcriptions_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    gateway = getattr(app.state, "gateway", None)
    return {
        "status": "healthy",
        "version": settings.app_version,
        "llm_provider": gateway.provider_name if gateway else None,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "promptrelay.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
