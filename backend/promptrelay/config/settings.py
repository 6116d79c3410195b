"""
Configuration Settings.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings, built once at startup and passed to services."""

    # App info
    app_name: str = "PromptRelay"
    app_version: str = "1.0.0"
    debug: bool = False

    # Document store
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "promptrelay"

    # Session cache
    redis_uri: str = "redis://localhost:6379/0"
    session_cache_ttl_seconds: int = 3600  # 1 hour

    # LLM providers ("groq" or "openrouter")
    llm_primary_provider: str = "groq"
    groq_api_key: Optional[str] = None
    groq_base_url: str = "https://api.groq.com/openai/v1"
    openrouter_api_key: Optional[str] = None
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_referer: str = "https://promptrelay.app"
    openrouter_title: str = "PromptRelay"
    default_model: Optional[str] = None  # uses provider default if not set
    llm_timeout_seconds: float = 30.0
    prompt_preset: str = "concise"  # "concise" or "detailed"

    # Speech-to-text (served by the Groq endpoint)
    stt_model: str = "whisper-large-v3-turbo"

    # Multi-turn chat
    chat_context_limit: int = 10
    chat_system_prompt: str = (
        "You are PromptRelay, a helpful AI assistant. Provide concise, helpful responses."
    )

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file_path: str = "./logs/promptrelay.log"
    log_file_enabled: bool = True
    log_console_enabled: bool = True
    log_json_format: bool = True  # JSON format for files, human-readable for console
    log_api_requests: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
