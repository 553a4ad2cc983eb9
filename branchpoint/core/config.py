"""Application configuration"""
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings"""

    # Storage
    storage_backend: str = "memory"  # "memory" | "sql"
    database_url: str = "sqlite+aiosqlite:///./branchpoint.db"
    database_url_sync: str = "sqlite:///./branchpoint.db"

    # OpenAI
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o"
    openai_fast_model: str = "gpt-4o-mini"  # Used for branch generation
    openai_timeout_seconds: float = 30.0
    openai_max_tokens: int = 2000
    openai_temperature: float = 0.7

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Decision rules
    default_pre_confidence: int = 3
    min_confidence: int = 1
    max_confidence: int = 5
    simulation_question_count: int = 5

    class Config:
        env_file = ".env"
        case_sensitive = False

    def is_production(self) -> bool:
        return self.environment == "production"


settings = Settings()
