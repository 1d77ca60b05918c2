"""
Application configuration.
All sensitive values loaded from environment variables.
"""
from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""
    
    # Database
    DATABASE_URL: str = "postgresql+asyncpg://postgres:postgres@db:5432/tapago"
    DATABASE_ECHO: bool = False
    
    # Hosted auth provider (Supabase GoTrue compatible)
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: str = ""
    AUTH_TIMEOUT_SECONDS: float = 10.0
    
    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]
    
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console
    
    # Server
    PORT: int = 3001
    
    @property
    def auth_base_url(self) -> Optional[str]:
        """Base URL of the auth REST API, or None when not configured."""
        if not self.SUPABASE_URL:
            return None
        return f"{self.SUPABASE_URL.rstrip('/')}/auth/v1"
    
    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
