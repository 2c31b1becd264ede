"""
Configuration management for the Company Analytics API.
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv


BASE_DIR: Path = Path(__file__).parent.parent
load_dotenv(BASE_DIR / ".env")


class Settings:
    """API server configuration."""

    # Server
    API_TITLE: str = "Company Analytics API"
    API_DESCRIPTION: str = "Read-only REST API over the companies collection"
    API_VERSION: str = "1.0.0"
    HOST: str = os.getenv("API_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("API_PORT", "8000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE")

    # CORS
    CORS_ORIGINS: List[str] = os.getenv("CORS_ORIGINS", "*").split(",")

    # Document store
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017/")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "test")
    MONGODB_COLLECTION: str = os.getenv("MONGODB_COLLECTION", "companies")
    MONGODB_TIMEOUT_MS: int = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

    # Query limits
    TOP_PAID_DEFAULT_LIMIT: int = 5
    TOP_PAID_MAX_LIMIT: int = 50

    # Dashboard
    DASHBOARD_API_URL: str = os.getenv("DASHBOARD_API_URL", "http://localhost:8000")


settings = Settings()
