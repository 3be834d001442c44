from pydantic_settings import BaseSettings
from typing import List, Any
import json
from pathlib import Path


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


def parse_mime_types(v: Any) -> List[str]:
    """Parse allowed MIME types from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        return [mime.strip() for mime in v.split(',') if mime.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "SponsorHub"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    SECRET_KEY: str
    API_PREFIX: str = "/api"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 5000

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str
    DB_ECHO: bool = False

    # ==========================================
    # Authentication
    # ==========================================
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10080  # 7 days
    REFRESH_TOKEN_EXPIRE_DAYS: int = 30
    BCRYPT_ROUNDS: int = 12  # 4 for dev (fast), 12 for prod (secure)
    ALLOW_ADMIN_SIGNUP: bool = False

    # ==========================================
    # Frontend / CORS (stored as comma-separated string, parsed to list)
    # ==========================================
    FRONTEND_URL: str = "http://localhost:3000"
    CORS_ORIGINS_STR: str = "http://localhost:3000,http://127.0.0.1:3000"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        origins = parse_cors_origins(self.CORS_ORIGINS_STR)
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL)
        return origins

    # ==========================================
    # Rate Limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 100
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # ==========================================
    # Document Upload
    # ==========================================
    UPLOAD_PATH: str = "./uploads"
    MAX_DOCUMENT_SIZE: int = 10485760  # 10MB
    MAX_REQUEST_SIZE: int = 11534336  # 11MB, leaves room for multipart overhead
    ALLOWED_DOCUMENT_TYPES_STR: str = (
        "application/pdf,image/jpeg,image/png,"
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    )

    @property
    def ALLOWED_DOCUMENT_TYPES(self) -> List[str]:
        """Parse allowed document MIME types from comma-separated string"""
        return parse_mime_types(self.ALLOWED_DOCUMENT_TYPES_STR)

    # ==========================================
    # Notifications
    # ==========================================
    NOTIFICATION_RETENTION_DAYS: int = 30
    NOTIFICATION_CLEANUP_ENABLED: bool = True
    NOTIFICATION_CLEANUP_INTERVAL_MINUTES: int = 60

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._upload_dir = Path(self.UPLOAD_PATH)
        self._upload_dir.mkdir(parents=True, exist_ok=True)

    @property
    def UPLOAD_DIR(self) -> Path:
        return self._upload_dir

    @property
    def DOCUMENTS_DIR(self) -> Path:
        return self._upload_dir / "documents"

    def get_collaboration_docs_dir(self, collaboration_id: str) -> Path:
        """Get the documents directory for a collaboration, created on demand"""
        docs_dir = self.DOCUMENTS_DIR / collaboration_id
        docs_dir.mkdir(parents=True, exist_ok=True)
        return docs_dir

    def is_dev_mode(self) -> bool:
        """Check if running in development mode"""
        return self.ENVIRONMENT == "development" or self.DEBUG


# Create settings instance
settings = Settings()
