"""
Environment configuration for the hostel management backend.
Uses Pydantic's settings management to handle environment variables
with proper type validation and default values.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Dict, List, Optional, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Load environment variables from .env file if it exists
env_path = Path('.') / '.env'
load_dotenv(dotenv_path=env_path)


def _split_list(v: Union[str, List[Any]]) -> List[Any]:
    """Accept a JSON array or a comma separated string."""
    if isinstance(v, str):
        v = v.strip()
        if v.startswith('[') and v.endswith(']'):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @staticmethod
    def get_secret_key_default() -> str:
        """Generate a default secret key if not provided"""
        import secrets
        import string
        alphabet = string.ascii_letters + string.digits
        return ''.join(secrets.choice(alphabet) for _ in range(32))

    # Application configuration
    APP_NAME: str = Field(default="Hostelkeeper", alias="PROJECT_NAME")
    API_VERSION: str = Field(default="v1", alias="PROJECT_VERSION")
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    TIMEZONE: str = "Asia/Kolkata"

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    CORS_ORIGINS: Annotated[List[str], NoDecode] = Field(default=["*"], alias="BACKEND_CORS_ORIGINS")

    # Database configuration - support both individual fields and DATABASE_URL
    DATABASE_URL: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "hostelkeeper"
    DB_POOL_SIZE: int = 20
    DB_POOL_OVERFLOW: int = 10
    DB_ECHO: bool = False
    DB_CONNECT_ARGS: Dict[str, Any] = {}

    # Security configuration
    JWT_SECRET_KEY: str = Field(default_factory=lambda: Settings.get_secret_key_default())
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Background tasks
    CELERY_BROKER_URL: str = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    CELERY_RESULT_BACKEND: Optional[str] = None
    AUTO_ATTENDANCE_HOUR: int = 0
    AUTO_ATTENDANCE_MINUTE: int = 1
    AUTO_ATTENDANCE_RUN_ON_STARTUP: bool = True
    AGGREGATE_SWEEP_HOUR: int = 3

    # Students
    STUDENT_ID_PREFIX: str = "SHAMS"

    # Geofence (campus location verification)
    GEOCODING_API_KEY: Optional[str] = Field(default=None, alias="GOOGLE_MAPS_API_KEY")
    GEOCODING_URL: str = "https://maps.googleapis.com/maps/api/geocode/json"
    GEOCODING_TIMEOUT_SECONDS: float = 5.0
    GEOFENCE_PLACE_TOKENS: Annotated[List[str], NoDecode] = ["vadlamudi", "vignan", "university"]
    GEOFENCE_REGION_TOKENS: Annotated[List[str], NoDecode] = ["guntur"]
    GEOFENCE_COMPONENT_TOKENS: Annotated[List[str], NoDecode] = [
        "vadlamudi", "vignan", "university", "గుంటూరు",
    ]
    GEOFENCE_MIN_LAT: float = 16.25
    GEOFENCE_MAX_LAT: float = 16.65
    GEOFENCE_MIN_LON: float = 80.35
    GEOFENCE_MAX_LON: float = 80.75

    # Monitoring and logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "standard"
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = False

    # Validators
    @field_validator(
        'CORS_ORIGINS',
        'GEOFENCE_PLACE_TOKENS',
        'GEOFENCE_REGION_TOKENS',
        'GEOFENCE_COMPONENT_TOKENS',
        mode='before',
    )
    @classmethod
    def parse_list(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse list settings given as strings in the environment"""
        return _split_list(v)

    @field_validator('GEOFENCE_PLACE_TOKENS', 'GEOFENCE_REGION_TOKENS', 'GEOFENCE_COMPONENT_TOKENS')
    @classmethod
    def lowercase_tokens(cls, v: List[str]) -> List[str]:
        return [token.lower() for token in v]

    def get_database_url(self) -> str:
        """Construct database URL from components or use provided URL"""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        return (
            f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    def is_sqlite(self) -> bool:
        return self.get_database_url().startswith("sqlite")

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.ENVIRONMENT == "production"

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.ENVIRONMENT == "development"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
