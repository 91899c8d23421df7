"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode
import os
from pathlib import Path
from typing import Annotated, Optional, Dict, Any, List
from enum import Enum


class Environment(str, Enum):
    """Supported deployment environments"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DatabaseSettings(BaseSettings):
    """Relational store holding places, hotels, artisans and consumer profiles"""

    url: str = Field(default="sqlite:///./heritage_map.db")
    echo: bool = Field(default=False)
    create_tables: bool = Field(
        default=True,
        description="Create missing tables on startup (alembic handles production schemas)"
    )

    model_config = {"env_prefix": "DATABASE_", "env_file": ".env", "extra": "ignore"}


class RedisSettings(BaseSettings):
    """Redis cache configuration"""

    enabled: bool = Field(default=False)
    host: str = Field(default="redis")  # Default to docker service name
    port: int = Field(default=6379, ge=1, le=65535)
    password: Optional[str] = Field(default=None)
    db: int = Field(default=0, ge=0, le=15)
    socket_timeout: int = Field(default=5, ge=1, le=30)
    cache_ttl_seconds: int = Field(default=300, ge=10, le=86400)

    @property
    def url(self) -> str:
        """Generate Redis URL from configuration"""
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"

    model_config = {"env_prefix": "REDIS_", "env_file": ".env", "extra": "ignore"}


class TourSettings(BaseSettings):
    """Tour-guide mode and radius filter configuration"""

    interval_seconds: float = Field(default=7.0, gt=0, le=300)
    default_radius_km: float = Field(default=2.0)
    max_sessions: int = Field(default=1000, ge=1, le=100000)
    session_ttl_seconds: float = Field(default=3600.0, gt=0)

    @field_validator('default_radius_km')
    @classmethod
    def validate_default_radius(cls, v):
        """Default radius must be one of the selectable radius options"""
        from heritage_map.core.exceptions import InvalidRadiusError
        from heritage_map.core.geo import RadiusSetting
        try:
            return RadiusSetting.parse(v).value
        except InvalidRadiusError as e:
            raise ValueError(e.message)

    model_config = {"env_prefix": "TOUR_", "env_file": ".env", "extra": "ignore"}


class SecuritySettings(BaseSettings):
    """CORS configuration"""

    # comma separated in the environment, not JSON
    cors_origins: Annotated[List[str], NoDecode] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(
        default_factory=lambda: ["GET", "POST", "DELETE"]
    )
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from environment variable or list"""
        if isinstance(v, str):
            origin_list = v.split(",")
            return [origin.strip() for origin in origin_list if origin.strip()]
        return v or ["*"]

    model_config = {"env_prefix": "SECURITY_", "env_file": ".env", "extra": "ignore"}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="Heritage Map Backend")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)
    workers: int = Field(default=1, ge=1, le=16)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)

    # Nested Settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    tour: TourSettings = Field(default_factory=TourSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def get_cors_config(self) -> Dict[str, Any]:
        """Get CORS configuration for FastAPI"""
        return {
            "allow_origins": self.security.cors_origins,
            "allow_credentials": self.security.cors_allow_credentials,
            "allow_methods": self.security.cors_allow_methods,
            "allow_headers": self.security.cors_allow_headers,
        }

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def build_settings(env_file: Optional[str] = None, **overrides: Any) -> Settings:
    """
    Build settings with every nested section reading the same env file.

    Args:
        env_file: Dotenv file to read instead of ``.env``
        **overrides: Top-level field values

    Returns:
        Settings instance
    """
    file_kwargs: Dict[str, Any] = {"_env_file": env_file} if env_file else {}
    return Settings(
        database=DatabaseSettings(**file_kwargs),
        redis=RedisSettings(**file_kwargs),
        tour=TourSettings(**file_kwargs),
        security=SecuritySettings(**file_kwargs),
        **file_kwargs,
        **overrides,
    )


def _settings_from_environment() -> Settings:
    """Use ``.env.<ENVIRONMENT>`` when ENVIRONMENT is set and the file exists"""
    environment = os.getenv("ENVIRONMENT")
    if environment:
        env_file = Path(f".env.{environment.lower()}")
        if env_file.exists():
            return build_settings(str(env_file))
    return build_settings()


# Global settings instance
settings = _settings_from_environment()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = _settings_from_environment()
    return settings
