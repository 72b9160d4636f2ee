"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import Optional, Dict, Any, List, Union
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
    """Database connection configuration"""

    url: str = Field(
        default="sqlite+aiosqlite:///./packpal.db",
        description="SQLAlchemy async database URL",
    )
    echo: bool = Field(default=False)
    create_all: bool = Field(
        default=True,
        description="Create missing tables on startup (development setups)",
    )

    model_config = {
        "env_prefix": "DATABASE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class SecuritySettings(BaseSettings):
    """Session token and CORS configuration"""

    jwt_secret: str = Field(default="please-change-me")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=30, ge=1, le=60 * 24 * 30)
    cookie_name: str = Field(default="token")
    cookie_secure: bool = Field(default=False)
    # Comma separated in the environment, e.g. SECURITY_CORS_ORIGINS=http://a,http://b
    cors_origins: Union[List[str], str] = Field(
        default_factory=lambda: ["http://localhost:5173"]
    )

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from environment variable or list"""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v or []

    model_config = {
        "env_prefix": "SECURITY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class WeatherSettings(BaseSettings):
    """OpenWeatherMap forecast API configuration"""

    api_key: Optional[str] = Field(default=None, description="OpenWeatherMap appid")
    api_url: str = Field(default="https://api.openweathermap.org/data/2.5")
    timeout_seconds: int = Field(default=10, ge=1, le=60)

    model_config = {
        "env_prefix": "OPENWEATHER_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class GeminiSettings(BaseSettings):
    """Google Gemini text generation configuration"""

    api_key: Optional[str] = Field(default=None, description="Gemini API key")
    model: str = Field(default="gemini-2.0-flash-lite")

    model_config = {
        "env_prefix": "GEMINI_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="PackPal API")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)
    reload: bool = Field(default=False)
    workers: int = Field(default=1, ge=1, le=16)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="json", description="json or text")

    # Nested Settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    weather: WeatherSettings = Field(default_factory=WeatherSettings)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)

    @field_validator('environment', mode='before')
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment setting"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def get_cors_config(self) -> Dict[str, Any]:
        """Get CORS configuration for FastAPI"""
        return {
            "allow_origins": self.security.cors_origins,
            "allow_credentials": True,
            "allow_methods": ["*"],
            "allow_headers": ["*"],
        }

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance"""
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment and files"""
    global settings
    settings = Settings()
    return settings
