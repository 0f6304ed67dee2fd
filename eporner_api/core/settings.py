"""Client settings and configuration management"""

import os
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

from .endpoints import BASE_URL

# Load environment-specific .env file
environment = os.getenv('ENVIRONMENT', 'development')
env_file = f'.env.{environment}'
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    load_dotenv()  # Fallback to .env

__version__ = "1.0.0"


class Settings(BaseSettings):
    """
    Client configuration settings using Pydantic Settings.

    Environment variables prefixed with ``EPORNER_`` override default values.
    """

    # API Settings
    base_url: str = Field(
        default=BASE_URL,
        description="Base URL of the Eporner API"
    )
    api_key: Optional[str] = Field(
        default=None,
        description="Optional API key sent as a bearer token"
    )
    user_agent: str = Field(
        default=f"eporner-api-python/{__version__}",
        description="User-Agent header sent with every request"
    )

    # Transport Settings
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Total request timeout in seconds"
    )
    connect_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Connection timeout in seconds"
    )

    # Logging Settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path of a rotating log file"
    )

    # Environment and Runtime Settings
    environment: str = Field(
        default="development",
        description="Runtime environment (development, staging, production)"
    )

    @field_validator('log_level')
    def validate_log_level(cls, v):
        """Validate log level is one of the standard levels"""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'log_level must be one of {valid_levels}')
        return v.upper()

    @field_validator('environment')
    def validate_environment(cls, v):
        """Validate environment is recognized"""
        valid_envs = ['development', 'staging', 'production']
        if v not in valid_envs:
            raise ValueError(f'environment must be one of {valid_envs}')
        return v

    @field_validator('base_url')
    def validate_base_url(cls, v):
        """Strip the trailing slash so endpoint paths join cleanly"""
        return v.rstrip('/')

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.environment == 'production'

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_prefix": "EPORNER_",
        "extra": "ignore"
    }


# Global settings instance
_settings = None


def get_settings() -> Settings:
    """
    Get client settings instance.

    Returns:
        Settings: Client configuration settings
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings

def reload_settings() -> Settings:
    """
    Force reload of settings from environment variables.

    Returns:
        Settings: Fresh client configuration settings
    """
    global _settings
    _settings = None
    return get_settings()
