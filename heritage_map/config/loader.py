"""
Configuration loader utility for environment-specific settings.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from .settings import Settings, Environment, build_settings

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Utility class for loading environment-specific configurations"""

    @staticmethod
    def load_environment_config(environment: Optional[str] = None) -> Settings:
        """
        Load configuration for the specified environment.

        Args:
            environment: Target environment (development, staging, production, testing)
                        If None, uses ENVIRONMENT env var or defaults to development

        Returns:
            Settings instance with environment-specific configuration
        """
        if environment is None:
            environment = os.getenv("ENVIRONMENT", "development")

        env = Environment(environment.lower())
        env_file = Path(f".env.{env.value}")

        if env_file.exists():
            return build_settings(str(env_file), environment=env)

        logger.warning(f"Environment file {env_file} not found, using default settings")
        return build_settings(environment=env)

    @staticmethod
    def get_available_environments() -> list[str]:
        """Get list of available environment configurations"""
        env_files = []
        for env_file in Path(".").glob(".env.*"):
            if env_file.name.endswith(".sample"):
                continue
            env_files.append(env_file.name.replace(".env.", ""))
        return sorted(env_files)

    @staticmethod
    def validate_environment_config(environment: str) -> bool:
        """
        Validate that an environment configuration exists and is valid.

        Args:
            environment: Environment name to validate

        Returns:
            True if configuration is valid, False otherwise
        """
        try:
            env = Environment(environment.lower())
        except ValueError:
            return False

        if not Path(f".env.{env.value}").exists():
            return False

        try:
            settings = ConfigLoader.load_environment_config(env.value)
        except ValueError as e:
            logger.error(f"Invalid configuration for {env.value}: {e}")
            return False

        required_settings = [
            settings.app_name,
            settings.environment,
            settings.host,
            settings.port,
            settings.database.url,
        ]
        return all(setting is not None for setting in required_settings)

    @staticmethod
    def create_sample_env_file(environment: str, output_path: Optional[str] = None) -> str:
        """
        Create a sample .env file for the specified environment.

        Args:
            environment: Target environment
            output_path: Optional custom output path

        Returns:
            Path to the created sample file
        """
        env = Environment(environment.lower())

        if output_path is None:
            output_path = f".env.{env.value}.sample"

        defaults = Settings()
        is_dev = env == Environment.DEVELOPMENT

        sample_content = f"""# Sample configuration for {env.value} environment
# Copy this file to .env.{env.value} and modify as needed

# Application Configuration
APP_NAME={defaults.app_name}
APP_VERSION={defaults.app_version}
ENVIRONMENT={env.value}
DEBUG={'true' if is_dev else 'false'}

# Server Configuration
HOST={defaults.host}
PORT={defaults.port}
RELOAD={'true' if is_dev else 'false'}
WORKERS={1 if is_dev else 4}

# Logging Configuration
LOG_LEVEL={defaults.log_level.value}
LOG_FORMAT={'text' if is_dev else 'json'}

# Database Configuration
DATABASE_URL={defaults.database.url}
DATABASE_CREATE_TABLES={'true' if is_dev else 'false'}

# Redis Configuration
REDIS_ENABLED={'false' if is_dev else 'true'}
REDIS_HOST={defaults.redis.host}
REDIS_PORT={defaults.redis.port}
REDIS_CACHE_TTL_SECONDS={defaults.redis.cache_ttl_seconds}

# Tour Configuration
TOUR_INTERVAL_SECONDS={defaults.tour.interval_seconds}
TOUR_DEFAULT_RADIUS_KM={defaults.tour.default_radius_km}
TOUR_MAX_SESSIONS={defaults.tour.max_sessions}
TOUR_SESSION_TTL_SECONDS={defaults.tour.session_ttl_seconds}

# Security Configuration
SECURITY_CORS_ORIGINS=*
"""

        with open(output_path, "w") as f:
            f.write(sample_content)

        return output_path


def load_config_for_environment(environment: Optional[str] = None) -> Settings:
    """Convenience function to load configuration for an environment"""
    return ConfigLoader.load_environment_config(environment)
