"""
Configuration loader utility for environment-specific settings.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from .settings import (
    ContentSettings,
    DatasetSettings,
    Environment,
    PositioningSettings,
    Settings,
    TileSettings,
    ViewportSettings,
)

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
        env_file_path = Path(f".env.{env.value}")

        if env_file_path.exists():
            env_file = str(env_file_path)
            # Nested settings read their own prefixed keys from the same file
            return Settings(
                _env_file=env_file,
                environment=env,
                dataset=DatasetSettings(_env_file=env_file),
                positioning=PositioningSettings(_env_file=env_file),
                viewport=ViewportSettings(_env_file=env_file),
                tiles=TileSettings(_env_file=env_file),
                content=ContentSettings(_env_file=env_file),
            )

        logger.warning(f"Environment file {env_file_path} not found, using default settings")
        return Settings(environment=env)

    @staticmethod
    def get_available_environments() -> list[str]:
        """Get list of available environment configurations"""
        env_files = []
        for env_file in Path(".").glob(".env.*"):
            env_name = env_file.name.replace(".env.", "")
            if env_name.endswith(".sample"):
                continue
            env_files.append(env_name)
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

        viewport = settings.viewport
        return (
            bool(settings.dataset.url)
            and viewport.min_zoom <= viewport.max_zoom
            and bool(settings.tiles.subdomain_list)
        )

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

        sample_content = f"""# Sample configuration for {env.value} environment
# Copy this file to .env.{env.value} and modify as needed

# Application Configuration
APP_NAME={defaults.app_name}
APP_VERSION={defaults.app_version}
ENVIRONMENT={env.value}
DEBUG={'true' if env == Environment.DEVELOPMENT else 'false'}

# Logging Configuration
LOG_LEVEL={defaults.log_level.value}
LOG_FORMAT={defaults.log_format}

# Dataset Configuration
DATASET_URL={defaults.dataset.url}
DATASET_TIMEOUT_SECONDS={defaults.dataset.timeout_seconds}
DATASET_USER_AGENT={defaults.dataset.user_agent}

# Positioning Configuration
POSITIONING_FIX_TIMEOUT_SECONDS={defaults.positioning.fix_timeout_seconds}
POSITIONING_DESIRED_ACCURACY={defaults.positioning.desired_accuracy.value}

# Viewport Configuration
VIEWPORT_MIN_ZOOM={defaults.viewport.min_zoom}
VIEWPORT_MAX_ZOOM={defaults.viewport.max_zoom}
VIEWPORT_START_ZOOM={defaults.viewport.start_zoom}
VIEWPORT_LOCATE_ZOOM={defaults.viewport.locate_zoom}
VIEWPORT_STAGE_DELAY_MS={defaults.viewport.stage_delay_ms}
VIEWPORT_REASSERT_DELAY_MS={defaults.viewport.reassert_delay_ms}

# Tile Configuration
TILES_URL_TEMPLATE={defaults.tiles.url_template}
TILES_SUBDOMAINS={defaults.tiles.subdomains}
TILES_FAILURE_DEBOUNCE_MS={defaults.tiles.failure_debounce_ms}

# Content Pages
CONTENT_PRIVACY_URL={defaults.content.privacy_url}
CONTENT_CONTACT_URL={defaults.content.contact_url}
"""

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(sample_content)

        return output_path


def load_config_for_environment(environment: Optional[str] = None) -> Settings:
    """Convenience function to load configuration for an environment"""
    return ConfigLoader.load_environment_config(environment)
