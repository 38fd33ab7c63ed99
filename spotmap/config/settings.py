"""
Configuration management system using Pydantic Settings.
Supports environment-based configuration for different deployment environments.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import List
from enum import Enum

from spotmap.models.internal_models import LocationAccuracy


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


class DatasetSettings(BaseSettings):
    """Remote location dataset (published spreadsheet CSV)"""

    url: str = Field(
        default=(
            "https://docs.google.com/spreadsheets/d/e/2PACX-1vTAOcnlq0N_r7itvVdMhhzoWLo4AmXlvb1KwZlpjZnbNoslqExGlqdpRUxnWa1wqPGo9Lmnhqr5LTMi"
            "/pub?output=csv"
        ),
        description="URL of the published CSV with id,name,lat,lng columns",
    )
    timeout_seconds: float = Field(default=15.0, gt=0, le=120)
    user_agent: str = Field(default="no.slushi.app")

    model_config = {"env_prefix": "DATASET_", "extra": "ignore"}


class PositioningSettings(BaseSettings):
    """Device positioning configuration"""

    fix_timeout_seconds: float = Field(default=12.0, gt=0, le=120)
    desired_accuracy: LocationAccuracy = Field(default=LocationAccuracy.HIGH)

    model_config = {"env_prefix": "POSITIONING_", "extra": "ignore"}


class ViewportSettings(BaseSettings):
    """Camera limits and the staged/re-asserted move policies"""

    min_zoom: float = Field(default=3.0, ge=0, le=22)
    max_zoom: float = Field(default=19.0, ge=0, le=22)

    start_lat: float = Field(default=60.4720)
    start_lng: float = Field(default=8.4689)
    start_zoom: float = Field(default=5.6)

    locate_zoom: float = Field(default=14.5)
    nearest_zoom: float = Field(default=15.0)

    # Staged move: large jumps into street level go through a midpoint zoom
    stage_delta_threshold: float = Field(default=4.5, gt=0)
    stage_min_target: float = Field(default=11.5)
    stage_zoom_in: float = Field(default=12.0)
    stage_zoom_out: float = Field(default=10.0)
    stage_delay_ms: int = Field(default=250, ge=0, le=5000)

    # Redundant re-assertion after every direct move
    reassert_delay_ms: int = Field(default=220, ge=0, le=5000)

    @property
    def stage_delay_seconds(self) -> float:
        return self.stage_delay_ms / 1000.0

    @property
    def reassert_delay_seconds(self) -> float:
        return self.reassert_delay_ms / 1000.0

    model_config = {"env_prefix": "VIEWPORT_", "extra": "ignore"}


class TileSettings(BaseSettings):
    """Map tile endpoint and failure aggregation"""

    url_template: str = Field(
        default="https://{s}.basemaps.cartocdn.com/light_all/{z}/{x}/{y}{r}.png"
    )
    subdomains: str = Field(default="a,b,c,d", description="Comma-separated {s} values")
    user_agent: str = Field(default="no.slushi.app")
    min_zoom: int = Field(default=3, ge=0, le=22)
    max_zoom: int = Field(default=19, ge=0, le=22)
    timeout_seconds: float = Field(default=10.0, gt=0, le=60)
    failure_debounce_ms: int = Field(default=500, ge=0, le=10000)

    @property
    def subdomain_list(self) -> List[str]:
        """Subdomains parsed from the comma-separated setting"""
        return [part.strip() for part in self.subdomains.split(",") if part.strip()]

    @property
    def failure_debounce_seconds(self) -> float:
        return self.failure_debounce_ms / 1000.0

    model_config = {"env_prefix": "TILES_", "extra": "ignore"}


class ContentSettings(BaseSettings):
    """In-app content pages"""

    privacy_url: str = Field(default="https://slushi.no/privacy.html")
    contact_url: str = Field(default="https://slushi.no/contact.html")

    model_config = {"env_prefix": "CONTENT_", "extra": "ignore"}


class Settings(BaseSettings):
    """Main application settings"""

    # Application Configuration
    app_name: str = Field(default="Slushi")
    app_version: str = Field(default="1.0.0")
    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    # Logging Configuration
    log_level: LogLevel = Field(default=LogLevel.INFO)
    log_format: str = Field(default="json", description="json or text")

    # Nested Settings
    dataset: DatasetSettings = Field(default_factory=DatasetSettings)
    positioning: PositioningSettings = Field(default_factory=PositioningSettings)
    viewport: ViewportSettings = Field(default_factory=ViewportSettings)
    tiles: TileSettings = Field(default_factory=TileSettings)
    content: ContentSettings = Field(default_factory=ContentSettings)

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
