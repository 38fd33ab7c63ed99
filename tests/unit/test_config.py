"""
Unit tests for settings and the environment config loader
"""
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from spotmap.config.loader import ConfigLoader
from spotmap.config.settings import (
    Environment,
    PositioningSettings,
    Settings,
    TileSettings,
    ViewportSettings,
)
from spotmap.models.internal_models import LocationAccuracy


def test_defaults_match_map_policies():
    settings = Settings()
    assert settings.positioning.fix_timeout_seconds == 12
    assert settings.viewport.min_zoom == 3.0
    assert settings.viewport.max_zoom == 19.0
    assert settings.viewport.stage_delay_seconds == 0.25
    assert settings.viewport.reassert_delay_seconds == 0.22
    assert settings.tiles.failure_debounce_seconds == 0.5
    assert settings.tiles.subdomain_list == ["a", "b", "c", "d"]


def test_env_prefixes():
    with patch.dict(os.environ, {"VIEWPORT_LOCATE_ZOOM": "13", "TILES_SUBDOMAINS": "x,y"}):
        assert ViewportSettings().locate_zoom == 13.0
        assert TileSettings().subdomain_list == ["x", "y"]


def test_environment_is_normalised():
    assert Settings(environment="PRODUCTION").is_production()


def test_sample_env_file_round_trip(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    sample = ConfigLoader.create_sample_env_file("staging")
    assert sample == ".env.staging.sample"
    assert ConfigLoader.get_available_environments() == []
    assert not ConfigLoader.validate_environment_config("staging")

    (tmp_path / ".env.staging").write_text((tmp_path / sample).read_text(encoding="utf-8"), encoding="utf-8")
    assert ConfigLoader.get_available_environments() == ["staging"]
    assert ConfigLoader.validate_environment_config("staging")

    settings = ConfigLoader.load_environment_config("staging")
    assert settings.environment == Environment.STAGING


def test_unknown_environment_is_invalid():
    assert not ConfigLoader.validate_environment_config("moon")


def test_environment_file_reaches_nested_settings(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env.testing").write_text(
        "APP_NAME=Slushi Test\nVIEWPORT_LOCATE_ZOOM=13\nTILES_SUBDOMAINS=x,y\n",
        encoding="utf-8",
    )
    settings = ConfigLoader.load_environment_config("testing")
    assert settings.app_name == "Slushi Test"
    assert settings.viewport.locate_zoom == 13.0
    assert settings.tiles.subdomain_list == ["x", "y"]


def test_desired_accuracy_is_validated_at_load():
    assert PositioningSettings().desired_accuracy == LocationAccuracy.HIGH
    with patch.dict(os.environ, {"POSITIONING_DESIRED_ACCURACY": "best"}):
        assert PositioningSettings().desired_accuracy == LocationAccuracy.BEST
    with patch.dict(os.environ, {"POSITIONING_DESIRED_ACCURACY": "pinpoint"}):
        with pytest.raises(ValidationError):
            PositioningSettings()
