"""Tests for application settings.

Critical scenarios tested:
- Defaults allow two to eight players
- Out of range player counts are rejected
- Settings are read from CITADELS_ prefixed environment variables
- initialize_game honours the configured player range
"""

import pytest
from pydantic import ValidationError

from citadels.config import Settings, get_settings
from citadels.services.game import initialize_game

from .conftest import create_config


@pytest.fixture
def fresh_settings():
    """Drop cached settings before and after the test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Test the Settings model."""

    def test_defaults(self, monkeypatch):
        """Without overrides the full table size is allowed."""
        monkeypatch.delenv("CITADELS_MIN_PLAYERS", raising=False)
        monkeypatch.delenv("CITADELS_MAX_PLAYERS", raising=False)
        settings = Settings(_env_file=None)
        assert settings.MIN_PLAYERS == 2
        assert settings.MAX_PLAYERS == 8
        assert settings.DEBUG is False

    def test_too_many_players(self):
        """More than eight players is never allowed."""
        with pytest.raises(ValidationError, match="MAX_PLAYERS cannot exceed 8"):
            Settings(_env_file=None, MAX_PLAYERS=9)

    def test_too_few_players(self):
        """Fewer than two players is never allowed."""
        with pytest.raises(ValidationError, match="MIN_PLAYERS must be at least 2"):
            Settings(_env_file=None, MIN_PLAYERS=1)

    def test_inverted_range(self):
        """The maximum can't be lower than the minimum."""
        with pytest.raises(ValidationError, match="cannot be lower than MIN_PLAYERS"):
            Settings(_env_file=None, MIN_PLAYERS=5, MAX_PLAYERS=4)

    def test_env_prefix(self, monkeypatch):
        """Environment variables use the CITADELS_ prefix."""
        monkeypatch.setenv("CITADELS_MAX_PLAYERS", "6")
        monkeypatch.setenv("MIN_PLAYERS", "5")
        settings = Settings(_env_file=None)
        assert settings.MAX_PLAYERS == 6
        assert settings.MIN_PLAYERS == 2


class TestGetSettings:
    """Test the cached settings accessor."""

    def test_cached(self, fresh_settings):
        """The same settings object is returned every time."""
        assert get_settings() is get_settings()

    def test_player_range_applies(self, fresh_settings, monkeypatch):
        """initialize_game rejects tables outside the configured range."""
        monkeypatch.setenv("CITADELS_MAX_PLAYERS", "3")
        with pytest.raises(ValueError, match="At most 3 players"):
            initialize_game(create_config(4))
        initialize_game(create_config(3))
