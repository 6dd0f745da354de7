"""
Unit tests for settings validation.

Tests cover:
- Log level normalization
- Traversal cap consistency
- Production safety checks
"""

import pytest
from pydantic import ValidationError

from heaven_club.config.settings import Settings

DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class TestSettingsValidation:
    """Test Settings validators."""

    def test_log_level_normalized(self):
        """Lowercase log level is accepted and uppercased."""
        settings = Settings(database_url=DATABASE_URL, log_level="debug")

        assert settings.log_level == "DEBUG"

    def test_invalid_log_level(self):
        """Unknown log level is rejected."""
        with pytest.raises(ValidationError):
            Settings(database_url=DATABASE_URL, log_level="LOUD")

    def test_traversal_cap_below_tier_depth(self):
        """Traversal cap must reach the tier depth."""
        with pytest.raises(ValidationError):
            Settings(
                database_url=DATABASE_URL,
                network_tier_depth=7,
                network_max_traversal_depth=5,
            )

    def test_debug_in_production(self):
        """Debug mode is refused in production."""
        with pytest.raises(ValidationError):
            Settings(
                database_url=DATABASE_URL, environment="production", debug=True
            )

    def test_network_defaults(self):
        """Network defaults match the reward tiers."""
        settings = Settings(database_url=DATABASE_URL, environment="test")

        assert settings.network_tier_depth == 7
        assert settings.network_max_traversal_depth == 64
        assert settings.network_graph_default_depth == 5
