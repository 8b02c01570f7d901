"""Unit tests for settings, logging setup and the component factory."""

import logging

import pytest
from pydantic import ValidationError

from docfill.core.config import Settings
from docfill.core.factory import ComponentFactory
from docfill.core.logging_config import setup_logging
from docfill.strategies.acquisition import HttpContentFetcher
from docfill.strategies.extraction import PlaceholderExtractor
from docfill.strategies.mapping import FieldAutoMapper


# =============================================================================
# Settings Tests
# =============================================================================


class TestSettings:
    """Test suite for Settings."""

    def test_defaults(self):
        """Test the documented default values."""
        settings = Settings()

        assert settings.fetch_timeout_ms == 30000
        assert settings.max_matches_per_pattern == 100
        assert settings.include_proxy_strategy is False
        assert settings.debug_log_capacity == 1000

    def test_environment_overrides(self, monkeypatch):
        """Test that environment variables override defaults."""
        monkeypatch.setenv("FETCH_TIMEOUT_MS", "5000")
        monkeypatch.setenv("INCLUDE_PROXY_STRATEGY", "true")

        settings = Settings()

        assert settings.fetch_timeout_ms == 5000
        assert settings.include_proxy_strategy is True

    def test_log_level_is_upper_cased(self):
        """Test log level normalization."""
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_format(self):
        """Test that unknown renderers are rejected."""
        with pytest.raises(ValidationError):
            Settings(log_format="xml")

    def test_timeout_must_be_positive(self):
        """Test field constraints on the timeout."""
        with pytest.raises(ValidationError):
            Settings(fetch_timeout_ms=0)


# =============================================================================
# Logging Tests
# =============================================================================


class TestLoggingSetup:
    """Test suite for logging configuration."""

    def test_configure_logging_writes_files(self, tmp_path, reset_structlog):
        """Test that file handlers are created in the log directory."""
        settings = Settings(log_dir=tmp_path / "logs", log_format="console")

        settings.configure_logging()
        logging.getLogger("docfill.test").info("hello file")
        logging.getLogger("docfill.test").error("bad thing")
        setup_logging()

        assert "hello file" in (tmp_path / "logs" / "info.log").read_text()
        error_log = (tmp_path / "logs" / "error.log").read_text()
        assert "bad thing" in error_log
        assert "hello file" not in error_log

    def test_repeated_setup_replaces_handlers(self):
        """Test that calling setup twice does not duplicate handlers."""
        setup_logging()
        package_logger = setup_logging(level=logging.WARNING)

        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.WARNING
        setup_logging()


# =============================================================================
# Factory Tests
# =============================================================================


class TestComponentFactory:
    """Test suite for ComponentFactory."""

    def test_builds_configured_components(self):
        """Test component types and settings propagation."""
        factory = ComponentFactory(Settings(fetch_timeout_ms=1234))

        assert isinstance(factory.get_fetcher(), HttpContentFetcher)
        assert isinstance(factory.get_extractor(), PlaceholderExtractor)
        assert isinstance(factory.get_mapper(), FieldAutoMapper)
        assert len(factory.get_fetcher().strategies) == 8

    def test_proxy_strategy_from_settings(self):
        """Test that the proxy flag extends the strategy table."""
        factory = ComponentFactory(
            Settings(include_proxy_strategy=True, proxy_base_url="https://proxy.test/get")
        )

        strategies = factory.get_fetcher().strategies

        assert len(strategies) == 9
        assert strategies[-1].name == "CORS Proxy"
        assert strategies[-1].url_template.startswith("https://proxy.test/get?url=")

    def test_components_are_cached(self):
        """Test that repeated calls return the same instances."""
        factory = ComponentFactory(Settings())

        assert factory.get_fetcher() is factory.get_fetcher()
        assert factory.get_extractor() is factory.get_extractor()
        assert factory.get_mapper() is factory.get_mapper()

    def test_clear_cache(self):
        """Test that clearing the cache creates new instances."""
        factory = ComponentFactory(Settings())
        fetcher = factory.get_fetcher()

        factory.clear_cache()

        assert factory.get_fetcher() is not fetcher

    def test_debug_log_capacity(self):
        """Test that the debug log honours the configured capacity."""
        factory = ComponentFactory(Settings(debug_log_capacity=5))

        assert factory.debug_log.capacity == 5

    def test_services_share_log_sink(self):
        """Test that mapping events reach the shared debug log."""
        factory = ComponentFactory(Settings())

        factory.get_mapping_service()
        factory.get_mapper().suggest(["email"], [])

        assert factory.debug_log.get_logs(category="mapping")
