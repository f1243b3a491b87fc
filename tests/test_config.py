"""
Configuration Tests

Tests for middleware defaults, validation and settings mapping.

Author: Development Team
Version: 1.0.0
"""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError
from starlette.requests import Request

from route_metrics.config import (
    DEFAULT_BUCKETS,
    DEFAULT_CONFIG,
    Config,
    Settings,
    default_handler_label_mapping_func,
    default_skipper,
    new_config,
    path_skipper,
)


def make_request(path="/", route=None):
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "query_string": b"",
        "headers": [],
    }
    if route is not None:
        scope["route"] = route
    return Request(scope)


class TestDefaultConfig:
    """Test suite for the default configuration."""

    def test_defaults(self):
        """Test default namespace, subsystem and normalization."""
        config = new_config()

        assert config is DEFAULT_CONFIG
        assert config.namespace == "echo"
        assert config.subsystem == "http"
        assert config.normalize_http_status is True
        assert config.skipper is default_skipper
        assert config.handler_label_mapping_func is default_handler_label_mapping_func

    def test_default_buckets(self):
        """Test the 17-bucket schedule from 0.5ms to 30s."""
        assert len(DEFAULT_BUCKETS) == 17
        assert DEFAULT_BUCKETS[0] == 0.0005
        assert DEFAULT_BUCKETS[-1] == 30.0
        assert DEFAULT_CONFIG.buckets == DEFAULT_BUCKETS
        assert list(DEFAULT_BUCKETS) == sorted(DEFAULT_BUCKETS)

    def test_config_is_immutable(self):
        """Test that a built config cannot be changed."""
        with pytest.raises(ValidationError):
            DEFAULT_CONFIG.namespace = "other"

    def test_unsorted_buckets_rejected(self):
        """Test bucket ordering validation."""
        with pytest.raises(ValidationError):
            Config(buckets=[0.1, 0.05, 1.0])

        with pytest.raises(ValidationError):
            Config(buckets=[0.1, 0.1])

        with pytest.raises(ValidationError):
            Config(buckets=[])

    def test_custom_buckets_coerced_to_tuple(self):
        """Test that lists are accepted for buckets."""
        config = Config(buckets=[0.1, 0.5, 1])
        assert config.buckets == (0.1, 0.5, 1.0)


class TestLabelAndSkipper:
    """Test suite for default callables."""

    def test_label_is_route_template(self):
        """Test that the matched route template is used, not the raw path."""
        request = make_request("/users/42", SimpleNamespace(path="/users/{user_id}"))
        assert default_handler_label_mapping_func(request) == "/users/{user_id}"

    def test_label_without_route(self):
        """Test the label when no route matched."""
        assert default_handler_label_mapping_func(make_request("/nowhere")) == ""

    def test_default_skipper_never_skips(self):
        """Test default skipper."""
        assert default_skipper(make_request("/healthz")) is False

    def test_path_skipper(self):
        """Test skipping by exact path."""
        skipper = path_skipper("/healthz", "/metrics")

        assert skipper(make_request("/healthz"))
        assert skipper(make_request("/metrics"))
        assert not skipper(make_request("/healthz/deep"))
        assert not skipper(make_request("/users/1"))


class TestSettings:
    """Test suite for environment-driven settings."""

    def test_settings_defaults(self):
        """Test settings defaults match the middleware defaults."""
        settings = Settings(_env_file=None)

        assert settings.enable_metrics is True
        assert settings.metrics_path == "/metrics"
        assert tuple(settings.buckets) == DEFAULT_BUCKETS
        assert settings.skip_paths == []

    def test_settings_from_environment(self, monkeypatch):
        """Test ROUTE_METRICS_ prefixed variables."""
        monkeypatch.setenv("ROUTE_METRICS_NAMESPACE", "shop")
        monkeypatch.setenv("ROUTE_METRICS_NORMALIZE_HTTP_STATUS", "false")
        monkeypatch.setenv("ROUTE_METRICS_SKIP_PATHS", '["/healthz"]')

        settings = Settings(_env_file=None)

        assert settings.namespace == "shop"
        assert settings.normalize_http_status is False
        assert settings.skip_paths == ["/healthz"]

    def test_invalid_log_level(self):
        """Test log level validation."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="verbose")

        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_config_from_settings(self):
        """Test mapping settings onto a middleware config."""
        settings = Settings(
            _env_file=None,
            namespace="shop",
            subsystem="api",
            buckets=[0.01, 0.1, 1.0],
            normalize_http_status=False,
            skip_paths=["/healthz"],
        )

        config = Config.from_settings(settings)

        assert config.namespace == "shop"
        assert config.subsystem == "api"
        assert config.buckets == (0.01, 0.1, 1.0)
        assert config.normalize_http_status is False
        assert config.skipper(make_request("/healthz"))
        assert not config.skipper(make_request("/users/1"))

    def test_config_from_settings_without_skip_paths(self):
        """Test that no skip paths keeps the default skipper."""
        config = Config.from_settings(Settings(_env_file=None))
        assert config.skipper is default_skipper
