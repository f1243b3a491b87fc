"""
Configuration Module for Route Metrics

Holds the immutable middleware configuration and the environment-driven
settings used by the example application.

Author: Development Team
Version: 1.0.0
"""

from functools import lru_cache
from typing import Callable, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from starlette.requests import Request


DEFAULT_BUCKETS: Tuple[float, ...] = (
    0.0005,
    0.001,  # 1ms
    0.002,
    0.005,
    0.01,  # 10ms
    0.02,
    0.05,
    0.1,  # 100ms
    0.2,
    0.5,
    1.0,  # 1s
    2.0,
    5.0,
    10.0,  # 10s
    15.0,
    20.0,
    30.0,
)


def default_handler_label_mapping_func(request: Request) -> str:
    """
    Return the path template of the matched route.

    Args:
        request: Incoming request (after routing)

    Returns:
        str: Route template such as ``/users/{user_id}``, or an empty
        string when no route matched
    """
    route = request.scope.get("route")
    return getattr(route, "path", "") if route is not None else ""


def default_skipper(request: Request) -> bool:
    """Never skip."""
    return False


def path_skipper(*paths: str) -> Callable[[Request], bool]:
    """
    Build a skipper that excludes requests to the given URL paths.

    Args:
        paths: Exact URL paths to exclude (e.g. ``/healthz``)

    Returns:
        Callable: Skipper returning True for matching requests
    """
    skipped = frozenset(paths)

    def skipper(request: Request) -> bool:
        return request.url.path in skipped

    return skipper


def _validate_ascending(buckets):
    if not buckets:
        raise ValueError("buckets must not be empty")
    for lower, upper in zip(buckets, buckets[1:]):
        if lower >= upper:
            raise ValueError(f"buckets must be strictly ascending: {lower} >= {upper}")
    return buckets


class Config(BaseModel):
    """
    Request metrics middleware configuration.

    Immutable once built; share freely between applications.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    handler_label_mapping_func: Callable[[Request], str] = Field(
        default=default_handler_label_mapping_func,
        description="Derives the handler label from a request",
    )
    skipper: Callable[[Request], bool] = Field(
        default=default_skipper,
        description="Returns True for requests that must not be recorded",
    )
    namespace: str = Field(default="echo", description="Metric namespace")
    subsystem: str = Field(default="http", description="Metric subsystem")
    buckets: Tuple[float, ...] = Field(
        default=DEFAULT_BUCKETS,
        description="Histogram bucket upper bounds in seconds",
    )
    normalize_http_status: bool = Field(
        default=True,
        description="Record status classes (2xx, 4xx...) instead of exact codes",
    )

    @field_validator("buckets")
    @classmethod
    def validate_buckets(cls, v):
        """Buckets must be non-empty and strictly ascending."""
        return _validate_ascending(v)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "Config":
        """
        Build a middleware configuration from application settings.

        Args:
            settings: Loaded application settings

        Returns:
            Config: Middleware configuration
        """
        skipper = path_skipper(*settings.skip_paths) if settings.skip_paths else default_skipper
        return cls(
            skipper=skipper,
            namespace=settings.namespace,
            subsystem=settings.subsystem,
            buckets=tuple(settings.buckets),
            normalize_http_status=settings.normalize_http_status,
        )


# Default instrumentation config
DEFAULT_CONFIG = Config()


def new_config() -> Config:
    """Return a config with default values."""
    return DEFAULT_CONFIG


class Settings(BaseSettings):
    """
    Application settings with validation and environment variable support.

    All settings can be overridden via ``ROUTE_METRICS_*`` environment
    variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="ROUTE_METRICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    app_title: str = "Route Metrics Example"
    app_version: str = "1.0.0"

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, ge=1024, le=65535, description="Server port")

    # Monitoring
    enable_metrics: bool = Field(default=True, description="Enable Prometheus metrics")
    metrics_path: str = Field(default="/metrics", description="Metrics exposition path")
    namespace: str = Field(default="echo", description="Metric namespace")
    subsystem: str = Field(default="http", description="Metric subsystem")
    buckets: List[float] = Field(
        default_factory=lambda: list(DEFAULT_BUCKETS),
        description="Histogram buckets in seconds",
    )
    normalize_http_status: bool = Field(default=True, description="Group status codes into classes")
    skip_paths: List[str] = Field(default_factory=list, description="Paths excluded from metrics")
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("buckets")
    @classmethod
    def validate_buckets(cls, v):
        """Validate bucket ordering."""
        return _validate_ascending(v)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {', '.join(valid_levels)}")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get application settings.

    Returns:
        Settings: Application configuration
    """
    return Settings()
