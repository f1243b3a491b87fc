"""
Route Metrics

Prometheus request count and latency instrumentation for FastAPI and
Starlette applications.
"""

from .config import (
    DEFAULT_BUCKETS,
    DEFAULT_CONFIG,
    Config,
    default_handler_label_mapping_func,
    default_skipper,
    new_config,
    path_skipper,
)
from .middleware import (
    NOT_FOUND_PATH,
    get_metrics,
    instrument_app,
    metrics_middleware,
    metrics_middleware_with_config,
    normalize_http_status,
)

__version__ = "1.0.0"

__all__ = [
    'DEFAULT_BUCKETS',
    'DEFAULT_CONFIG',
    'Config',
    'NOT_FOUND_PATH',
    'default_handler_label_mapping_func',
    'default_skipper',
    'get_metrics',
    'instrument_app',
    'metrics_middleware',
    'metrics_middleware_with_config',
    'new_config',
    'normalize_http_status',
    'path_skipper',
]
