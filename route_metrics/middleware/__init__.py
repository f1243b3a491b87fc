"""
Middleware Module

Contains request instrumentation middleware.
"""

from .metrics import (
    NOT_FOUND_PATH,
    get_metrics,
    instrument_app,
    is_not_found,
    mark_not_found,
    metrics_middleware,
    metrics_middleware_with_config,
    normalize_http_status,
)

__all__ = [
    'NOT_FOUND_PATH',
    'get_metrics',
    'instrument_app',
    'is_not_found',
    'mark_not_found',
    'metrics_middleware',
    'metrics_middleware_with_config',
    'normalize_http_status',
]
