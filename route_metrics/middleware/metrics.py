"""
Prometheus Metrics Middleware

Records a request counter and a latency histogram for every request,
labeled by method, route template and status.

Author: Development Team
Version: 1.0.0
"""

import logging
import time
from typing import Awaitable, Callable, Optional

from fastapi import FastAPI, Request, Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from route_metrics.config import DEFAULT_CONFIG, Config


logger = logging.getLogger(__name__)

HTTP_REQUESTS_COUNT = "requests_total"
HTTP_REQUESTS_DURATION = "request_duration_seconds"
NOT_FOUND_PATH = "/not-found"
NOT_FOUND_SCOPE_KEY = "route_metrics.not_found"

CallNext = Callable[[Request], Awaitable[Response]]
Middleware = Callable[[Request, CallNext], Awaitable[Response]]


def normalize_http_status(status: int) -> str:
    """
    Map an HTTP status code to its class.

    Args:
        status: Numeric HTTP status

    Returns:
        str: One of ``1xx`` .. ``5xx``
    """
    if status < 200:
        return "1xx"
    elif status < 300:
        return "2xx"
    elif status < 400:
        return "3xx"
    elif status < 500:
        return "4xx"
    return "5xx"


def mark_not_found(app: FastAPI) -> FastAPI:
    """
    Flag requests that fall through to the router's not-found handler.

    Wraps the router's default handler so it records
    ``NOT_FOUND_SCOPE_KEY`` in the request scope before delegating.

    Args:
        app: Application whose router should be wrapped

    Returns:
        FastAPI: The same application
    """
    router = app.router
    if getattr(router.default, "_marks_not_found", False):
        return app

    original = router.default

    async def not_found(scope, receive, send):
        scope[NOT_FOUND_SCOPE_KEY] = True
        await original(scope, receive, send)

    not_found._marks_not_found = True
    router.default = not_found
    return app


def is_not_found(request: Request) -> bool:
    """Whether the request was handled by the not-found handler."""
    return bool(request.scope.get(NOT_FOUND_SCOPE_KEY, False))


def metrics_middleware(registry: CollectorRegistry = REGISTRY) -> Middleware:
    """Return a metrics middleware with the default config."""
    return metrics_middleware_with_config(DEFAULT_CONFIG, registry)


def metrics_middleware_with_config(
    config: Config,
    registry: CollectorRegistry = REGISTRY,
) -> Middleware:
    """
    Build a metrics middleware for ``app.middleware("http")``.

    Registers the counter and histogram in *registry*. Registering twice
    against the same registry fails.

    Args:
        config: Middleware configuration
        registry: Registry owning the instruments

    Returns:
        Callable: ``async (request, call_next) -> Response``

    Raises:
        ValueError: If the metric names are already registered
    """
    try:
        http_requests = Counter(
            HTTP_REQUESTS_COUNT,
            "Number of HTTP operations",
            ["status", "method", "handler"],
            namespace=config.namespace,
            subsystem=config.subsystem,
            registry=registry,
        )
        http_duration = Histogram(
            HTTP_REQUESTS_DURATION,
            "Spend time by processing a route",
            ["method", "handler"],
            namespace=config.namespace,
            subsystem=config.subsystem,
            buckets=config.buckets,
            registry=registry,
        )
    except ValueError as e:
        logger.error(f"❌ Request metrics registration failed: {e}")
        raise

    logger.info(
        f"Request metrics registered under '{config.namespace}_{config.subsystem}' "
        f"({len(config.buckets)} buckets, normalize_http_status={config.normalize_http_status})"
    )

    async def middleware(request: Request, call_next: CallNext) -> Response:
        """
        Time the request and record its metrics.

        Route matching happens inside ``call_next``, so the handler label
        is resolved once it returns.
        """
        method = request.method
        app = request.scope.get("app")
        if app is not None and hasattr(app, "router"):
            mark_not_found(app)

        error: Optional[Exception] = None
        response: Optional[Response] = None

        begin = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            error = e
        duration = time.perf_counter() - begin

        path = config.handler_label_mapping_func(request)
        # to avoid attack high cardinality of 404
        if is_not_found(request):
            path = NOT_FOUND_PATH

        if error is not None:
            logger.warning(f"Handler error on {method} {request.url.path}: {error!r}")

        if config.skipper(request):
            if error is not None:
                raise error
            return response

        http_duration.labels(method=method, handler=path).observe(duration)

        # escaped errors are answered by the server error handler
        status_code = 500 if error is not None else response.status_code
        if config.normalize_http_status:
            status = normalize_http_status(status_code)
        else:
            status = str(status_code)

        http_requests.labels(status=status, method=method, handler=path).inc()

        if error is not None:
            raise error
        return response

    return middleware


def instrument_app(
    app: FastAPI,
    config: Optional[Config] = None,
    registry: CollectorRegistry = REGISTRY,
) -> FastAPI:
    """
    Install request metrics on an application.

    Args:
        app: Application to instrument (before it starts serving)
        config: Middleware configuration, defaults to ``DEFAULT_CONFIG``
        registry: Registry owning the instruments

    Returns:
        FastAPI: The same application
    """
    mark_not_found(app)
    app.middleware("http")(metrics_middleware_with_config(config or DEFAULT_CONFIG, registry))
    return app


def get_metrics(registry: CollectorRegistry = REGISTRY) -> tuple:
    """
    Get Prometheus metrics in exposition format.

    Returns:
        tuple: (metrics_data, content_type)
    """
    metrics_data = generate_latest(registry)
    return metrics_data, CONTENT_TYPE_LATEST
