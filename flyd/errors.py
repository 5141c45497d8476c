"""
Error taxonomy for the proxy.

Every failure is turned into a terminal plain-text response where it is
raised; nothing is retried and no error body is JSON.
"""

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

logger = logging.getLogger("uvicorn.error")


class ProxyError(Exception):
    """Base class for failures that end a request with a plain-text body."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class Unauthorized(ProxyError):
    """The inbound request carries no authorization credential."""

    status_code = 401

    def __init__(self, message: str = "Authorization header required"):
        super().__init__(message)


class InternalProxyError(ProxyError):
    """The outbound request could not be built."""


class UpstreamUnavailable(ProxyError):
    """The upstream API could not be reached."""


class BadUpstreamResponse(ProxyError):
    """The upstream API answered with something that is not JSON."""


async def proxy_error_handler(request: Request, exc: ProxyError) -> PlainTextResponse:
    logger.warning(
        f"[Proxy] {request.method} {request.url.path} -> {exc.status_code}: {exc.message}"
    )
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> PlainTextResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    logger.info(f"[Proxy] Rejected {request.method} {request.url.path}: {details}")
    return PlainTextResponse(f"Invalid request: {details}", status_code=400)
