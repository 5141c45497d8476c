"""
The upstream HTTP client shared by every request handler.

One ``httpx.AsyncClient`` is opened for the lifetime of the application and
reused across concurrent requests; httpx pools connections internally.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI, Request

logger = logging.getLogger("uvicorn.error")


def build_http_client(**kwargs) -> httpx.AsyncClient:
    # No timeout: upstream calls may block as long as the upstream does
    kwargs.setdefault("timeout", None)
    kwargs.setdefault("follow_redirects", True)
    kwargs.setdefault("max_redirects", 10)
    return httpx.AsyncClient(**kwargs)


@asynccontextmanager
async def http_client_lifespan(app: FastAPI) -> AsyncIterator[None]:
    async with build_http_client() as client:
        app.state.http_client = client
        logger.info("[HTTP-Client] Shared upstream client opened")
        try:
            yield
        finally:
            logger.info("[HTTP-Client] Shared upstream client closing")


def get_http_client(request: Request) -> httpx.AsyncClient:
    """FastAPI dependency handing out the shared client."""
    return request.app.state.http_client
