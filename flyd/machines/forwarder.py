import logging
import math
from typing import Any

import httpx
from opentelemetry import trace

from flyd.errors import BadUpstreamResponse, UpstreamUnavailable
from flyd.machines.translator import UpstreamRequest
from flyd.utils.exception_logging import (
    format_exception_message,
    log_exception_with_details,
)

logger = logging.getLogger("uvicorn.error")
tracer = trace.get_tracer(__name__)


def _reject_constant(name: str):
    raise ValueError(f"invalid JSON constant {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def decode_json(response: httpx.Response) -> Any:
    """Decode a body as strict JSON: no NaN, Infinity or overflowing numbers."""
    return response.json(parse_constant=_reject_constant, parse_float=_finite_float)


async def forward(client: httpx.AsyncClient, outbound: UpstreamRequest) -> Any:
    """
    Send a translated request upstream and return the decoded JSON body.

    The upstream status code is not propagated: any response with a JSON
    body is handed back to the caller as a success. Only transport failures
    and undecodable bodies produce errors.
    """
    with tracer.start_as_current_span("forward_upstream") as span:
        span.set_attribute("upstream.method", outbound.method)
        span.set_attribute("upstream.url", str(outbound.url))

        try:
            response = await client.request(
                outbound.method,
                outbound.url,
                headers=outbound.headers,
                json=outbound.json,
            )
        except httpx.RequestError as e:
            log_exception_with_details(
                logger, f"[Upstream] {outbound.method} {outbound.url}", e
            )
            span.set_attribute("upstream.error", "unavailable")
            raise UpstreamUnavailable(
                f"API request failed: {format_exception_message(e)}"
            ) from e

        span.set_attribute("upstream.status_code", response.status_code)
        if response.is_error:
            logger.warning(
                f"[Upstream] {outbound.method} {outbound.url} answered {response.status_code}, relaying body as 200"
            )

        try:
            return decode_json(response)
        except ValueError as e:
            logger.error(
                f"[Upstream] {outbound.method} {outbound.url} returned a non-JSON body: {e}"
            )
            span.set_attribute("upstream.error", "bad_response")
            raise BadUpstreamResponse(
                f"Failed to read response body: {format_exception_message(e)}"
            ) from e
