"""
Translation of inbound machine requests into Fly Machines API requests.

The caller's credential is read as raw header bytes and copied to the
outbound request as-is. It is never decoded or inspected beyond checking that
it is a valid HTTP field value.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

import httpx
from fastapi import Request

from flyd.errors import InternalProxyError, Unauthorized
from flyd.machines.models import ListMachinesRequest, NewMachineRequest
from flyd.vars import PRIVATE_API_URL, PUBLIC_API_URL

AUTHORIZATION = b"authorization"
JSON_MEDIA_TYPE = "application/json"


@dataclass(frozen=True)
class UpstreamRequest:
    """A fully translated request, ready to be sent to the upstream API."""

    method: str
    url: httpx.URL
    headers: Dict[str, Union[str, bytes]] = field(default_factory=dict)
    json: Optional[Any] = None


def extract_credential(request: Request) -> bytes:
    """
    FastAPI dependency returning the raw ``authorization`` header bytes.

    Runs before body and query validation so a request without a credential
    is always answered with 401 and never reaches the upstream.
    """
    for name, value in request.headers.raw:
        if name.lower() == AUTHORIZATION:
            return value
    raise Unauthorized()


def api_hostname(use_private_api: bool) -> str:
    return PRIVATE_API_URL if use_private_api else PUBLIC_API_URL


def _is_valid_header_value(value: bytes) -> bool:
    # Visible ASCII, obs-text, SP and HTAB; no other control bytes
    return all(byte == 0x09 or (0x20 <= byte and byte != 0x7F) for byte in value)


def prepare_headers(credential: bytes) -> Dict[str, Union[str, bytes]]:
    if not _is_valid_header_value(credential):
        raise InternalProxyError("failed to parse header value")
    return {
        "authorization": credential,
        "content-type": JSON_MEDIA_TYPE,
    }


def machines_url(
    hostname: str,
    app_name: str,
    params: Optional[List[Tuple[str, str]]] = None,
) -> httpx.URL:
    """
    Build ``{hostname}/v1/apps/{app_name}/machines``.

    Query parameters are only appended when there are any, so an empty filter
    set leaves the URL without a trailing ``?``.
    """
    try:
        url = httpx.URL(f"{hostname}/v1/apps/{app_name}/machines")
        if params:
            url = url.copy_merge_params(params)
        return url
    except httpx.InvalidURL as e:
        raise InternalProxyError(f"Failed to parse URL: {e}") from e


def translate_create(credential: bytes, body: NewMachineRequest) -> UpstreamRequest:
    headers = prepare_headers(credential)
    url = machines_url(api_hostname(body.use_private_api), body.app_name)
    return UpstreamRequest(
        method="POST",
        url=url,
        headers=headers,
        json=body.machine_config(),
    )


def list_params(query: ListMachinesRequest) -> List[Tuple[str, str]]:
    """Filters for the listing call; unset filters are left out entirely."""
    params: List[Tuple[str, str]] = []
    if query.include_deleted:
        params.append(("include_deleted", "true"))
    if query.region is not None:
        params.append(("region", query.region))
    return params


def translate_list(credential: bytes, query: ListMachinesRequest) -> UpstreamRequest:
    headers = prepare_headers(credential)
    url = machines_url(
        api_hostname(query.use_private_api), query.app_name, list_params(query)
    )
    return UpstreamRequest(method="GET", url=url, headers=headers)
