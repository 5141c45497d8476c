import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from opentelemetry import trace

from flyd.http_client import get_http_client
from flyd.machines.forwarder import forward
from flyd.machines.models import ListMachinesRequest, NewMachineRequest
from flyd.machines.translator import (
    extract_credential,
    translate_create,
    translate_list,
)
from flyd.utils import token_fingerprint
from flyd.utils.traced_requests import traced_request

router = APIRouter(prefix="/v0/machines")
tracer = trace.get_tracer(__name__)
logger = logging.getLogger("uvicorn.error")


# The credential dependency is declared first so a missing header wins over
# body and query validation errors.
@router.post("/new")
async def create_machine(
    credential: bytes = Depends(extract_credential),
    body: NewMachineRequest = Body(...),
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    with traced_request(
        tracer,
        operation="create_machine",
        app_name=body.app_name,
        use_private_api=body.use_private_api,
        start_message=f"[Machines-New] Creating machine. App: {body.app_name}, Private API: {body.use_private_api}, Credential: {token_fingerprint(credential)}",
    ):
        outbound = translate_create(credential, body)
        result = await forward(http_client, outbound)
        logger.debug(f"[Machines-New] Machine request relayed. App: {body.app_name}")
        return JSONResponse(result)


@router.get("/list")
async def list_machines(
    credential: bytes = Depends(extract_credential),
    app_name: str = Query(..., description="Application whose machines are listed"),
    use_private_api: bool = Query(False),
    include_deleted: bool = Query(False),
    region: Optional[str] = Query(None, description="Only list machines in this region"),
    http_client: httpx.AsyncClient = Depends(get_http_client),
):
    query = ListMachinesRequest(
        app_name=app_name,
        use_private_api=use_private_api,
        include_deleted=include_deleted,
        region=region,
    )
    with traced_request(
        tracer,
        operation="list_machines",
        app_name=query.app_name,
        use_private_api=query.use_private_api,
        start_message=f"[Machines-List] Listing machines. App: {query.app_name}, Region: {query.region}, Include deleted: {query.include_deleted}, Credential: {token_fingerprint(credential)}",
        extra_attrs={"machines.include_deleted": query.include_deleted},
    ):
        outbound = translate_list(credential, query)
        result = await forward(http_client, outbound)
        logger.debug(f"[Machines-List] Machine list relayed. App: {query.app_name}")
        return JSONResponse(result)
