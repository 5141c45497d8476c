from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from flyd.machines.route import router as machines_router

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def hello():
    return "flyd!"


@router.get("/health", response_class=PlainTextResponse)
async def health_check():
    return "YES!"


router.include_router(machines_router)
