"""Liveness check used by the hosting platform to see if the server is awake."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def health_check() -> str:
    return "Glamora API is Running..."
