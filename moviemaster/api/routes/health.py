from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from typing import Dict

router = APIRouter()

LIVENESS_MESSAGE = "MovieMaster Pro Server Running"

@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return LIVENESS_MESSAGE

@router.get("/health")
def health(request: Request) -> Dict[str, str]:
    connection = request.app.state.connection
    return {"status": "ok", "database": connection.state.value}

@router.get("/ready")
def ready(request: Request) -> JSONResponse:
    if not request.app.state.connection.is_connected:
        return JSONResponse(status_code=503, content={"status": "not ready"})
    return JSONResponse(status_code=200, content={"status": "ready"})
