"""
Response envelope shared by every route: {status_code, message, data}.
"""
from typing import Any, Optional
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from schemas.common import ApiResponse
from services.exceptions import GatewayError


def envelope(status_code: int, message: str, data: Optional[Any] = None) -> JSONResponse:
    body = ApiResponse(status_code=status_code, message=message, data=data)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def success_response(message: str, data: Any) -> JSONResponse:
    return envelope(200, message, data)


def error_response(status_code: int, message: str) -> JSONResponse:
    return envelope(status_code, message or "Internal server error")


def gateway_error_response(exc: GatewayError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)
