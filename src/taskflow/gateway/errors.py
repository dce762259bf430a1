"""统一错误响应 -- {"error": {"code": ..., "message": ...}}"""

import structlog
from fastapi import Request
from starlette.responses import JSONResponse
from taskflow.scoring import InvalidInputError

log = structlog.get_logger()


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """构造统一格式的错误响应"""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    """InvalidInputError -> 422"""
    log.warning("invalid_scoring_input", error=str(exc), error_count=len(exc.errors))
    return error_response(422, "INVALID_INPUT", str(exc))
