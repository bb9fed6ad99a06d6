import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exception_handlers import http_exception_handler

from ..errors import ProcedureError

logger = logging.getLogger('menu.service.middleware')


async def procedure_error_handler(request: Request, exc: ProcedureError) -> JSONResponse:
    """Render procedure errors as {"error", "error_code", "message"}"""
    log = logger.warning if exc.status_code >= 500 else logger.info
    log(f"PROCEDURE_ERROR: {request.method} {request.url.path} -> {exc.status_code} {exc.error_code}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.error,
            "error_code": exc.error_code,
            "message": exc.message,
        },
    )


async def custom_http_exception_handler(request: Request, exc: HTTPException):
    """Log HTTPExceptions raised by the framework, then defer to FastAPI's default rendering"""
    logger.info(f"HTTP_EXCEPTION: {exc.status_code} - {exc.detail} for {request.url.path}")
    return await http_exception_handler(request, exc)
