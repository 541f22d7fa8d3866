from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging

from .exceptions import NotFoundError, PersistenceError

logger = logging.getLogger(__name__)

async def persistence_exception_handler(request: Request, exc: PersistenceError):
    """Store failures: log for the operator, hide the details from the client"""
    logger.error(f"Persistence error during {exc.operation or 'request'}: {exc.message} - Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "Internal server error", "type": exc.__class__.__name__}
    )

async def not_found_exception_handler(request: Request, exc: NotFoundError):
    logger.info(f"Not found: {exc.message} - Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "type": exc.__class__.__name__}
    )

async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unexpected error: {str(exc)} - Path: {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "type": "InternalError"}
    )

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PersistenceError, persistence_exception_handler)
    app.add_exception_handler(NotFoundError, not_found_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
