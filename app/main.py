from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routers import admin as admin_router
from app.api.routers import bookings as bookings_router
from app.api.routers import health as health_router
from app.core.config import API_PREFIX, CORS_ORIGINS
from app.core.logging import logger
from app.db.session import create_schema


async def _http_error(request: Request, exc: StarletteHTTPException):
    # Every failure carries success=false and a message instead of data
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def _request_error(request: Request, exc: RequestValidationError):
    logger.info("Malformed request on %s", request.url.path)
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Please fill in all required fields"},
    )


async def _unexpected_error(request: Request, exc: Exception):
    logger.exception("UNHANDLED ERROR on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Server error. Please try again later."},
    )


def create_app() -> FastAPI:
    app = FastAPI(title="Museum Bookings API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials="*" not in CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _request_error)
    app.add_exception_handler(Exception, _unexpected_error)

    # Routers
    app.include_router(health_router.router, prefix=API_PREFIX)
    app.include_router(bookings_router.router, prefix=API_PREFIX)
    app.include_router(admin_router.router, prefix=API_PREFIX)

    @app.get("/", include_in_schema=False)
    def root():
        return {"success": True, "message": "Museum API running"}

    @app.on_event("startup")
    def _startup():
        create_schema()
        logger.info("Bookings schema ready.")

    return app


app = create_app()
