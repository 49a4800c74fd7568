"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory_api.config import settings
from inventory_api.database import init_db
from inventory_api.errors import InventoryError, StorageError
from inventory_api.logging_config import configure_logging
from inventory_api.routes import health, items

logger = logging.getLogger(__name__)

STATIC_PATH = Path(__file__).parent / "static"


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def validation_message(exc: RequestValidationError) -> str:
    """Reduce pydantic's error list to the first human-readable message."""
    errors = exc.errors()
    if not errors:
        return "invalid request"
    error = errors[0]
    message = error.get("msg", "invalid request")
    if error.get("type") == "value_error":
        # Our validators raise ValueError with the exact client-facing text
        return message.removeprefix("Value error, ")
    field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{field}: {message}" if field else message


async def inventory_error_handler(request: Request, exc: InventoryError):
    return error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(400, validation_message(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = StorageError()
    return error_response(error.status_code, error.message)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("%s %s ready", settings.APP_NAME, settings.APP_VERSION)
    yield


def create_app() -> FastAPI:
    """Build the application with its routers, handlers and static front end."""
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="A small inventory tracking API with a static front end",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InventoryError, inventory_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.mount("/static", StaticFiles(directory=STATIC_PATH), name="static")

    app.include_router(health.router)
    app.include_router(items.router)
    app.include_router(items.legacy_router)

    @app.get("/", include_in_schema=False)
    def root():
        """Redirect to the GUI."""
        return RedirectResponse(url="/static/index.html")

    return app


app = create_app()
