"""
Purpose:
- FastAPI application factory and router mounts.
- Maps the search error taxonomy onto structured JSON error replies.
- Uvicorn serves this (see app/__main__.py for host/port from settings).
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from .core.errors import SearchError
from .core.middleware import CredentialGuardMiddleware
from .core.logging import configure_logging, get_logger
from .core.settings import settings
from .api.health import router as health_router
from .api.search import QUERY_PATH, router as search_router

logger = get_logger(__name__)

def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(SearchError)
    async def search_error_handler(request: Request, exc: SearchError) -> JSONResponse:
        logger.warning(
            "search_failed",
            path=str(request.url.path),
            code=exc.code,
            error_message=exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Body fields that fail typing (unknown sort/order, empty search_term) are bad arguments too.
        fields = [
            {
                "field": ".".join(str(loc) for loc in err["loc"] if loc != "body") or "body",
                "message": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ]
        first = fields[0] if fields else {"field": "body", "message": "invalid request"}
        content = {
            "error": {
                "code": "INVALID_ARGUMENT",
                "message": f"invalid value for '{first['field']}': {first['message']}",
                "details": {"fields": fields},
            }
        }
        logger.warning("validation_error", path=str(request.url.path), errors=fields)
        return JSONResponse(status_code=400, content=content)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unhandled_exception",
            path=str(request.url.path),
            method=request.method,
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "details": {},
                }
            },
        )

def create_app() -> FastAPI:
    configure_logging(settings)
    app = FastAPI(title="Code Search API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # added last, so it runs first: no token means no body parsing
    app.add_middleware(CredentialGuardMiddleware, header=settings.token_header, paths=[QUERY_PATH])
    _register_error_handlers(app)
    app.include_router(health_router)
    app.include_router(search_router)
    return app


app = create_app()
