import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from app.api.routes import api_router
from app.core.config import settings
from app.core.errors import RuleViolation, StorageError

logger = logging.getLogger(__name__)


async def handle_rule_violation(request: Request, exc: RuleViolation) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.code, "message": exc.message},
    )


async def handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": "internal_error"})


def create_app() -> FastAPI:
    logging.basicConfig(level=settings.log_level)
    app = FastAPI(title=settings.app_name)
    # "*" cannot be combined with allow_credentials
    cors_origins = settings.cors_origins
    allow_creds = cors_origins != "*"
    if cors_origins == "*":
        cors_origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=allow_creds,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def catch_unexpected_errors(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(status_code=500, content={"detail": "internal_error"})

    app.add_exception_handler(RuleViolation, handle_rule_violation)
    app.add_exception_handler(StorageError, handle_storage_error)

    @app.get("/", include_in_schema=False)
    def root() -> dict:
        return {"message": "Welcome to CashFly Airlines!"}

    app.include_router(api_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
