# server/main.py

import time
from datetime import timedelta
from uuid import uuid4

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import auth, gadgets
from core.codename import CodenameGenerator
from core.config import Settings, load_settings
from core.errors import GadgetAPIError, Unauthenticated
from core.logging_conf import get_logger, setup_logging
from core.security import PasswordHasher, TokenService
from database import create_db_engine, create_session_factory, init_db


logger = get_logger("gadgets.app")


async def gadget_error_handler(request: Request, exc: GadgetAPIError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "request.unhandled",
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    engine = create_db_engine(settings.database_url)
    init_db(engine)

    app = FastAPI(title="IMF Gadget API", version="1.0.0")

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_service = TokenService(
        settings.secret_key,
        algorithm=settings.algorithm,
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )
    app.state.codename_generator = CodenameGenerator(
        pool=settings.codename_pool,
        max_attempts=settings.codename_max_attempts,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def request_logger(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        start = time.perf_counter()
        logger.info(
            "request.start",
            extra={"method": request.method, "path": request.url.path, "request_id": request_id},
        )

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "elapsed_ms": round((time.perf_counter() - start) * 1000.0, 2),
                    "request_id": request_id,
                },
            )
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000.0
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request.end",
            extra={
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                "request_id": request_id,
            },
        )
        return response

    app.add_exception_handler(GadgetAPIError, gadget_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get("/health", tags=["health"])
    def health():
        return {"ok": True}

    app.include_router(auth.router)
    app.include_router(gadgets.router)

    return app


if __name__ == "__main__":
    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
