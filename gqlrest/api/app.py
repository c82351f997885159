from __future__ import annotations

import os

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from gqlrest.api.errors import APIError, api_error_handler, unhandled_error_handler, validation_error_handler
from gqlrest.config.load_config import AppConfig, load_app_config

from .routers.health import router as health_router
from .routers.translate import router as translate_router


def _cors_origins_from_env() -> list[str]:
    raw = os.getenv("GQLREST_CORS_ORIGINS", "").strip()
    if not raw:
        return [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]
    return [o.strip() for o in raw.split(",") if o.strip()]


def create_app(config: AppConfig | None = None) -> FastAPI:
    app = FastAPI(title="gqlrest API", version="0.1.0")
    app.state.config = config or load_app_config()

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins_from_env(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api/v1", tags=["system"])
    app.include_router(translate_router, prefix="/api/v1", tags=["translate"])
    return app


app = create_app()
