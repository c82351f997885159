from __future__ import annotations

import importlib.metadata
import time
from typing import Any

from fastapi import APIRouter, Request

from gqlrest.api.dependencies import get_app_config


router = APIRouter()


def _pkg_version(name: str) -> str | None:
    try:
        return str(importlib.metadata.version(name))
    except importlib.metadata.PackageNotFoundError:
        return None


@router.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/version")
def version(request: Request) -> dict[str, Any]:
    cfg = get_app_config(request)
    return {
        "service": "gqlrest",
        "api": "v1",
        "default_mode": cfg.translator.default_mode,
        "deps": {
            "fastapi": _pkg_version("fastapi"),
            "pydantic": _pkg_version("pydantic"),
            "uvicorn": _pkg_version("uvicorn"),
        },
        "ts": time.time(),
    }
