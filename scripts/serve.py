#!/usr/bin/env python3
from __future__ import annotations

import os
import sys
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from gqlrest.config.load_config import load_app_config  # noqa: E402
from gqlrest.utils.logging_setup import configure_logging  # noqa: E402


def main() -> int:
    cfg = load_app_config()
    configure_logging(cfg.logging.level)
    reload = os.getenv("GQLREST_RELOAD", "0").strip().lower() in {"1", "true", "yes", "y", "on"}

    try:
        import uvicorn  # type: ignore
    except Exception as e:
        print("Missing dependency: uvicorn. Install it in your runtime environment.", file=sys.stderr)
        print(str(e), file=sys.stderr)
        return 1

    uvicorn.run(
        "gqlrest.api.app:app",
        host=cfg.server.host,
        port=cfg.server.port,
        reload=reload,
        log_level=cfg.logging.level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
