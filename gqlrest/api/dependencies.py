from __future__ import annotations

import threading

from fastapi import Request

from gqlrest.config.load_config import AppConfig, load_app_config
from gqlrest.translate import ResponseTranslator, printer_from_name


_TRANSLATOR_INIT_LOCK = threading.Lock()


def get_app_config(request: Request) -> AppConfig:
    cfg = getattr(request.app.state, "config", None)
    if isinstance(cfg, AppConfig):
        return cfg
    cfg = load_app_config()
    request.app.state.config = cfg
    return cfg


def get_translator(request: Request) -> ResponseTranslator:
    """FastAPI dependency: returns the app-wide ResponseTranslator (lazy init).

    The translator is stateless, so one instance wired to the configured diagnostics printer
    is shared by all requests for the lifetime of the process.
    """
    cached = getattr(request.app.state, "translator", None)
    if isinstance(cached, ResponseTranslator):
        return cached

    with _TRANSLATOR_INIT_LOCK:
        cached2 = getattr(request.app.state, "translator", None)
        if isinstance(cached2, ResponseTranslator):
            return cached2

        cfg = get_app_config(request)
        translator = ResponseTranslator(printer=printer_from_name(cfg.translator.diagnostics))
        request.app.state.translator = translator
        return translator
