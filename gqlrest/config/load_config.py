from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any


class ConfigError(RuntimeError):
    pass


_MODES = {"rest", "graphql"}
_DIAGNOSTICS = {"logging", "stderr", "none"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _as_int(value: Any, *, key: str) -> int:
    try:
        return int(value)
    except Exception as e:
        raise ConfigError(f"Invalid int for {key}: {value!r}") from e


def _as_str(value: Any, *, key: str) -> str:
    if value is None:
        raise ConfigError(f"Missing required config key: {key}")
    return str(value)


def _as_choice(value: Any, *, key: str, choices: set[str], upper: bool = False) -> str:
    s = _as_str(value, key=key).strip()
    s = s.upper() if upper else s.lower()
    if s not in choices:
        raise ConfigError(f"Invalid {key}: must be one of {sorted(choices)}, got {value!r}")
    return s


@dataclass(frozen=True)
class ServerConfig:
    host: str
    port: int


@dataclass(frozen=True)
class TranslatorConfig:
    default_mode: str
    diagnostics: str

    @property
    def restful_by_default(self) -> bool:
        return self.default_mode == "rest"


@dataclass(frozen=True)
class LoggingConfig:
    level: str


@dataclass(frozen=True)
class AppConfig:
    server: ServerConfig
    translator: TranslatorConfig
    logging: LoggingConfig


def default_config_path() -> Path:
    return Path(os.getenv("GQLREST_CONFIG_PATH", "config/default.toml")).expanduser().resolve()


def load_app_config(path: Path | None = None) -> AppConfig:
    """Load the TOML config, then apply GQLREST_* environment overrides.

    A missing file is not an error: every key has a built-in default.
    """
    cfg_path = path or default_config_path()
    raw: dict[str, Any] = {}
    if cfg_path.exists():
        try:
            import tomllib  # py3.11+
        except Exception as e:
            raise ConfigError("tomllib is required (Python 3.11+).") from e
        try:
            raw = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {cfg_path}: {e}") from e
    elif path is not None:
        raise ConfigError(f"Config file not found: {cfg_path}")

    server = raw.get("server", {})
    translator = raw.get("translator", {})
    logging_ = raw.get("logging", {})

    port = _as_int(os.getenv("GQLREST_PORT", server.get("port", 8000)), key="server.port")
    if port < 1 or port > 65535:
        raise ConfigError(f"Invalid server.port: must be in [1..65535], got {port}")

    return AppConfig(
        server=ServerConfig(
            host=_as_str(os.getenv("GQLREST_HOST", server.get("host", "127.0.0.1")), key="server.host"),
            port=port,
        ),
        translator=TranslatorConfig(
            default_mode=_as_choice(
                os.getenv("GQLREST_DEFAULT_MODE", translator.get("default_mode", "rest")),
                key="translator.default_mode",
                choices=_MODES,
            ),
            diagnostics=_as_choice(
                os.getenv("GQLREST_DIAGNOSTICS", translator.get("diagnostics", "logging")),
                key="translator.diagnostics",
                choices=_DIAGNOSTICS,
            ),
        ),
        logging=LoggingConfig(
            level=_as_choice(
                os.getenv("GQLREST_LOG_LEVEL", logging_.get("level", "INFO")),
                key="logging.level",
                choices=_LOG_LEVELS,
                upper=True,
            ),
        ),
    )
