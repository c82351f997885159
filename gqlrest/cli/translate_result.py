from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import IO

from gqlrest.config.load_config import load_app_config
from gqlrest.translate import ExecutionResult, ResponseTranslator, printer_from_name
from gqlrest.utils.logging_setup import configure_logging


logger = logging.getLogger(__name__)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Translate a GraphQL execution result (JSON) into a RESTful envelope or GraphQL body."
    )
    parser.add_argument("--input", default="", help="Path to the execution result JSON (default: stdin).")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--rest", dest="mode", action="store_const", const="rest", help="Emit a RESTful envelope.")
    mode.add_argument(
        "--graphql", dest="mode", action="store_const", const="graphql", help="Emit the GraphQL body untouched."
    )
    parser.add_argument("--config", default="", help="Config TOML (default: env GQLREST_CONFIG_PATH).")
    return parser.parse_args(argv)


def _read_input(path: str) -> str:
    if path:
        return Path(path).expanduser().read_text(encoding="utf-8")
    return sys.stdin.read()


def run(argv: list[str], *, sink: IO[bytes]) -> int:
    args = _parse_args(argv)
    cfg = load_app_config(Path(args.config) if args.config else None)
    # stdout carries the translated body; keep logs off it.
    configure_logging(cfg.logging.level, stream=sys.stderr)

    is_restful = (args.mode or cfg.translator.default_mode) == "rest"
    translator = ResponseTranslator(printer=printer_from_name(cfg.translator.diagnostics))

    try:
        text = _read_input(args.input)
    except OSError as e:
        logger.error("Cannot read input: %s", e)
        return 1

    try:
        result = ExecutionResult.from_json(text)
    except ValueError as e:
        # json.JSONDecodeError is a ValueError too.
        translator.write_error(sink, 400, is_restful=is_restful, message=f"invalid execution result: {e}")
        return 0

    translator.write_json(sink, result, is_restful=is_restful)
    return 0


def main(argv: list[str] | None = None) -> int:
    code = run(argv if argv is not None else sys.argv[1:], sink=sys.stdout.buffer)
    if code == 0:
        sys.stdout.buffer.write(b"\n")
    sys.stdout.flush()
    return code


if __name__ == "__main__":
    raise SystemExit(main())
