"""Command-line entry points for the terminal and HTTP front ends."""

from __future__ import annotations

import argparse

import uvicorn

from helios.config import DEFAULT_SERVER_ROOT, AppConfig, CliOverrides, load_effective_config
from helios.http import create_app
from helios.index import QueryEngine, build_index
from helios.logging import get_logger, setup_logging
from helios.logging.structured import LOG_LEVELS

logger = get_logger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for the interactive search interface."""
    parser = argparse.ArgumentParser(
        prog="helios",
        description="Decentralized Search engine",
    )
    parser.add_argument("-p", "--path", required=True)
    parser.add_argument("--poll-interval-ms", type=int, required=False, default=None)
    parser.add_argument("--log-level", choices=LOG_LEVELS, required=False, default=None)
    return parser


def build_server_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for the HTTP lookup server."""
    parser = argparse.ArgumentParser(prog="helios-server")
    parser.add_argument("--path", required=False, default=DEFAULT_SERVER_ROOT)
    parser.add_argument("--host", required=False, default=None)
    parser.add_argument("--port", type=int, required=False, default=None)
    parser.add_argument("--log-level", choices=LOG_LEVELS, required=False, default=None)
    parser.add_argument("--json-logs", action="store_true", default=None)
    return parser


def _load_config(
    parser: argparse.ArgumentParser, root: str, overrides: CliOverrides
) -> AppConfig:
    try:
        return load_effective_config(root=root, overrides=overrides)
    except ValueError as error:
        parser.error(str(error))


def build_engine(config: AppConfig) -> QueryEngine:
    """Index the configured root once and wrap it for lookups."""
    index = build_index(config.root, exclude_globs=config.index.exclude_globs)
    return QueryEngine(index)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the interactive terminal interface."""
    from helios.session.app import run_tui

    parser = build_arg_parser()
    args = parser.parse_args(argv)
    overrides = CliOverrides(poll_interval_ms=args.poll_interval_ms, log_level=args.log_level)
    config = _load_config(parser, args.path, overrides)
    setup_logging(level=config.logging.level, json_output=config.logging.json_output)
    engine = build_engine(config)
    run_tui(engine, poll_interval=config.tui.poll_interval_seconds)
    return 0


def serve_main(argv: list[str] | None = None) -> int:
    """Entrypoint for the HTTP lookup server."""
    parser = build_server_arg_parser()
    args = parser.parse_args(argv)
    overrides = CliOverrides(
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        json_logs=args.json_logs,
    )
    config = _load_config(parser, args.path, overrides)
    setup_logging(level=config.logging.level, json_output=config.logging.json_output)
    engine = build_engine(config)
    app = create_app(engine)
    logger.info(
        "server_starting",
        url=f"http://{config.http.host}:{config.http.port}",
        root=config.root,
    )
    uvicorn.run(
        app,
        host=config.http.host,
        port=config.http.port,
        log_config=None,
        log_level=config.logging.level,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
