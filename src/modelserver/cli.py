"""Command line entry point that serves the API with uvicorn."""
from __future__ import annotations

import argparse
from dataclasses import replace
from typing import List, Optional

import uvicorn

from .config import CONFIG, ROUTING_MODES, ModelServerConfig
from .logging import configure_logging, get_logger

log = get_logger(__name__)

LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve motion/layout inference and video resizing over HTTP")
    parser.add_argument("--host", default=None, help=f"Bind address (default {CONFIG.api.host})")
    parser.add_argument("--port", type=int, default=None, help=f"Bind port (default {CONFIG.api.port})")
    parser.add_argument("--routing", choices=ROUTING_MODES, default=None, help="Route by path or send every POST to inference")
    parser.add_argument("--cors-origin", default=None, help="Value of Access-Control-Allow-Origin")
    parser.add_argument("--no-video", action="store_true", help="Disable the /resize-video endpoint")
    parser.add_argument(
        "--log-level",
        type=str.lower,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level, e.g. debug or info",
    )
    return parser


def build_config(args: argparse.Namespace, base: ModelServerConfig | None = None) -> ModelServerConfig:
    base = base or CONFIG
    api = replace(
        base.api,
        host=args.host or base.api.host,
        port=args.port or base.api.port,
        routing=args.routing or base.api.routing,
        cors_allow_origin=args.cors_origin or base.api.cors_allow_origin,
    )
    video = replace(base.video, enabled=base.video.enabled and not args.no_video)
    logging_config = replace(base.logging, level=(args.log_level or base.logging.level).upper())
    return replace(base, api=api, video=video, logging=logging_config)


def _uvicorn_log_level(level: str) -> str:
    # MODELSERVER_LOG_LEVEL bypasses argparse, so it can still hold an unknown name.
    level = level.lower()
    return level if level in LOG_LEVELS else "info"


def _cli(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    config = build_config(args)
    configure_logging(config.logging)

    from .api.main import create_app

    app = create_app(config)
    uvicorn.run(
        app,
        host=config.api.host,
        port=config.api.port,
        log_level=_uvicorn_log_level(config.logging.level),
    )
    return 0


def main() -> None:  # pragma: no cover - CLI passthrough
    raise SystemExit(_cli())


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
