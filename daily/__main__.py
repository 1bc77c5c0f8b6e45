"""
daily: personal log server.

Usage:
  python -m daily [--config config.yaml] [--addr localhost:11111] [--db ./daily.db]
"""
from __future__ import annotations

import argparse
import logging
import sys

from .config import load_config
from .errors import ConfigurationError, SchemaInitError
from .logs import setup_logging

logger = logging.getLogger("daily")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="daily", description="Personal log server (SQLite + FastAPI)")
    parser.add_argument("--config", default=None, help="YAML config file (default: ./config.yaml if present)")
    parser.add_argument("--addr", default=None, help="Address to listen on, host:port")
    parser.add_argument("--db", dest="db_path", default=None, help="Path to the database to use")
    parser.add_argument("--schema", dest="schema_path", default=None, help="Schema SQL file")
    parser.add_argument("--log-level", dest="log_level", default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config)
        for k in ("addr", "db_path", "schema_path", "log_level"):
            v = getattr(args, k)
            if v:
                setattr(cfg, k, v)
        host, port = cfg.host, cfg.port
    except ConfigurationError as e:
        print(f"invalid configuration: {e}", file=sys.stderr)
        return 2

    setup_logging(cfg.log_level)

    from .api import create_app
    try:
        app = create_app(cfg)
    except SchemaInitError as e:
        logger.error("Failed to open database %r: %s", cfg.db_path, e)
        return 1

    import uvicorn

    logger.info("Listening on http://%s", cfg.addr)
    uvicorn.run(app, host=host, port=port, log_level=cfg.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
