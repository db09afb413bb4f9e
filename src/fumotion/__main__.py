"""Command-line entry point: ``python -m fumotion`` or ``fumotion``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from fumotion.config import FumotionConfig
from fumotion.exceptions import FumotionConfigError
from fumotion.tui.app import run_app


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="fumotion", description="Fumotion carpooling in your terminal")
    parser.add_argument("--api-url", default=None, help="API root (default: FUMOTION_API_URL or https://fumotion.tech)")
    parser.add_argument("--config-path", default=None, help="Session file (default: ~/.fumotion-tui/config.json)")
    parser.add_argument("--log-file", default=None, help="Write logs to this file instead of stderr")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG level")
    return parser.parse_args(argv)


def configure_logging(config: FumotionConfig) -> None:
    kwargs = {"filename": str(config.log_file)} if config.log_file is not None else {}
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        **kwargs,
    )


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        config = FumotionConfig.from_env(
            base_url=args.api_url,
            config_path=args.config_path,
            log_file=args.log_file,
            log_level="DEBUG" if args.verbose else None,
        )
    except FumotionConfigError as exc:
        print(f"fumotion: {exc}", file=sys.stderr)
        return 2
    configure_logging(config)
    try:
        asyncio.run(run_app(config))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
