"""CLI entrypoints for sidecarfs commands."""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import datetime, timezone
from pathlib import Path

from .config import ConfigError, load_config
from .errors import AccessError
from .logging import configure_logging
from .registration import NullCapabilityRegistry
from .service.app import run_service
from .service.file_system import FileAccessService


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sidecarfs",
        description="Expose this container's filesystem (stat/read) to a remote host.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Register the sidecar scheme and serve stat/read requests.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument(
        "--config",
        type=Path,
        default=Path("."),
        help="Path to .sidecarfs.yml or its directory (defaults to current directory).",
    )
    serve_parser.add_argument("--host", default=None, help="Override the bind host.")
    serve_parser.add_argument(
        "--port", type=int, default=None, help="Override the bind port."
    )
    serve_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write timestamped logs to this file (overrides logging.file).",
    )

    stat_parser = subparsers.add_parser(
        "stat",
        help="Print the link-aware stat of a resource.",
    )
    _add_verbose_option(stat_parser, suppress_default=True)
    stat_parser.add_argument("resource", help="Resource URI or absolute path.")

    cat_parser = subparsers.add_parser(
        "cat",
        help="Write the raw contents of a resource to stdout.",
    )
    _add_verbose_option(cat_parser, suppress_default=True)
    cat_parser.add_argument("resource", help="Resource URI or absolute path.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sidecarfs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        try:
            config = load_config(args.config)
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        if args.host:
            config.server.host = args.host
        if args.port is not None:
            config.server.port = args.port
        if args.log_file is not None:
            config.log_file = args.log_file
        configure_logging(
            verbose=bool(args.verbose), log_file=config.log_file, scheme=config.scheme
        )
        run_service(config)
        return

    configure_logging(verbose=bool(args.verbose))

    # One-off commands never announce a scheme.
    service = FileAccessService(NullCapabilityRegistry("cli"))
    if args.command == "stat":
        try:
            result = asyncio.run(service.stat(args.resource))
        except AccessError as exc:
            parser.exit(1, f"{exc.code.value}: {exc.message}\n")
        print(f"type:     {'|'.join(result.kind.names())}")
        print(f"size:     {result.size_bytes}")
        print(f"created:  {_format_ms(result.created_at_ms)}")
        print(f"modified: {_format_ms(result.modified_at_ms)}")
    elif args.command == "cat":
        try:
            content = asyncio.run(service.read_file(args.resource))
        except AccessError as exc:
            parser.exit(1, f"{exc.code.value}: {exc.message}\n")
        sys.stdout.buffer.write(content)
        sys.stdout.buffer.flush()
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _format_ms(value: int) -> str:
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc).isoformat()


if __name__ == "__main__":
    main(sys.argv[1:])
