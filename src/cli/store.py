# =============================================================================
# src/cli/store.py -- CLI Store Command
# =============================================================================
#
# Runs one local file through the media ingestion pipeline, using the
# backend chain built from Settings (or the backend named on the command
# line), and prints the StoreResult.
#
# Typical usage:
#   python -m src.cli.store avatar.png                         # embedded
#   python -m src.cli.store avatar.png --backend cloudinary    # asset host
#   python -m src.cli.store avatar.png --backend endpoint --owner-id u123
#   python -m src.cli.store avatar.png --json -o result.json
#
# Text mode prints a short summary with a truncated payload preview; JSON
# mode prints the full StoreResult (including the whole data URI).
# =============================================================================

"""Standalone CLI for storing a media file through the ingestion pipeline.

Usage::

    python -m src.cli.store /path/to/avatar.png
    python -m src.cli.store /path/to/avatar.jpg --backend endpoint --owner-id u123
    python -m src.cli.store /path/to/avatar.webp --json --output result.json

Exits with code 0 when the file was stored and 1 otherwise.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from src.config.settings import Settings
from src.models.media import MediaInput, StoreResult

_CONTENT_TYPE_MAP = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".pdf": "application/pdf",
}
_FALLBACK_CONTENT_TYPE = "application/octet-stream"

_PREVIEW_CHARS = 72


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _format_text_output(result: StoreResult) -> str:
    if not result.success:
        return f"FAILED [{result.backend}] {result.error_type or 'Error'}: {result.error}"

    data = result.data or ""
    preview = data if len(data) <= _PREVIEW_CHARS else f"{data[:_PREVIEW_CHARS]}... ({len(data):,} chars)"
    lines = [f"STORED [{result.backend}]", f"  {preview}"]
    if result.upload and result.upload.external_id:
        lines.append(f"  id: {result.upload.external_id}")
    return "\n".join(lines)


def _format_json_output(result: StoreResult) -> str:
    return json.dumps(result.model_dump(mode="json"), indent=2)


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


def _suppress_logs() -> None:
    """Redirect structlog and stdlib logging to stderr at WARNING+ level.

    Called before ``src.main`` is imported so module-level loggers pick up
    this configuration. Used with --quiet and --json so stdout carries only
    the result.
    """
    import structlog

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.WARNING)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _guess_content_type(path: Path) -> str:
    return _CONTENT_TYPE_MAP.get(path.suffix.lower(), _FALLBACK_CONTENT_TYPE)


async def _run(args: argparse.Namespace, app_settings: Settings) -> int:
    # Deferred so logging is configured before any module-level loggers bind.
    from src.main import build_ingestion_service
    from src.utils.errors import ConfigurationError

    path = Path(args.file).resolve()
    if not path.is_file():
        print(f"Error: File not found: {path}", file=sys.stderr)
        return 1

    try:
        service = build_ingestion_service(app_settings, backend=args.backend)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        data = path.read_bytes()
    except OSError as exc:
        print(f"Error: Cannot read {path}: {exc}", file=sys.stderr)
        return 1

    media = MediaInput.from_bytes(
        data,
        args.content_type or _guess_content_type(path),
        filename=path.name,
    )
    result = await service.store(media, owner_id=args.owner_id)

    text = _format_json_output(result) if args.json_output else _format_text_output(result)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        print(f"Result written to: {args.output}", file=sys.stderr)
    else:
        print(text)

    return 0 if result.success else 1


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.store",
        description="Validate, process and store a media file with the configured backend.",
    )
    parser.add_argument("file", type=str, help="Path to the file to store.")
    parser.add_argument(
        "--backend",
        choices=("embedded", "endpoint", "cloudinary"),
        default=None,
        help="Storage backend (default: STORAGE_BACKEND from the environment).",
    )
    parser.add_argument("--owner-id", default=None, help="Owner id sent to the upload endpoint.")
    parser.add_argument(
        "--content-type",
        default=None,
        help="Declared MIME type (default: inferred from the file extension).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output the full result as JSON.",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write the result to a file instead of stdout.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors (implied by --json).",
    )
    return parser


def main(argv: list[str] | None = None, app_settings: Settings | None = None) -> int:
    """Parse *argv*, store the file and return the process exit code."""
    args = _build_parser().parse_args(argv)
    app_settings = app_settings or Settings()
    if args.quiet or args.json_output:
        _suppress_logs()
    else:
        from src.utils.logging import configure_logging

        configure_logging(app_settings.log_level, app_env=app_settings.app_env)
    return asyncio.run(_run(args, app_settings))


if __name__ == "__main__":
    sys.exit(main())
