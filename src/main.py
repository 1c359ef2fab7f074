# src/main.py — v2
"""CLI entry point — analyze, serve, evict commands.

Usage:
    truthgen analyze (--text TEXT | --url URL | --file PATH) [--json]
    truthgen serve [--host HOST] [--port PORT]
    truthgen evict
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import mimetypes
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from truthgen.version import __version__

if TYPE_CHECKING:
    from truthgen.config.settings import Settings
    from truthgen.core.models import AnalysisResult, Submission
    from truthgen.pipeline.progress import ProgressEvent

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INVALID = 2

_BAR_WIDTH = 30


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_FAILURE

    from truthgen.config.settings import ConfigurationError, Settings
    from truthgen.logging.logger import setup_logging_from_settings

    try:
        settings = Settings()
    except (ConfigurationError, ValueError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    setup_logging_from_settings(settings, verbose=args.verbose)

    try:
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="truthgen",
        description=f"truthgen v{__version__} — content credibility analysis",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- analyze ---
    p_analyze = subparsers.add_parser(
        "analyze", help="Analyze text, a URL or a media file",
    )
    source = p_analyze.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Text to fact-check")
    source.add_argument("--url", help="URL to assess")
    source.add_argument("--file", type=Path, help="Image, video or audio file")
    p_analyze.add_argument(
        "--json", dest="as_json", action="store_true",
        help="Print the result as JSON",
    )
    p_analyze.set_defaults(func=_cmd_analyze)

    # --- serve ---
    p_serve = subparsers.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default=None, help="Bind host (default: SERVER_HOST)")
    p_serve.add_argument("--port", type=int, default=None, help="Bind port (default: SERVER_PORT)")
    p_serve.set_defaults(func=_cmd_serve)

    # --- evict ---
    p_evict = subparsers.add_parser("evict", help="Delete expired local cache entries")
    p_evict.set_defaults(func=_cmd_evict)

    return parser


def _cmd_analyze(args: argparse.Namespace, settings: Settings) -> int:
    """Execute a single analysis."""
    from truthgen.core.errors import ValidationError

    try:
        submission = _build_submission(args)
    except ValidationError as exc:
        print(f"Content required: {exc}", file=sys.stderr)
        return EXIT_INVALID
    return asyncio.run(_run_analysis(submission, settings, args.as_json))


async def _run_analysis(submission: Submission, settings: Settings, as_json: bool) -> int:
    from truthgen.api.facade import build_components
    from truthgen.core.errors import AnalysisFailed, ValidationError

    components = build_components(settings)
    try:
        await components.startup()
        result = await components.orchestrator.run(
            submission, on_progress=_render_progress,
        )
    except ValidationError as exc:
        print(f"\nContent required: {exc}", file=sys.stderr)
        return EXIT_INVALID
    except AnalysisFailed as exc:
        print(f"\nAnalysis failed: {exc.user_message}", file=sys.stderr)
        return EXIT_FAILURE
    finally:
        components.close()

    if as_json:
        print(json.dumps(result.to_wire(), indent=2, ensure_ascii=False))
    else:
        _print_result_summary(result)
    return EXIT_OK


def _cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Run the FastAPI app under uvicorn."""
    import uvicorn

    from truthgen.api.server import create_app

    host = args.host or settings.server_host
    port = args.port or settings.server_port
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)
    return EXIT_OK


def _cmd_evict(args: argparse.Namespace, settings: Settings) -> int:
    """Sweep expired local cache entries."""
    from truthgen.cache.cache_factory import create_local_store

    store = create_local_store(settings)
    if store is None:
        print("Local cache is disabled.")
        return EXIT_OK
    try:
        removed = asyncio.run(store.evict_expired())
    finally:
        store.close()
    print(f"Evicted {removed} expired entries.")
    return EXIT_OK


def _build_submission(args: argparse.Namespace) -> Submission:
    """Turn analyze arguments into a Submission.

    Raises:
        ValidationError: If the file does not exist.
    """
    from truthgen.core.errors import ValidationError
    from truthgen.core.models import Submission

    if args.file is not None:
        path: Path = args.file
        if not path.is_file():
            raise ValidationError(f"File not found: {path}")
        media_type = _detect_media_type(path)
        data = path.read_bytes() if media_type.startswith("image/") else None
        return Submission.from_media_type(
            media_type, name=path.name, size=path.stat().st_size, data=data,
        )
    if args.url is not None:
        return Submission.from_url(args.url)
    return Submission.from_text(args.text or "")


def _detect_media_type(path: Path) -> str:
    """Guess a MIME type from the file extension."""
    media_type, _ = mimetypes.guess_type(path.name)
    return media_type or "application/octet-stream"


def _render_progress(event: ProgressEvent) -> None:
    """Draw a single-line progress bar on stderr."""
    percent = event.percent
    filled = int(_BAR_WIDTH * percent / 100)
    bar = "#" * filled + "-" * (_BAR_WIDTH - filled)
    message = event.message
    sys.stderr.write(f"\r[{bar}] {percent:3d}% {message:<40.40}")
    if event.stage in ("completed", "failed"):
        sys.stderr.write("\n")
    sys.stderr.flush()


def _print_result_summary(result: AnalysisResult) -> None:
    """Print a human-readable summary of AnalysisResult."""
    print("\nAnalysis complete:")
    print(f"  Status:      {result.status}")
    print(f"  Confidence:  {result.confidence}%")
    issues = result.issues
    if issues:
        print("  Issues:")
        for issue in issues:
            print(f"    - {issue}")
    counter = result.counter_content
    print(f"  Fact check:  {counter.fact_check}")
    print(f"  Visual:      {counter.visual_content}")
    print(f"  Short form:  {counter.short_form}")


if __name__ == "__main__":
    sys.exit(main())
