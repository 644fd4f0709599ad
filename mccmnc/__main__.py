"""CLI entry point: python -m mccmnc [--output PATH] [options]"""

from __future__ import annotations

import argparse
import contextlib
import logging
import sys
import time
from collections.abc import Iterator
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from mccmnc.config import load_settings
from mccmnc.errors import MccMncError
from mccmnc.output import write_json
from mccmnc.pipeline import run

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

_EPILOG = """\
Example:
  python -m mccmnc --output ./custom-path.json
"""


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mccmnc",
        description=(
            "MCC/MNC Data Updater\n"
            "Downloads and parses the latest MCC/MNC data from ITU-T E.212 documents."
        ),
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--output", "-o", nargs="?", default=None, metavar="PATH",
                        help="Output file path (default: ./data.json)")
    parser.add_argument("--config", default=None, metavar="FILE",
                        help="YAML settings file (base_url, docs_path, timeout, ...)")
    parser.add_argument("--log-level", default="WARNING", type=str.upper,
                        metavar="{DEBUG,INFO,WARNING,ERROR}",
                        help="Logging level (default: WARNING)")
    return parser


def _configure_logging(level: str, console: Console) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


class _Steps:
    """Spinner per pipeline step, leaving a ✓ or ✗ line behind."""

    def __init__(self, console: Console) -> None:
        self._console = console

    @contextlib.contextmanager
    def __call__(self, label: str) -> Iterator[None]:
        ok = False
        try:
            with self._console.status(label, spinner="dots"):
                yield
            ok = True
        finally:
            mark = "[green]✓[/green]" if ok else "[red]✗[/red]"
            self._console.print(f"{mark} {label}")


def _print_summary(
    console: Console,
    output: Path,
    size: int,
    duration: float,
    areas: int,
    entries: int,
) -> None:
    console.print()
    console.print("[bold green]✨ Success![/bold green]")
    console.print(
        f"[dim]\n"
        f"📁 Output file: {output}\n"
        f"📊 File size: {size / 1024:.1f} KB\n"
        f"⏱️  Duration: {duration:.1f}s\n"
        f"📱 Areas: {areas}\n"
        f"📝 Entries: {entries}\n"
        f"[/dim]",
    )


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args, unknown = parser.parse_known_args(argv)

    console = Console()
    err_console = Console(stderr=True)
    log_level = args.log_level if args.log_level in _LOG_LEVELS else "WARNING"
    _configure_logging(log_level, err_console)
    if log_level != args.log_level:
        logger.warning("Unknown log level %r; using WARNING", args.log_level)
    if unknown:
        logger.debug("Ignoring unrecognised arguments: %s", " ".join(unknown))

    start = time.monotonic()
    try:
        settings = load_settings(args.config)
        output = Path(args.output or settings.default_output).resolve()

        console.print("\n[bold]📱 MCC/MNC Data Updater[/bold]\n")
        document = run(settings, progress=_Steps(console))
        size = write_json(output, document)
    except (MccMncError, OSError) as exc:
        logger.debug("Run failed", exc_info=True)
        err_console.print(Text(f"\n✗ Error: {exc}", style="red"))
        return 1

    _print_summary(
        console,
        output,
        size,
        time.monotonic() - start,
        len(document.area_names),
        sum(len(entries) for entries in document.areas.values()),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
