"""mccmnc.pipeline - one end-to-end run, from index page to output document.

Usage::

    from mccmnc.config import load_settings
    from mccmnc.pipeline import run

    document = run(load_settings())
    print(len(document.area_names))

The stages run strictly in sequence; each depends on the previous one's
result and any error ends the run before anything is written.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from mccmnc.convert import convert_to_html
from mccmnc.extract import parse_table
from mccmnc.fetch import fetch_document
from mccmnc.links import resolve_latest_document_url
from mccmnc.output import assemble

if TYPE_CHECKING:
    from mccmnc.config import Settings
    from mccmnc.items import MccMncDocument

logger = logging.getLogger(__name__)

# Called with a step label; the returned context wraps that step.
ProgressHook = Callable[[str], contextlib.AbstractContextManager[object]]

STEP_RESOLVE = "Fetching latest document URL..."
STEP_DOWNLOAD = "Downloading document..."
STEP_CONVERT = "Converting to HTML..."
STEP_PARSE = "Parsing data..."


def _no_progress(label: str) -> contextlib.AbstractContextManager[object]:
    return contextlib.nullcontext()


def run(settings: Settings, *, progress: ProgressHook | None = None) -> MccMncDocument:
    """Resolve, download, convert and parse the latest annex.

    Args:
        settings: Source location and HTTP options.
        progress: Optional hook returning a context manager per step (the
                  CLI uses it to drive its spinner).

    Returns:
        The assembled :class:`~mccmnc.items.MccMncDocument`, not yet written.

    Raises:
        :class:`~mccmnc.errors.MccMncError` subclasses from any stage.
    """
    step = progress or _no_progress

    with step(STEP_RESOLVE):
        document_url = resolve_latest_document_url(settings)

    with step(STEP_DOWNLOAD):
        fetched = fetch_document(
            document_url, timeout=settings.timeout, user_agent=settings.user_agent,
        )

    with step(STEP_CONVERT):
        html = convert_to_html(fetched.content)

    with step(STEP_PARSE):
        result = parse_table(html)

    logger.info(
        "Parsed %d areas, %d entries from %s",
        len(result.area_names), result.entry_count, fetched.reference.url,
    )
    return assemble(result, fetched.reference)
