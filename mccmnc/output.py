"""Wrap an extraction result with provenance metadata and write it as JSON."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import stat
import tempfile
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from mccmnc.items import MccMncDocument, Metadata

if TYPE_CHECKING:
    from mccmnc.items import DocumentReference, ExtractionResult

logger = logging.getLogger(__name__)


def assemble(
    result: ExtractionResult,
    reference: DocumentReference,
    generated: str | None = None,
) -> MccMncDocument:
    """Combine *result* with ``generated``/``source``/``etag`` metadata."""
    return MccMncDocument(
        metadata=Metadata(
            generated=generated or datetime.now(UTC).isoformat(),
            source=reference.url,
            etag=reference.etag,
        ),
        areas=result.areas,
        area_names=result.area_names,
    )


def to_json(document: MccMncDocument) -> str:
    return json.dumps(document.model_dump(by_alias=True), indent=2, ensure_ascii=False)


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_json(path: str | Path, document: MccMncDocument) -> int:
    """Write *document* to *path* atomically and return the size in bytes.

    The JSON goes to a temporary file beside *path* first and is then
    renamed over it, so an existing file is either fully replaced or left
    untouched.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = to_json(document).encode("utf-8")

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        # mkstemp creates 0600; match a plain open() or the file being replaced
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise

    logger.info("Wrote %d bytes to %s", len(data), path)
    return len(data)
