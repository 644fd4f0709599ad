"""Convert the downloaded .docx annex to semantic HTML with mammoth."""

from __future__ import annotations

import io
import logging

import mammoth

from mccmnc.errors import ConversionError

logger = logging.getLogger(__name__)


def convert_to_html(content: bytes) -> str:
    """Convert .docx *content* to HTML.

    mammoth keeps table structure, including vertically merged cells as
    ``rowspan``, which the table extractor relies on.  Converter messages
    (unrecognised styles and the like) are logged, not raised.

    Raises:
        ConversionError: If the bytes are not a readable .docx document or
            the conversion yields no HTML.
    """
    if not content:
        raise ConversionError("Cannot convert an empty document")

    try:
        result = mammoth.convert_to_html(io.BytesIO(content))
    except Exception as exc:
        raise ConversionError(f"Failed to convert document to HTML: {exc}") from exc

    for message in result.messages:
        logger.warning("mammoth %s: %s", message.type, message.message)

    html: str = result.value
    if not html or not html.strip():
        raise ConversionError("Document converted to empty HTML")
    logger.debug("Converted %d bytes of .docx into %d chars of HTML", len(content), len(html))
    return html
