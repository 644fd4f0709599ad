"""mccmnc.fetch - HTTP access to the publisher's pages and documents.

Uses only the stdlib (``urllib``).  Unlike a general crawler there is no
retry loop: the listing, the overview page and the document are fetched
once each, and any failure ends the run so a half-updated listing is never
paired with a stale document.

Usage::

    from mccmnc.fetch import fetch_html, fetch_document

    html = fetch_html("https://www.itu.int/pub/T-SP-E.212B")
    doc = fetch_document("https://www.itu.int/.../T-SP-E.212B-2024-MSW-E.docx")
    print(len(doc.content), doc.reference.etag)
"""

from __future__ import annotations

import gzip
import logging
import urllib.error
import urllib.request
import zlib
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from mccmnc.config import DOWNLOAD_TIMEOUT, USER_AGENT
from mccmnc.errors import FetchError
from mccmnc.items import DocumentReference, FetchedDocument

if TYPE_CHECKING:
    from email.message import Message

logger = logging.getLogger(__name__)

_HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
_DOCUMENT_ACCEPT = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document,"
    "application/octet-stream;q=0.9,*/*;q=0.8"
)


def _decompress(raw: bytes, headers: Message | None, url: str) -> bytes:
    """Undo any gzip/deflate ``Content-Encoding`` on *raw*."""
    encoding = ""
    if headers is not None:
        encoding = str(headers.get("Content-Encoding", "")).lower().strip()

    try:
        if encoding == "gzip":
            return gzip.decompress(raw)
        if encoding in ("deflate", "zlib"):
            return zlib.decompress(raw)
    except (OSError, zlib.error) as exc:
        raise FetchError(
            f"{encoding} decompression failed for {url}: {exc}", url=url,
        ) from exc
    return raw


def _decode_response_body(raw: bytes, headers: Message | None, url: str) -> str:
    raw = _decompress(raw, headers, url)

    charset = "utf-8"
    if headers is not None:
        charset = headers.get_content_charset("utf-8") or "utf-8"
    try:
        return raw.decode(charset, errors="replace")
    except LookupError:
        return raw.decode("utf-8", errors="replace")


def _get(
    url: str,
    *,
    accept: str,
    timeout: int,
    user_agent: str | None,
) -> tuple[bytes, Message]:
    """Issue a single GET and return ``(body, headers)``.

    Raises:
        FetchError: On HTTP errors, connection failures, or invalid URLs.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise FetchError(f"Unsupported URL scheme: {parsed.scheme!r}", url=url)

    req = urllib.request.Request(
        url,
        headers={
            "User-Agent": user_agent or USER_AGENT,
            "Accept": accept,
            "Accept-Language": "en-US,en;q=0.9",
            "Accept-Encoding": "gzip, deflate",
        },
    )

    logger.debug("GET %s", url)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            return resp.read(), resp.headers
    except urllib.error.HTTPError as exc:
        raise FetchError(
            f"HTTP {exc.code} fetching {url}: {exc.reason}",
            url=url,
            status=exc.code,
        ) from exc
    except urllib.error.URLError as exc:
        raise FetchError(f"URL error fetching {url}: {exc.reason}", url=url) from exc
    except OSError as exc:
        # socket timeouts and resets surface as plain OSError subclasses
        raise FetchError(f"Network error fetching {url}: {exc}", url=url) from exc


def fetch_html(
    url: str,
    *,
    timeout: int = DOWNLOAD_TIMEOUT,
    user_agent: str | None = None,
) -> str:
    """Fetch *url* and return the response body as a decoded string.

    Args:
        url:        Fully-qualified HTTP/HTTPS URL.
        timeout:    Request timeout in seconds (default 30).
        user_agent: Override the default User-Agent string.

    Returns:
        Response body decoded to ``str``.

    Raises:
        FetchError: On HTTP errors, connection failures, or invalid URLs.
    """
    raw, headers = _get(url, accept=_HTML_ACCEPT, timeout=timeout, user_agent=user_agent)
    return _decode_response_body(raw, headers, url)


def fetch_document(
    url: str,
    *,
    timeout: int = DOWNLOAD_TIMEOUT,
    user_agent: str | None = None,
) -> FetchedDocument:
    """Download the binary document at *url* together with its ETag.

    The ETag is opaque revision metadata; a response without one yields an
    empty tag rather than an error.

    Raises:
        FetchError: On HTTP errors, connection failures, or invalid URLs.
    """
    raw, headers = _get(url, accept=_DOCUMENT_ACCEPT, timeout=timeout, user_agent=user_agent)
    raw = _decompress(raw, headers, url)
    etag = str(headers.get("ETag", "") or "") if headers is not None else ""
    if not etag:
        logger.info("No ETag header on %s", url)
    logger.debug("Downloaded %d bytes from %s (etag=%r)", len(raw), url, etag)
    return FetchedDocument(
        content=raw,
        reference=DocumentReference(url=url, etag=etag),
    )
