"""Locate the latest E.212 annex document on the publisher's site.

The site has two levels: an index page listing every published revision
("products"), oldest first, and per-revision overview pages listing the
downloadable files.  The selectors below encode the current layout of
both pages.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from mccmnc.errors import NotFoundError
from mccmnc.fetch import fetch_html

if TYPE_CHECKING:
    from mccmnc.config import Settings

logger = logging.getLogger(__name__)

# Title links of the listed revisions on the index page
_OVERVIEW_LINK_SELECTOR = ".producttitle .title[href]"

# Download table on a revision's overview page
_ITEM_TABLE_SELECTOR = ".itemtable"


def find_overview_path(index_html: str) -> str:
    """Return the href of the newest revision listed on the index page.

    The listing runs oldest to newest, so the last title link wins.

    Raises:
        NotFoundError: If the page lists no revision.
    """
    soup = BeautifulSoup(index_html, "lxml")
    links = soup.select(_OVERVIEW_LINK_SELECTOR)
    if not links:
        raise NotFoundError("Could not find document overview path")

    href = str(links[-1].get("href", "")).strip()
    if not href:
        raise NotFoundError("Could not find document overview path")
    logger.debug("Picked overview link %r out of %d", href, len(links))
    return href


def find_document_path(overview_html: str, extension: str = ".docx") -> str:
    """Return the href of the first *extension* download on an overview page.

    Raises:
        NotFoundError: If the item table holds no such link.
    """
    soup = BeautifulSoup(overview_html, "lxml")
    selector = f'{_ITEM_TABLE_SELECTOR} a[href$="{extension}"]'
    link = soup.select_one(selector)
    href = str(link.get("href", "")).strip() if link is not None else ""
    if not href:
        raise NotFoundError(f"Could not find {extension.lstrip('.').upper()} download link")
    return href


def resolve_latest_document_url(settings: Settings) -> str:
    """Fetch the index and overview pages and return the document's URL.

    Makes exactly two requests, with no caching between calls.

    Raises:
        NotFoundError: If either page lacks the expected link.
        FetchError:    If either page cannot be fetched.
    """
    index_html = fetch_html(
        settings.index_url, timeout=settings.timeout, user_agent=settings.user_agent,
    )
    overview_path = find_overview_path(index_html)
    overview_url = urljoin(f"{settings.base_url}/pub/", overview_path)
    logger.info("Latest revision overview: %s", overview_url)

    overview_html = fetch_html(
        overview_url, timeout=settings.timeout, user_agent=settings.user_agent,
    )
    document_path = find_document_path(overview_html, settings.document_extension)
    document_url = urljoin(f"{settings.base_url}/", document_path)
    logger.info("Latest document: %s", document_url)
    return document_url
