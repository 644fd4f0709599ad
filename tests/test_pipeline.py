"""Tests for mccmnc.pipeline - stage composition."""

from __future__ import annotations

import contextlib
from unittest.mock import patch

import pytest

from mccmnc.errors import ConversionError, NotFoundError, ParseError
from mccmnc.items import DocumentReference, FetchedDocument, MccMncDocument
from mccmnc.pipeline import STEP_CONVERT, STEP_DOWNLOAD, STEP_PARSE, STEP_RESOLVE, run

_DOC_URL = "https://www.itu.int/dms_pub/itu-t/opb/sp/T-SP-E.212B-2024-MSW-E.docx"


def _fetched() -> FetchedDocument:
    return FetchedDocument(
        content=b"PK\x03\x04",
        reference=DocumentReference(url=_DOC_URL, etag='"e1"'),
    )


class TestRun:
    def test_end_to_end(self, settings, index_html, overview_html, annex_html):
        with patch("mccmnc.links.fetch_html", side_effect=[index_html, overview_html]), \
             patch("mccmnc.pipeline.fetch_document", return_value=_fetched()) as mock_doc, \
             patch("mccmnc.pipeline.convert_to_html", return_value=annex_html):
            document = run(settings)

        assert isinstance(document, MccMncDocument)
        assert mock_doc.call_args.args[0] == _DOC_URL
        assert document.metadata.source == _DOC_URL
        assert document.metadata.etag == '"e1"'
        assert document.area_names[0] == "Algeria"
        assert document.areas["ghana"][2].mnc == "11"

    def test_progress_hook_sees_every_step(self, settings, index_html, overview_html, annex_html):
        seen: list[str] = []

        def progress(label: str):
            seen.append(label)
            return contextlib.nullcontext()

        with patch("mccmnc.links.fetch_html", side_effect=[index_html, overview_html]), \
             patch("mccmnc.pipeline.fetch_document", return_value=_fetched()), \
             patch("mccmnc.pipeline.convert_to_html", return_value=annex_html):
            run(settings, progress=progress)

        assert seen == [STEP_RESOLVE, STEP_DOWNLOAD, STEP_CONVERT, STEP_PARSE]

    def test_missing_document_link_stops_before_download(self, settings, index_html):
        no_docx = '<table class="itemtable"><tr><td><a href="/x.pdf">PDF</a></td></tr></table>'
        with patch("mccmnc.links.fetch_html", side_effect=[index_html, no_docx]), \
             patch("mccmnc.pipeline.fetch_document") as mock_doc, \
             pytest.raises(NotFoundError):
            run(settings)
        mock_doc.assert_not_called()

    def test_conversion_error_propagates(self, settings):
        with patch("mccmnc.pipeline.resolve_latest_document_url", return_value=_DOC_URL), \
             patch("mccmnc.pipeline.fetch_document", return_value=_fetched()), \
             patch("mccmnc.pipeline.convert_to_html", side_effect=ConversionError("bad docx")), \
             patch("mccmnc.pipeline.parse_table") as mock_parse, \
             pytest.raises(ConversionError):
            run(settings)
        mock_parse.assert_not_called()

    def test_parse_error_propagates(self, settings):
        with patch("mccmnc.pipeline.resolve_latest_document_url", return_value=_DOC_URL), \
             patch("mccmnc.pipeline.fetch_document", return_value=_fetched()), \
             patch("mccmnc.pipeline.convert_to_html", return_value="<p>no tables</p>"), \
             pytest.raises(ParseError):
            run(settings)
