"""mccmnc - keep an MCC/MNC lookup table in step with the ITU E.212 annex.

One-call usage::

    from mccmnc import load_settings, run, write_json

    document = run(load_settings())
    write_json("data.json", document)

Offline parsing of an already converted annex::

    from mccmnc import parse_table

    result = parse_table(html)
    print(result.area_names[:3])
    print(result.areas["canada"])
"""

from mccmnc.config import Settings, load_settings
from mccmnc.convert import convert_to_html
from mccmnc.errors import (
    ConfigError,
    ConversionError,
    FetchError,
    MccMncError,
    NotFoundError,
    ParseError,
)
from mccmnc.extract import extract_areas, parse_table
from mccmnc.fetch import fetch_document, fetch_html
from mccmnc.items import (
    DocumentReference,
    Entry,
    ExtractionResult,
    FetchedDocument,
    MccMncDocument,
)
from mccmnc.links import find_document_path, find_overview_path, resolve_latest_document_url
from mccmnc.output import assemble, write_json
from mccmnc.pipeline import run

__version__ = "0.1.0"
__all__ = [
    "ConfigError",
    "ConversionError",
    "DocumentReference",
    "Entry",
    "ExtractionResult",
    "FetchError",
    "FetchedDocument",
    "MccMncDocument",
    "MccMncError",
    "NotFoundError",
    "ParseError",
    "Settings",
    "assemble",
    "convert_to_html",
    "extract_areas",
    "fetch_document",
    "fetch_html",
    "find_document_path",
    "find_overview_path",
    "load_settings",
    "parse_table",
    "resolve_latest_document_url",
    "run",
    "write_json",
]
