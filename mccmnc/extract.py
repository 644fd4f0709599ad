"""Extract the area -> operator table from the converted E.212 annex.

The annex lays its data out as one table in which every area starts with a
header row whose first cell spans all the rows of that area (``rowspan``).
The detail rows that follow hold the operator name in cell 1 and
``"<MCC> <MNC>"`` in cell 2::

    | Canada (rowspan=3) |                  |
    | Bell Mobility      | 302 610          |
    | Telus Mobility     | 302 220          |

Extraction is a fold over the body rows: :func:`fold_row` takes the current
:class:`Accumulator` and one row and returns the next accumulator, so each
step can be exercised in isolation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from mccmnc.errors import ParseError
from mccmnc.items import Entry, ExtractionResult
from mccmnc.markup import load_markup

if TYPE_CHECKING:
    from mccmnc.markup import MarkupNode

logger = logging.getLogger(__name__)

# The first table in the annex is the title/legend block; data is in the second.
DATA_TABLE_INDEX = 1

# Table sections whose rows are not data rows
_NON_BODY_SECTIONS: frozenset[str] = frozenset({"thead", "tfoot"})


@dataclass(frozen=True)
class Accumulator:
    """Fold state: areas built so far plus the area open for detail rows."""

    areas: dict[str, list[Entry]] = field(default_factory=dict)
    area_names: list[str] = field(default_factory=list)
    current_area: str | None = None

    def to_result(self) -> ExtractionResult:
        return ExtractionResult(areas=self.areas, area_names=self.area_names)


# ---------------------------------------------------------------------------
# Row helpers
# ---------------------------------------------------------------------------

def _row_text(row: MarkupNode) -> str:
    return " | ".join(cell.text() for cell in row.children("td"))


def _is_area_header(cell: MarkupNode) -> bool:
    """True when *cell* spans rows, i.e. it opens a new area group."""
    rowspan = cell.attr("rowspan")
    if rowspan is None:
        return False
    try:
        return int(rowspan.strip()) != 0
    except ValueError:
        logger.debug("Ignoring non-numeric rowspan %r", rowspan)
        return False


def _split_codes(text: str, row: MarkupNode) -> tuple[str, str]:
    tokens = text.split()
    if len(tokens) != 2:
        raise ParseError(
            f"Expected '<MCC> <MNC>' in code cell, got {len(tokens)} token(s) "
            f"in row: {_row_text(row)!r}",
        )
    mcc, mnc = tokens
    return mcc, mnc


def body_rows(table: MarkupNode) -> list[MarkupNode]:
    """Return the data rows of *table* in document order.

    Rows directly under ``<table>`` and rows inside ``<tbody>`` count;
    ``<thead>`` and ``<tfoot>`` rows do not.  Nested tables are not entered.
    """
    rows: list[MarkupNode] = []
    for section in table.children("tr", "tbody"):
        if section.tag == "tr":
            rows.append(section)
        else:
            rows.extend(section.children("tr"))
    return rows


# ---------------------------------------------------------------------------
# Fold
# ---------------------------------------------------------------------------

def fold_row(acc: Accumulator, row: MarkupNode) -> Accumulator:
    """Apply one table row to *acc* and return the updated accumulator.

    Raises:
        ParseError: If a detail row comes before any area header, or its
            code cell does not hold exactly two tokens.
    """
    cells = row.children("td")
    if not cells:
        logger.debug("Skipping row without <td> cells")
        return acc

    first = cells[0]
    if _is_area_header(first):
        area_name = first.text()
        key = area_name.lower()
        if key in acc.areas:
            logger.warning("Area %r appears more than once; merging its rows", area_name)
            return replace(acc, current_area=key)
        areas = {**acc.areas, key: []}
        return replace(
            acc,
            areas=areas,
            area_names=[*acc.area_names, area_name],
            current_area=key,
        )

    if acc.current_area is None:
        raise ParseError(
            f"Detail row before any area header row: {_row_text(row)!r}",
        )
    if len(cells) < 2:
        raise ParseError(f"Detail row has no code cell: {_row_text(row)!r}")

    mcc, mnc = _split_codes(cells[1].text(), row)
    entry = Entry(name=first.text(), mcc=mcc, mnc=mnc)
    areas = dict(acc.areas)
    areas[acc.current_area] = [*areas[acc.current_area], entry]
    return replace(acc, areas=areas)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_areas(root: MarkupNode) -> ExtractionResult:
    """Run the row fold over the data table of an already-parsed tree.

    Raises:
        ParseError: If the data table is missing or a row is malformed.
    """
    tables = root.descendants("table")
    if len(tables) <= DATA_TABLE_INDEX:
        raise ParseError(
            f"Expected at least {DATA_TABLE_INDEX + 1} tables, found {len(tables)}",
        )

    acc = Accumulator()
    rows = body_rows(tables[DATA_TABLE_INDEX])
    for row in rows:
        acc = fold_row(acc, row)

    result = acc.to_result()
    logger.info(
        "Extracted %d entries in %d areas from %d rows",
        result.entry_count, len(result.area_names), len(rows),
    )
    return result


def parse_table(html: str) -> ExtractionResult:
    """Extract the MCC/MNC table from converted annex *html*.

    Pure function: no network, no file access.

    Returns:
        :class:`~mccmnc.items.ExtractionResult` with ``areas`` keyed by
        lower-cased area name and ``area_names`` in original case.

    Raises:
        ParseError: If the table layout does not match the annex's.
    """
    return extract_areas(load_markup(html))
