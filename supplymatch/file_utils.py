"""Tabular upload parsing (CSV/TSV/Excel) for BOM imports.

Every format goes through _clean_row, so all readers agree on the row shape:
  - header keys stripped and lower-cased, unnamed columns dropped
  - values stripped strings, None → ""
  - rows with no non-empty value skipped

Used by:
  - services/bom_import.py: parse_bom
"""

import csv
import io
from collections.abc import Iterable, Iterator, Sequence

from loguru import logger

EXCEL_SUFFIXES = (".xlsx", ".xlsm")


def parse_tabular_file(content: bytes, filename: str) -> list[dict]:
    """Parse CSV/TSV/Excel file bytes into a list of row dicts.

    Returns empty list on parse failure (logs warning).
    """
    fname = (filename or "").lower()
    try:
        if fname.endswith(EXCEL_SUFFIXES):
            raw_rows = _excel_rows(content)
        else:
            delimiter = "\t" if fname.endswith(".tsv") else ","
            raw_rows = _csv_rows(content, delimiter)
        rows = _to_dicts(raw_rows)
    except Exception as e:
        logger.warning(f"File parse error ({filename}): {e}")
        return []

    logger.debug(f"Parsed {len(rows)} rows from {filename!r}")
    return rows


def _to_dicts(raw_rows: Iterator[Sequence]) -> list[dict]:
    header_row = next(raw_rows, None)
    if not header_row:
        return []
    headers = [_cell(h).lower() for h in header_row]
    rows = []
    for values in raw_rows:
        row = _clean_row(headers, values)
        if row:
            rows.append(row)
    return rows


def _clean_row(headers: Sequence[str], values: Iterable) -> dict | None:
    row = {h: _cell(v) for h, v in zip(headers, values) if h}
    return row if any(row.values()) else None


def _cell(value) -> str:
    return "" if value is None else str(value).strip()


def _excel_rows(content: bytes) -> Iterator[Sequence]:
    import openpyxl

    wb = openpyxl.load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    try:
        yield from wb.active.iter_rows(values_only=True)
    finally:
        wb.close()


def _csv_rows(content: bytes, delimiter: str = ",") -> Iterator[Sequence]:
    text = content.decode("utf-8-sig", errors="replace")
    yield from csv.reader(io.StringIO(text), delimiter=delimiter)
