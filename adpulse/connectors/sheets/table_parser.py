"""AdPulse — Sheet Table Parser.

Unwraps the gviz JSON envelope and flattens its table into an ordered
list of string-keyed rows, one per sheet row.
"""

import json
import re
from typing import Any, Dict, List

from adpulse.core.errors import FormatError, ParseError, UpstreamError
from adpulse.core.logging import get_logger

logger = get_logger("sheets.parser")

# google.visualization.Query.setResponse({...});
ENVELOPE_PATTERN = re.compile(
    r"google\.visualization\.Query\.setResponse\((.+)\);?\s*$", re.DOTALL
)
DATE_PATTERN = re.compile(r"Date\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)")


def unwrap_envelope(text: str, sheet: str = "") -> Dict[str, Any]:
    """Strip the response wrapper and return the decoded payload.

    Raises FormatError when the wrapper or JSON body is missing, and
    UpstreamError when the source reports ``status: error``.
    """
    match = ENVELOPE_PATTERN.search(text or "")
    if not match:
        raise FormatError(f'Invalid response format from sheet "{sheet}"', sheet)

    try:
        payload = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        raise FormatError(
            f'Undecodable response body from sheet "{sheet}": {e}', sheet
        ) from e

    if not isinstance(payload, dict):
        raise FormatError(f'Invalid response format from sheet "{sheet}"', sheet)

    if payload.get("status") == "error":
        errors = payload.get("errors")
        first = errors[0] if isinstance(errors, list) and errors else {}
        if not isinstance(first, dict):
            first = {}
        detail = first.get("detailed_message") or first.get("message") or "Unknown"
        raise UpstreamError(detail, sheet)

    return payload


def _parse_date(raw: str) -> str:
    """``Date(2024,0,15)`` → ``2024-01-15``. Month is zero-based in the source."""
    m = DATE_PATTERN.fullmatch(raw.strip())
    if not m:
        raise ParseError(f"Not a calendar date cell: {raw!r}")
    year, month, day = int(m.group(1)), int(m.group(2)) + 1, int(m.group(3))
    return f"{year}-{month:02d}-{day:02d}"


def parse_cell(cell: Any) -> Any:
    """Normalize one cell: nulls to ``""``, date cells to ISO, else the raw value."""
    if cell is None or not isinstance(cell, dict):
        return ""
    value = cell.get("v")
    if value is None:
        return ""
    if isinstance(value, str) and value.startswith("Date("):
        try:
            return _parse_date(value)
        except ParseError as e:
            logger.debug(f"Date cell fallback: {e}")
            return cell.get("f") or value
    return value


def parse_table(payload: Dict[str, Any], sheet: str = "") -> List[Dict[str, Any]]:
    """Flatten a decoded gviz payload into ordered row dicts.

    Columns are keyed by label, falling back to id; columns with neither
    are dropped.
    """
    table = payload.get("table")
    if not isinstance(table, dict):
        raise FormatError(f'Response from sheet "{sheet}" has no table', sheet)
    cols = table.get("cols")
    rows = table.get("rows")
    malformed = FormatError(
        f'Response from sheet "{sheet}" has a malformed table', sheet
    )
    if not isinstance(cols, list) or not isinstance(rows, list):
        raise malformed
    if not all(col is None or isinstance(col, dict) for col in cols):
        raise malformed

    headers = [(col or {}).get("label") or (col or {}).get("id") or "" for col in cols]

    records: List[Dict[str, Any]] = []
    for row in rows:
        if row is not None and not isinstance(row, dict):
            raise malformed
        cells = (row or {}).get("c") or []
        if not isinstance(cells, list):
            raise malformed
        record: Dict[str, Any] = {}
        for i, header in enumerate(headers):
            if not header:
                continue
            record[header] = parse_cell(cells[i]) if i < len(cells) else ""
        records.append(record)

    logger.info(
        f"Parsed {len(records)} rows from sheet {sheet!r}",
        extra={"sheet": sheet, "row_count": len(records)},
    )
    return records


def parse_response(text: str, sheet: str = "") -> List[Dict[str, Any]]:
    """Envelope unwrap and table flatten in one step."""
    return parse_table(unwrap_envelope(text, sheet), sheet)
