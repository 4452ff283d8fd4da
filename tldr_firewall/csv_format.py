from __future__ import annotations

from typing import Sequence

from .constants import CSV_HEADERS
from .expand import FirewallCsvRow

_NEEDS_QUOTING = (",", '"', "\n")


def escape_csv(value: str) -> str:
    """Quote a field when it holds a comma, a quote or a newline; double inner quotes."""
    if not value:
        return ""
    if any(ch in value for ch in _NEEDS_QUOTING):
        return '"' + value.replace('"', '""') + '"'
    return value


def csv_line(values: Sequence[str]) -> str:
    return ",".join(escape_csv(v) for v in values)


def to_csv_string(rows: Sequence[FirewallCsvRow]) -> str:
    """Header line plus one line per row, "\\n" separated. No rows -> ""."""
    if not rows:
        return ""

    lines = [",".join(CSV_HEADERS)]
    lines.extend(csv_line(row.as_tuple()) for row in rows)
    return "\n".join(lines)
