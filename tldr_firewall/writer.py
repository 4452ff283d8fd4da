from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Optional, Sequence

from .constants import FILENAME_TEMPLATE_DEFAULT, MSG_NO_ROWS, UTF8_BOM
from .csv_format import to_csv_string
from .expand import FirewallCsvRow


def default_filename(
    template: str = FILENAME_TEMPLATE_DEFAULT, today: Optional[dt.date] = None
) -> str:
    """Export file name, e.g. firewall_rules_2024-05-01.csv."""
    day = today or dt.date.today()
    return template.format(date=day.isoformat())


def render_csv(rows: Sequence[FirewallCsvRow], *, bom: bool = True) -> str:
    """CSV text as written to disk; the BOM keeps Hangul readable in Excel."""
    if not rows:
        raise ValueError(MSG_NO_ROWS)
    body = to_csv_string(rows)
    return (UTF8_BOM + body) if bom else body


def write_csv(path: Path, rows: Sequence[FirewallCsvRow], *, bom: bool = True) -> None:
    """Write the exported rows to `path`, creating parent directories."""
    content = render_csv(rows, bom=bom)
    path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the "\n" separators as-is on every platform.
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(content)
