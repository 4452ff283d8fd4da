from __future__ import annotations

from typing import Optional

from .constants import COLOR_TO_STATUS, STATUS_UNKNOWN


def determine_status(color: Optional[str]) -> str:
    """Map an arrow color to its status label. Unset or unknown colors are STATUS_UNKNOWN."""
    if not color:
        return STATUS_UNKNOWN
    return COLOR_TO_STATUS.get(color, STATUS_UNKNOWN)
