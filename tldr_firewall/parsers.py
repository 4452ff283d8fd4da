from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .constants import (
    FIELD_ADDRESS,
    FIELD_DESC,
    FIELD_DIRECTION,
    FIELD_NAME,
    FIELD_PORT,
    FIELD_PURPOSE,
)
from .fields import extract_field, first_field, has_sentinel, rich_text_to_plain
from .records import RawRecord, classify_record


@dataclass(frozen=True)
class SystemInfo:
    id: str
    name: str
    addresses: tuple[str, ...]
    description: str


@dataclass(frozen=True)
class FirewallInfo:
    id: str
    ports: tuple[str, ...]
    direction: str
    purpose: str
    color: Optional[str] = None


def system_text(record: RawRecord) -> str:
    return rich_text_to_plain(record.props.get("richText"))


def firewall_text(record: RawRecord) -> str:
    """Arrow label text: rich text wins, the legacy `text` prop is the fallback."""
    rich = rich_text_to_plain(record.props.get("richText"))
    legacy = record.props.get("text")
    legacy = legacy if isinstance(legacy, str) else ""
    return (rich or legacy).strip()


def parse_system(record: RawRecord) -> Optional[SystemInfo]:
    """Parse a rectangle into a SystemInfo, or None if it is not a system.

    A marked rectangle without NAME still parses (empty name).
    """
    if classify_record(record) != "system" or record.id is None:
        return None

    text = system_text(record)
    if not has_sentinel(text):
        return None

    return SystemInfo(
        id=record.id,
        name=first_field(text, FIELD_NAME),
        addresses=tuple(extract_field(text, FIELD_ADDRESS)),
        description=first_field(text, FIELD_DESC),
    )


def parse_firewall_rule(record: RawRecord) -> Optional[FirewallInfo]:
    """Parse an arrow into a FirewallInfo, or None if it is not a rule.

    A marked arrow without a usable id is kept under id "" so its rows are
    still exported; it can never match a binding.
    """
    if classify_record(record) != "firewall_rule":
        return None

    text = firewall_text(record)
    if not has_sentinel(text):
        return None

    color = record.props.get("color")
    return FirewallInfo(
        id=record.id or "",
        ports=tuple(extract_field(text, FIELD_PORT)),
        direction=first_field(text, FIELD_DIRECTION),
        purpose=first_field(text, FIELD_PURPOSE),
        color=color if isinstance(color, str) else None,
    )
