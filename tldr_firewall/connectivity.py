from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .constants import TERMINAL_END, TERMINAL_START
from .records import RawRecord, is_binding

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Connection:
    source_system_id: str
    target_system_id: str


@dataclass
class ArrowTerminals:
    """Accumulates the start/end bindings seen for one arrow.

    Later bindings for the same terminal overwrite earlier ones; the overwrite
    and any unrecognized terminal role are counted for diagnostics.
    """

    start: Optional[str] = None
    end: Optional[str] = None
    duplicate_terminals: list[str] = field(default_factory=list)
    unknown_terminals: list[str] = field(default_factory=list)

    def bind(self, terminal: object, shape_id: Optional[str]) -> None:
        if terminal == TERMINAL_START:
            if self.start is not None:
                self.duplicate_terminals.append(TERMINAL_START)
            self.start = shape_id
        elif terminal == TERMINAL_END:
            if self.end is not None:
                self.duplicate_terminals.append(TERMINAL_END)
            self.end = shape_id
        else:
            self.unknown_terminals.append(str(terminal))

    @property
    def is_complete(self) -> bool:
        return bool(self.start) and bool(self.end)

    def connection(self) -> Optional[Connection]:
        if not self.is_complete:
            return None
        return Connection(source_system_id=self.start or "", target_system_id=self.end or "")


def collect_arrow_terminals(records: Iterable[RawRecord]) -> dict[str, ArrowTerminals]:
    """Group binding records by arrow id (the binding's `fromId`), in input order."""
    terminals: dict[str, ArrowTerminals] = {}
    count = 0

    for record in records:
        if not is_binding(record):
            continue
        count += 1

        arrow_id = record.from_id
        terminal = record.props.get("terminal")
        logger.debug("binding: %s -> %s (terminal: %s)", arrow_id, record.to_id, terminal)
        if arrow_id is None:
            continue

        terminals.setdefault(arrow_id, ArrowTerminals()).bind(terminal, record.to_id)

    logger.debug("binding records: %d", count)
    return terminals


def connections_from_terminals(terminals: dict[str, ArrowTerminals]) -> dict[str, Connection]:
    connections: dict[str, Connection] = {}
    for arrow_id, slots in terminals.items():
        conn = slots.connection()
        if conn is None:
            logger.debug("incomplete binding: %s (start=%s, end=%s)", arrow_id, slots.start, slots.end)
            continue
        logger.debug("arrow connection: %s - %s -> %s", arrow_id, conn.source_system_id, conn.target_system_id)
        connections[arrow_id] = conn

    logger.debug("resolved connections: %d", len(connections))
    return connections


def resolve_connections(records: Iterable[RawRecord]) -> dict[str, Connection]:
    """Arrow id -> Connection for every arrow bound at both ends."""
    return connections_from_terminals(collect_arrow_terminals(records))


def incomplete_arrows(terminals: dict[str, ArrowTerminals]) -> list[str]:
    return [arrow_id for arrow_id, slots in terminals.items() if not slots.is_complete]
