from __future__ import annotations

import itertools
import logging
from dataclasses import astuple, dataclass
from typing import Iterable, Mapping, Optional, Sequence

from .connectivity import Connection
from .parsers import FirewallInfo, SystemInfo
from .status import determine_status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FirewallCsvRow:
    source_system: str
    source_address: str
    target_system: str
    target_address: str
    port: str
    direction: str
    purpose: str
    description: str
    status: str

    def as_tuple(self) -> tuple[str, ...]:
        """Values in CSV column order."""
        return astuple(self)


def or_placeholder(values: Sequence[str]) -> Sequence[str]:
    """An empty list becomes a single "" so the rule still yields a row."""
    return values if values else ("",)


def expand_rule(
    rule: FirewallInfo,
    connection: Optional[Connection],
    systems: Mapping[str, SystemInfo],
) -> list[FirewallCsvRow]:
    """One row per (port, source address, target address) combination."""
    source = systems.get(connection.source_system_id) if connection else None
    target = systems.get(connection.target_system_id) if connection else None

    source_name = source.name if source else ""
    target_name = target.name if target else ""
    description = (
        f"{source.description if source else ''} -> {target.description if target else ''}"
    ).strip()
    status = determine_status(rule.color)

    ports = or_placeholder(rule.ports)
    source_addresses = or_placeholder(source.addresses if source else ())
    target_addresses = or_placeholder(target.addresses if target else ())

    return [
        FirewallCsvRow(
            source_system=source_name,
            source_address=source_addr,
            target_system=target_name,
            target_address=target_addr,
            port=port,
            direction=rule.direction,
            purpose=rule.purpose,
            description=description,
            status=status,
        )
        for port, source_addr, target_addr in itertools.product(
            ports, source_addresses, target_addresses
        )
    ]


def expand_rows(
    rules: Iterable[FirewallInfo],
    systems: Mapping[str, SystemInfo],
    connections: Mapping[str, Connection],
) -> list[FirewallCsvRow]:
    rows: list[FirewallCsvRow] = []
    for rule in rules:
        connection = connections.get(rule.id) if rule.id else None
        logger.debug("rule %s connection: %s", rule.id, connection)
        rule_rows = expand_rule(rule, connection, systems)
        # Never empty: every list falls back to a single placeholder.
        logger.debug(
            "rule %s: source=%s target=%s rows=%d",
            rule.id,
            rule_rows[0].source_system or "N/A",
            rule_rows[0].target_system or "N/A",
            len(rule_rows),
        )
        rows.extend(rule_rows)

    logger.debug("generated rows: %d", len(rows))
    return rows
