from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Union

from .connectivity import (
    ArrowTerminals,
    Connection,
    collect_arrow_terminals,
    connections_from_terminals,
)
from .constants import MSG_INVALID_FORMAT, MSG_UNEXPECTED
from .expand import FirewallCsvRow, expand_rows
from .parsers import FirewallInfo, SystemInfo, parse_firewall_rule, parse_system
from .records import RawRecord, as_records

logger = logging.getLogger(__name__)

ErrorKind = Literal["invalid_format", "unexpected"]


class TldrFormatError(ValueError):
    """The document is not well-formed or has no `records` list."""


@dataclass(frozen=True)
class Extraction:
    """Everything derived from one pass over a document's records."""

    systems: dict[str, SystemInfo]
    rules: list[FirewallInfo]
    terminals: dict[str, ArrowTerminals]
    connections: dict[str, Connection]


@dataclass(frozen=True)
class ParseResult:
    success: bool
    data: list[FirewallCsvRow] = field(default_factory=list)
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    extraction: Optional[Extraction] = None


def require_records(document: Any) -> list[Any]:
    if not isinstance(document, Mapping):
        raise TldrFormatError(MSG_INVALID_FORMAT)

    records = document.get("records")
    if not isinstance(records, list):
        raise TldrFormatError(MSG_INVALID_FORMAT)
    return records


def extract(records: list[RawRecord]) -> Extraction:
    logger.debug("total records: %d", len(records))

    systems: dict[str, SystemInfo] = {}
    rules: list[FirewallInfo] = []

    for record in records:
        system = parse_system(record)
        if system is not None:
            logger.debug("system parsed: %s - %s", system.id, system.name)
            systems[system.id] = system

        rule = parse_firewall_rule(record)
        if rule is not None:
            logger.debug(
                "firewall parsed: %s - ports: %s - purpose: %s",
                rule.id,
                ",".join(rule.ports),
                rule.purpose,
            )
            rules.append(rule)

    logger.debug("parsed systems: %d", len(systems))
    logger.debug("parsed firewalls: %d", len(rules))

    terminals = collect_arrow_terminals(records)
    return Extraction(
        systems=systems,
        rules=rules,
        terminals=terminals,
        connections=connections_from_terminals(terminals),
    )


def extract_document(document: Any) -> Extraction:
    return extract(as_records(require_records(document)))


def build_rows(extraction: Extraction) -> list[FirewallCsvRow]:
    return expand_rows(extraction.rules, extraction.systems, extraction.connections)


def extract_firewall_rows(document: Any) -> list[FirewallCsvRow]:
    """Document -> CSV rows. Raises TldrFormatError on a malformed document."""
    return build_rows(extract_document(document))


def parse_tldr_document(document: Any) -> ParseResult:
    """Guarded boundary: never raises, returns a failed ParseResult instead."""
    try:
        extraction = extract_document(document)
        rows = build_rows(extraction)
    except TldrFormatError as e:
        return ParseResult(success=False, error=str(e), error_kind="invalid_format")
    except Exception as e:
        logger.exception("tldr parse error")
        return ParseResult(
            success=False, error=str(e) or MSG_UNEXPECTED, error_kind="unexpected"
        )

    return ParseResult(success=True, data=rows, extraction=extraction)


def parse_tldr_text(raw: Union[str, bytes]) -> ParseResult:
    """Decode a .tldr JSON payload and run it through `parse_tldr_document`."""
    # RecursionError: nesting deeper than the decoder can follow.
    try:
        document = json.loads(raw)
    except (ValueError, TypeError, RecursionError) as e:
        return ParseResult(
            success=False,
            error=f"{MSG_INVALID_FORMAT} ({e})",
            error_kind="invalid_format",
        )
    return parse_tldr_document(document)
