from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Optional

from .constants import (
    GEO_RECTANGLE,
    RICH_TEXT_DOC,
    SHAPE_ARROW,
    SHAPE_GEO,
    TYPE_NAME_BINDING,
    TYPE_NAME_SHAPE,
)

RecordKind = Literal["system", "firewall_rule", "binding", "ignored"]

_EMPTY_PROPS: Mapping[str, Any] = MappingProxyType({})


def _opt_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class RawRecord:
    """Read-only view over one entry of a tldraw document's `records` list.

    Only the fields the exporter looks at are lifted out; `props` keeps the
    kind-specific payload (richText, text, color, geo, terminal) untouched.
    """

    id: Optional[str]
    type_name: Optional[str]
    type: Optional[str]
    props: Mapping[str, Any] = field(default_factory=dict)
    from_id: Optional[str] = None
    to_id: Optional[str] = None

    @classmethod
    def from_mapping(cls, obj: Any) -> "RawRecord":
        if not isinstance(obj, Mapping):
            return cls(id=None, type_name=None, type=None)

        props = obj.get("props")
        return cls(
            id=_opt_str(obj.get("id")),
            type_name=_opt_str(obj.get("typeName")),
            type=_opt_str(obj.get("type")),
            props=MappingProxyType(dict(props)) if isinstance(props, Mapping) else _EMPTY_PROPS,
            from_id=_opt_str(obj.get("fromId")),
            to_id=_opt_str(obj.get("toId")),
        )


def as_records(items: list[Any]) -> list[RawRecord]:
    """Wrap raw document entries, preserving input order."""
    return [item if isinstance(item, RawRecord) else RawRecord.from_mapping(item) for item in items]


def _is_rich_doc(value: Any) -> bool:
    return isinstance(value, Mapping) and value.get("type") == RICH_TEXT_DOC


def is_system_candidate(record: RawRecord) -> bool:
    return (
        record.type_name == TYPE_NAME_SHAPE
        and record.type == SHAPE_GEO
        and record.props.get("geo") == GEO_RECTANGLE
        and _is_rich_doc(record.props.get("richText"))
    )


def is_firewall_candidate(record: RawRecord) -> bool:
    return record.type_name == TYPE_NAME_SHAPE and record.type == SHAPE_ARROW


def is_binding(record: RawRecord) -> bool:
    return record.type_name == TYPE_NAME_BINDING


def classify_record(record: RawRecord) -> RecordKind:
    """Route a record by its kind fields alone. Unrelated records are "ignored"."""
    if is_system_candidate(record):
        return "system"
    if is_firewall_candidate(record):
        return "firewall_rule"
    if is_binding(record):
        return "binding"
    return "ignored"
