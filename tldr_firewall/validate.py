# tldr_firewall/validate.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

from .pipeline import Extraction

Severity = Literal["error", "warning"]


@dataclass(frozen=True)
class ValidationIssue:
    """Structured diagnostic for callers that want more than strings."""

    severity: Severity
    code: str
    message: str
    path: str = ""
    hint: Optional[str] = None


@dataclass(frozen=True)
class ValidateConfig:
    """Validation configuration.

    Every check here is advisory: rows are exported regardless. `escalate`
    turns selected warnings into errors; `ignore` drops them entirely.
    """

    ignore: frozenset[str] = field(default_factory=frozenset)
    escalate: frozenset[str] = field(default_factory=frozenset)


def validate_extraction(
    extraction: Extraction, cfg: Optional[ValidateConfig] = None
) -> list[ValidationIssue]:
    """Return diagnostics for bindings, rules and systems of one extraction."""

    cfg = cfg or ValidateConfig()
    issues: list[ValidationIssue] = []

    def emit(
        severity: Severity,
        code: str,
        message: str,
        path: str = "",
        hint: Optional[str] = None,
    ) -> None:
        if code in cfg.ignore:
            return
        final_severity: Severity = (
            "error" if (severity == "warning" and code in cfg.escalate) else severity
        )
        issues.append(
            ValidationIssue(
                severity=final_severity,
                code=code,
                message=message,
                path=path,
                hint=hint,
            )
        )

    for arrow_id, slots in extraction.terminals.items():
        if not slots.is_complete:
            emit(
                "warning",
                "W_BINDING_INCOMPLETE",
                f"arrow {arrow_id!r} is bound at only one end "
                f"(start={slots.start!r}, end={slots.end!r})",
                path=f"/bindings/{arrow_id}",
                hint="Attach both arrow ends to a system rectangle",
            )

        for terminal in slots.duplicate_terminals:
            emit(
                "warning",
                "W_BINDING_DUPLICATE_TERMINAL",
                f"arrow {arrow_id!r} has more than one {terminal!r} binding; "
                "the last one wins",
                path=f"/bindings/{arrow_id}/{terminal}",
            )

        for terminal in slots.unknown_terminals:
            emit(
                "warning",
                "W_BINDING_UNKNOWN_TERMINAL",
                f"arrow {arrow_id!r} has a binding with unknown terminal {terminal!r}; "
                "skipping",
                path=f"/bindings/{arrow_id}",
            )

    for i, rule in enumerate(extraction.rules):
        conn = extraction.connections.get(rule.id) if rule.id else None
        if not rule.id:
            emit(
                "warning",
                "W_RULE_MISSING_ID",
                f"firewall rule #{i} has no record id; it cannot be matched to "
                "bindings and source/target fields will be empty",
                path=f"/rules/{i}",
            )
        elif conn is None:
            emit(
                "warning",
                "W_RULE_UNCONNECTED",
                f"firewall rule {rule.id!r} is not connected at both ends; "
                "source/target fields will be empty",
                path=f"/rules/{rule.id}",
            )
        else:
            for end, shape_id in (
                ("source", conn.source_system_id),
                ("target", conn.target_system_id),
            ):
                if shape_id not in extraction.systems:
                    emit(
                        "warning",
                        "W_RULE_ENDPOINT_NOT_SYSTEM",
                        f"firewall rule {rule.id!r} {end} {shape_id!r} is not a "
                        "marked system rectangle",
                        path=f"/rules/{rule.id}/{end}",
                        hint="Add $$ and NAME:[...] to the rectangle text",
                    )

        if not rule.ports:
            emit(
                "warning",
                "W_RULE_MISSING_PORT",
                f"firewall rule {rule.id!r} has no PORT:[...] values",
                path=f"/rules/{rule.id}/ports",
            )

    for system_id, system in extraction.systems.items():
        if not system.name:
            emit(
                "warning",
                "W_SYSTEM_MISSING_NAME",
                f"system {system_id!r} has no NAME:[...] value",
                path=f"/systems/{system_id}/name",
            )
        if not system.addresses:
            emit(
                "warning",
                "W_SYSTEM_MISSING_ADDRESS",
                f"system {system_id!r} has no ADDRESS:[...] values",
                path=f"/systems/{system_id}/addresses",
            )

    return issues


def split_issues(issues: list[ValidationIssue]) -> Tuple[list[str], list[str]]:
    """(errors, warnings) as message lists, for the CLI."""
    errors = [iss.message for iss in issues if iss.severity == "error"]
    warnings = [iss.message for iss in issues if iss.severity == "warning"]
    return errors, warnings
