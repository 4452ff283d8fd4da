from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional

from .constants import FILENAME_TEMPLATE_DEFAULT


@dataclass(frozen=True)
class ExportConfig:
    """Export settings, from an optional YAML file and then CLI flags.

    Example YAML:

      bom: true
      filename_template: "firewall_rules_{date}.csv"
      strict: false
      ignore: [W_SYSTEM_MISSING_ADDRESS]
      escalate: [W_BINDING_INCOMPLETE]
    """

    bom: bool = True
    filename_template: str = FILENAME_TEMPLATE_DEFAULT
    strict: bool = False
    ignore: frozenset[str] = field(default_factory=frozenset)
    escalate: frozenset[str] = field(default_factory=frozenset)

    def with_overrides(self, **overrides: Optional[Any]) -> "ExportConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


CONFIG_KEYS: tuple[str, ...] = tuple(f.name for f in fields(ExportConfig))


def config_from_mapping(data: dict[str, Any], *, source: str = "<config>") -> ExportConfig:
    unknown = sorted(set(data) - set(CONFIG_KEYS))
    if unknown:
        raise ValueError(f"Unknown config key(s) in {source}: {', '.join(unknown)}")

    kwargs: dict[str, Any] = {}
    for key in ("bom", "strict"):
        if key in data:
            if not isinstance(data[key], bool):
                raise TypeError(f"{source}: {key} must be a boolean")
            kwargs[key] = data[key]

    if "filename_template" in data:
        template = data["filename_template"]
        if not isinstance(template, str) or not template.strip():
            raise TypeError(f"{source}: filename_template must be a non-empty string")
        try:
            template.format(date="2000-01-01")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(
                f"{source}: filename_template {template!r} is not a valid template; "
                "only the {date} placeholder is supported"
            ) from e
        kwargs["filename_template"] = template

    for key in ("ignore", "escalate"):
        codes = data.get(key)
        if codes is None:
            continue
        if not isinstance(codes, list) or not all(isinstance(c, str) for c in codes):
            raise TypeError(f"{source}: {key} must be a list of issue codes")
        kwargs[key] = frozenset(codes)

    return ExportConfig(**kwargs)
