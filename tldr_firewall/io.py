# tldr_firewall/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .config import ExportConfig, config_from_mapping
from .constants import DOCUMENT_SUFFIX, MSG_WRONG_SUFFIX


def read_document_text(path: Path) -> str:
    """Read a .tldr document as text. Other extensions are refused."""
    if not path.exists():
        raise FileNotFoundError(str(path))
    if path.suffix.lower() != DOCUMENT_SUFFIX:
        raise ValueError(f"{MSG_WRONG_SUFFIX} ({path.name})")

    # utf-8-sig: tolerate documents saved with a BOM.
    return path.read_text(encoding="utf-8-sig")


def _load_yaml_mapping(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML {path}: {e}") from e

    # An empty file is an empty config.
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise TypeError(
            f"Top-level YAML must be a mapping in {path}, got {type(data).__name__}"
        )

    return data


def load_config(path: Path) -> ExportConfig:
    """Load export settings from a YAML file."""
    if not path.exists():
        raise FileNotFoundError(str(path))
    return config_from_mapping(_load_yaml_mapping(path), source=str(path))
