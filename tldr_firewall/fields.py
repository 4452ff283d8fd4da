from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .constants import RICH_TEXT_DOC, SENTINEL

# Micro-format read from shape annotations:
#
#   token      := FIELDNAME ":[" value-list "]"
#   value-list := literal ("," literal)*
#
# FIELDNAME is matched case-sensitively anywhere in the text, so "HOSTNAME:[x]"
# also yields a NAME token. A value-list ends at the first "]"; there is no escape
# for "]" or "," inside a literal. An opener with no closing "]" ends the scan.

VALUE_CLOSE = "]"
VALUE_SEP = ","


def field_opener(field_name: str) -> str:
    return f"{field_name}:["


def split_value_list(body: str) -> list[str]:
    """Split a bracket body on commas, trimming literals and dropping empty ones."""
    body = body.strip()
    if not body:
        return []
    return [part.strip() for part in body.split(VALUE_SEP) if part.strip()]


def extract_field(text: str, field_name: str) -> list[str]:
    """Return every literal of every `field_name:[...]` token, in order of appearance."""
    opener = field_opener(field_name)
    values: list[str] = []
    pos = 0

    while True:
        start = text.find(opener, pos)
        if start < 0:
            break

        body_start = start + len(opener)
        end = text.find(VALUE_CLOSE, body_start)
        if end < 0:
            break

        values.extend(split_value_list(text[body_start:end]))
        pos = end + len(VALUE_CLOSE)

    return values


def first_field(text: str, field_name: str) -> str:
    values = extract_field(text, field_name)
    return values[0] if values else ""


def has_sentinel(text: str) -> bool:
    return SENTINEL in text


def rich_text_to_plain(rich_text: Any) -> str:
    """Flatten a tldraw rich-text document into newline separated plain text.

    Only `{"type": "doc", "content": [paragraph, ...]}` payloads produce text;
    each paragraph's text nodes contribute one line each.
    """
    if not isinstance(rich_text, Mapping) or rich_text.get("type") != RICH_TEXT_DOC:
        return ""

    content = rich_text.get("content")
    if not content:
        return ""

    lines: list[str] = []
    for paragraph in content:
        if not isinstance(paragraph, Mapping):
            continue
        for node in paragraph.get("content") or []:
            if not isinstance(node, Mapping):
                continue
            text = node.get("text")
            if text:
                lines.append(f"{text}\n")

    return "".join(lines).strip()
