from tldr_firewall.parsers import (
    FirewallInfo,
    SystemInfo,
    firewall_text,
    parse_firewall_rule,
    parse_system,
)
from tldr_firewall.records import RawRecord

from tldr_builders import arrow, binding, rect, rule, system


def _rec(raw):
    return RawRecord.from_mapping(raw)


def test_parse_system_fields():
    info = parse_system(_rec(system("shape:a", "VDI", "10.0.0.1,10.0.0.2", "vdi")))
    assert info == SystemInfo(
        id="shape:a",
        name="VDI",
        addresses=("10.0.0.1", "10.0.0.2"),
        description="vdi",
    )


def test_parse_system_flattens_all_address_tokens():
    rec = _rec(rect("shape:a", "$$", "ADDRESS:[10.0.0.1, 10.0.0.2]", "ADDRESS:[10.0.0.3]"))
    assert parse_system(rec).addresses == ("10.0.0.1", "10.0.0.2", "10.0.0.3")


def test_parse_system_takes_first_name_and_desc():
    rec = _rec(rect("shape:a", "$$", "NAME:[A,B]", "NAME:[C]", "DESC:[first]", "DESC:[second]"))
    info = parse_system(rec)
    assert info.name == "A"
    assert info.description == "first"


def test_parse_system_without_name_is_still_a_system():
    info = parse_system(_rec(rect("shape:a", "$$SYSTEM", "ADDRESS:[10.0.0.1]")))
    assert info is not None
    assert info.name == ""
    assert info.description == ""


def test_parse_system_requires_sentinel():
    assert parse_system(_rec(rect("shape:a", "NAME:[VDI]", "ADDRESS:[10.0.0.1]"))) is None
    assert parse_system(_rec(rect("shape:a", "$SYSTEM NAME:[VDI]"))) is None


def test_parse_system_rejects_other_kinds():
    assert parse_system(_rec(rule("shape:f", "22"))) is None
    assert parse_system(_rec(binding("shape:f", "shape:a", "start"))) is None
    assert parse_system(_rec(rect("shape:a", "$$SYSTEM", geo="ellipse"))) is None


def test_parse_firewall_rule_fields():
    info = parse_firewall_rule(_rec(rule("shape:f", "22,443", "in", "access", color="green")))
    assert info == FirewallInfo(
        id="shape:f",
        ports=("22", "443"),
        direction="in",
        purpose="access",
        color="green",
    )


def test_parse_firewall_rule_uses_legacy_text_when_rich_text_missing():
    info = parse_firewall_rule(_rec(arrow("shape:f", legacy="$$FIREWALL PORT:[8080] PURPOSE:[batch]")))
    assert info.ports == ("8080",)
    assert info.purpose == "batch"
    assert info.direction == ""
    assert info.color is None


def test_rich_text_takes_precedence_over_legacy_text():
    rec = _rec(arrow("shape:f", "$$ PORT:[22]", legacy="$$ PORT:[80]"))
    assert firewall_text(rec) == "$$ PORT:[22]"
    assert parse_firewall_rule(rec).ports == ("22",)


def test_empty_rich_text_falls_back_to_legacy():
    raw = arrow("shape:f", legacy="$$ PORT:[80]")
    raw["props"]["richText"] = {"type": "doc", "content": [{"type": "paragraph"}]}
    assert parse_firewall_rule(_rec(raw)).ports == ("80",)


def test_parse_firewall_rule_requires_sentinel():
    assert parse_firewall_rule(_rec(arrow("shape:f", "PORT:[22]", color="green"))) is None
    assert parse_firewall_rule(_rec(arrow("shape:f"))) is None


def test_parse_firewall_rule_keeps_raw_color():
    rec = _rec(rule("shape:f", "22", color="light-violet"))
    assert parse_firewall_rule(rec).color == "light-violet"


def test_parse_firewall_rule_rejects_rectangles():
    assert parse_firewall_rule(_rec(system("shape:a", "VDI"))) is None


def test_parse_firewall_rule_without_id_is_kept():
    raw = rule("shape:f", "22")
    del raw["id"]
    info = parse_firewall_rule(_rec(raw))
    assert info is not None
    assert info.id == ""
    assert info.ports == ("22",)
