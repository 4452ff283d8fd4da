from tldr_firewall.fields import (
    extract_field,
    first_field,
    has_sentinel,
    rich_text_to_plain,
    split_value_list,
)

from tldr_builders import rich_doc


def test_extract_field_collects_every_occurrence_in_order():
    text = "PORT:[22, 443]\nother\nPORT:[8080]"
    assert extract_field(text, "PORT") == ["22", "443", "8080"]


def test_extract_field_trims_and_drops_empty_literals():
    assert extract_field("ADDRESS:[ 10.0.0.1 ,, ,10.0.0.2 ]", "ADDRESS") == [
        "10.0.0.1",
        "10.0.0.2",
    ]
    assert extract_field("ADDRESS:[   ]", "ADDRESS") == []


def test_extract_field_is_case_sensitive():
    assert extract_field("name:[vdi]", "NAME") == []


def test_extract_field_matches_inside_longer_names():
    # No word boundary: HOSTNAME:[...] also carries a NAME token.
    assert extract_field("HOSTNAME:[h1]", "NAME") == ["h1"]


def test_extract_field_value_may_span_lines():
    assert extract_field("PORT:[22,\n443]", "PORT") == ["22", "443"]


def test_extract_field_unclosed_token_stops_the_scan():
    assert extract_field("PORT:[22] PORT:[80", "PORT") == ["22"]
    assert extract_field("PORT:[80", "PORT") == []


def test_closing_bracket_cannot_be_escaped():
    # Known limitation: the first "]" always ends the value list.
    assert extract_field(r"DESC:[a\]b]", "DESC") == ["a\\"]


def test_comma_cannot_be_escaped():
    # Known limitation: commas always split literals.
    assert extract_field('DESC:["a,b"]', "DESC") == ['"a', 'b"']


def test_nested_opener_is_part_of_the_value():
    assert extract_field("NAME:[a NAME:[b]", "NAME") == ["a NAME:[b"]


def test_first_field_defaults_to_empty_string():
    assert first_field("NAME:[A,B] NAME:[C]", "NAME") == "A"
    assert first_field("no tokens here", "NAME") == ""


def test_split_value_list():
    assert split_value_list(" a , b ,") == ["a", "b"]
    assert split_value_list("") == []


def test_has_sentinel():
    assert has_sentinel("$$SYSTEM")
    assert has_sentinel("x $$ y")
    assert not has_sentinel("$SYSTEM $")


def test_rich_text_to_plain_joins_text_nodes():
    doc = rich_doc("$$SYSTEM", "NAME:[VDI]")
    assert rich_text_to_plain(doc) == "$$SYSTEM\nNAME:[VDI]"


def test_rich_text_to_plain_skips_empty_paragraphs_and_nodes():
    doc = {
        "type": "doc",
        "content": [
            {"type": "paragraph"},
            {"type": "paragraph", "content": [{"type": "text", "text": ""}]},
            {"type": "paragraph", "content": [{"type": "text", "text": " PORT:[22] "}]},
        ],
    }
    assert rich_text_to_plain(doc) == "PORT:[22]"


def test_rich_text_to_plain_requires_doc_payload():
    assert rich_text_to_plain(None) == ""
    assert rich_text_to_plain("$$SYSTEM") == ""
    assert rich_text_to_plain({"type": "paragraph", "content": []}) == ""
    assert rich_text_to_plain({"type": "doc"}) == ""
