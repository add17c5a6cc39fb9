import logging

from mdx_to_nodes.config import ParserConfig
from mdx_to_nodes.sections import (
    FRONTMATTER,
    MARKDOWN,
    MIXED,
    classify_section,
    parse_frontmatter,
    split_document,
    split_sections,
)


def test_split_on_delimiter_lines():
    assert split_sections("# A\n\n***\n\n# B") == ["# A", "# B"]


def test_blank_sections_are_dropped():
    assert split_sections("***\n\n***\nA") == ["A"]
    assert split_sections("") == []


def test_delimiter_inside_tracked_tag_is_content():
    text = """<Steps>
<Step title="a">
x
***
y
</Step>
</Steps>
***
after"""
    sections = split_sections(text)
    assert len(sections) == 2
    assert "***" in sections[0]
    assert sections[1] == "after"


def test_depth_tracks_same_tag_name():
    text = """<Accordion title="a">
<Accordion title="b">
x
</Accordion>
***
</Accordion>
***
z"""
    sections = split_sections(text)
    assert len(sections) == 2
    assert sections[1] == "z"


def test_unterminated_tag_keeps_rest_as_last_section(caplog):
    text = "# Intro\n***\n<Callout>\nbody\n***\nmore"
    with caplog.at_level(logging.WARNING):
        sections = split_sections(text)
    assert sections == ["# Intro", "<Callout>\nbody\n***\nmore"]
    assert "ends inside <Callout>" in caplog.text


def test_untracked_tag_does_not_protect_delimiter():
    text = "<Callout>\na\n***\nb\n</Callout>"
    assert len(split_sections(text, tracked_tags=("Steps",))) == 2
    assert len(split_sections(text)) == 1


def test_delimiter_inside_fenced_code_is_content():
    assert split_sections("```\n***\n```\nafter") == ["```\n***\n```\nafter"]


def test_classify_frontmatter():
    assert classify_section('---\ntitle: "Hi"\n---') == FRONTMATTER
    assert classify_section("---\nowner: docs\n---") == MARKDOWN


def test_classify_mixed_when_prose_beside_component():
    raw = 'Some text\n<Callout type="bogus">hi</Callout>\nMore text'
    assert classify_section(raw, ParserConfig(mixed_prose_threshold=0)) == MIXED


def test_classify_single_component():
    assert classify_section('<Callout type="tip">\nhi\n</Callout>') == "callout"
    assert classify_section("https://youtu.be/abc123") == "youtube"


def test_classify_nested_cards_count_as_card_group_only():
    raw = '<CardGroup cols={2}>\n<Card title="A">a</Card>\n</CardGroup>'
    assert classify_section(raw) == "cardgroup"


def test_classify_two_kinds_is_mixed():
    raw = '<Callout>x</Callout>\n<Image src="a.png" />'
    assert classify_section(raw, ParserConfig(mixed_prose_threshold=10)) == MIXED


def test_classify_markdown():
    assert classify_section("# Title\n\nBody") == MARKDOWN
    assert classify_section("Use `<Tabs>` here") == MARKDOWN


def test_threshold_decides_between_single_and_mixed():
    raw = "intro\n<Callout>hi</Callout>"
    assert classify_section(raw, ParserConfig(mixed_prose_threshold=0)) == MIXED
    assert classify_section(raw, ParserConfig(mixed_prose_threshold=1)) == "callout"


def test_classification_is_idempotent():
    raw = "a\n<Steps>\n<Step title='x'>y</Step>\n</Steps>"
    assert classify_section(raw) == classify_section(raw)


def test_threshold_from_environment(monkeypatch):
    monkeypatch.setenv("DOCS_MIXED_PROSE_THRESHOLD", "5")
    assert ParserConfig().mixed_prose_threshold == 5
    monkeypatch.setenv("DOCS_MIXED_PROSE_THRESHOLD", "many")
    assert ParserConfig().mixed_prose_threshold == 0
    assert ParserConfig(mixed_prose_threshold=-2).mixed_prose_threshold == 0


def test_split_document_indexes_and_kinds():
    text = '---\ntitle: Intro\n---\n***\n# Body\n***\n<Callout>hi</Callout>'
    document = split_document(text, ParserConfig(mixed_prose_threshold=0))
    assert [s.kind for s in document.sections] == [FRONTMATTER, MARKDOWN, "callout"]
    assert [s.source_index for s in document.sections] == [0, 1, 2]


def test_frontmatter_without_delimiter_is_its_own_section():
    document = split_document("---\ntitle: Intro\n---\n\n# Body")
    assert [s.kind for s in document.sections] == [FRONTMATTER, MARKDOWN]
    assert document.sections[1].raw_text == "# Body"


def test_document_frontmatter_and_title():
    document = split_document('---\ntitle: "Getting Started"\ntags: [a, b]\n---\n***\ntext')
    assert document.frontmatter == {"title": "Getting Started", "tags": ["a", "b"]}
    assert document.title == "Getting Started"


def test_document_without_frontmatter():
    document = split_document("just text")
    assert document.frontmatter == {}
    assert document.title == ""


def test_parse_frontmatter_invalid_yaml(caplog):
    with caplog.at_level(logging.WARNING):
        assert parse_frontmatter("---\ntitle: [unclosed\n---") == {}
    assert "Invalid frontmatter YAML" in caplog.text


def test_parse_frontmatter_non_mapping():
    assert parse_frontmatter("---\n- a\n- b\n---") == {}
    assert parse_frontmatter("no marker") == {}


def test_unknown_tag_line_counts_as_prose():
    raw = '<Image src="a.png" />\n<Badge color="green" />'
    assert classify_section(raw) == MIXED
    assert classify_section('<Image src="a.png" />\n</Card>') == "image"
