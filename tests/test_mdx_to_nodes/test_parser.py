from mdx_to_nodes.parser import find_occurrences, iter_prose


def test_card_group_children_are_not_top_level():
    text = """<CardGroup cols={2}>
<Card title="A">a</Card>
<Card title="B">b</Card>
</CardGroup>
<Card title="C">c</Card>"""
    occurrences = find_occurrences(text)
    assert [o.tag for o in occurrences] == ["CardGroup", "Card"]
    assert [c.attrs.get_str("title") for c in occurrences[0].children] == ["A", "B"]
    assert occurrences[1].attrs.get_str("title") == "C"


def test_offsets_are_in_source_order():
    text = 'x <Image src="a" /> y <Callout>c</Callout> z'
    occurrences = find_occurrences(text)
    assert [o.kind for o in occurrences] == ["image", "callout"]
    assert occurrences[0].end <= occurrences[1].start
    assert text[occurrences[1].start:occurrences[1].end] == "<Callout>c</Callout>"


def test_unterminated_container_extends_to_end():
    text = '<Callout type="tip">\nbody\n\n## after'
    occurrences = find_occurrences(text)
    assert len(occurrences) == 1
    assert occurrences[0].terminated is False
    assert occurrences[0].end == len(text)
    assert occurrences[0].inner == "\nbody\n\n## after"


def test_stray_close_and_unknown_tags_are_ignored():
    assert find_occurrences("</Callout> text") == []
    assert find_occurrences("<Foo>bar</Foo>") == []


def test_child_tags_outside_their_parent_are_ignored():
    assert find_occurrences('<TabItem title="a">x</TabItem>') == []
    assert find_occurrences('<Step title="a">x</Step>') == []


def test_same_name_nesting_matches_outer_close():
    text = '<Accordion title="a"><Accordion title="b">x</Accordion></Accordion>'
    occurrences = find_occurrences(text)
    assert len(occurrences) == 1
    assert occurrences[0].end == len(text)
    assert occurrences[0].inner == '<Accordion title="b">x</Accordion>'


def test_button_with_text_label():
    occurrences = find_occurrences('<Button href="/x">Go</Button>')
    assert len(occurrences) == 1
    assert occurrences[0].inner == "Go"


def test_void_tag_without_close():
    text = '<Image src="a.png">\nafter'
    occurrences = find_occurrences(text)
    assert len(occurrences) == 1
    assert text[occurrences[0].start:occurrences[0].end] == '<Image src="a.png">'


def test_youtube_url_line_becomes_occurrence():
    occurrences = find_occurrences("https://youtu.be/abc123")
    assert len(occurrences) == 1
    assert occurrences[0].kind == "youtube"
    assert occurrences[0].attrs == {"url": "https://youtu.be/abc123"}


def test_iter_prose_yields_gaps():
    text = "a<Image src='x'/>b<Image src='y'/>"
    occurrences = find_occurrences(text)
    assert list(iter_prose(text, occurrences)) == ["a", "b", ""]


def test_occurrences_are_hashable():
    text = '<Image src="a.png" />\n<Image src="a.png" />'
    first, second = find_occurrences(text)
    assert len({first, first}) == 1
    assert first != second
