from mdx_to_nodes.tokenizer import (
    DELIMITER,
    EMBED_URL,
    TAG_CLOSE,
    TAG_OPEN,
    TEXT,
    is_markup_line,
    tokenize,
)


def test_tokens_tile_the_text():
    text = 'a\n<Callout type="tip">x</Callout>\n***\nb'
    tokens = tokenize(text)
    assert "".join(t.raw for t in tokens) == text
    assert [t.kind for t in tokens] == [TEXT, TAG_OPEN, TEXT, TAG_CLOSE, TEXT, DELIMITER, TEXT]


def test_self_closing_tag_attrs():
    tokens = tokenize('<Image src="a.png" />')
    assert len(tokens) == 1
    assert tokens[0].kind == TAG_OPEN
    assert tokens[0].name == "Image"
    assert tokens[0].attrs == 'src="a.png"'
    assert tokens[0].self_closing is True


def test_closing_tag_name():
    tokens = tokenize("</Steps>")
    assert tokens[0].is_close("Steps")
    assert not tokens[0].is_open()


def test_braced_attribute_with_angle_free_value():
    tokens = tokenize("<CardGroup cols={3}>")
    assert tokens[0].is_open("CardGroup")
    assert tokens[0].attrs == "cols={3}"
    assert tokens[0].self_closing is False


def test_tags_inside_fenced_code_stay_text():
    text = "```mdx\n<Callout>\n***\n</Callout>\n```"
    tokens = tokenize(text)
    assert [t.kind for t in tokens] == [TEXT]


def test_empty_fenced_block_is_text():
    tokens = tokenize("```\n```\n<Image src=\"a\" />")
    assert tokens[0].kind == TEXT
    assert tokens[-1].is_open("Image")


def test_tags_inside_inline_code_stay_text():
    tokens = tokenize("Use `<Tabs>` to group panels")
    assert [t.kind for t in tokens] == [TEXT]


def test_youtube_url_line_is_embed_token():
    tokens = tokenize("intro\nhttps://youtu.be/abc123\n")
    embeds = [t for t in tokens if t.kind == EMBED_URL]
    assert len(embeds) == 1
    assert embeds[0].attrs == "https://youtu.be/abc123"


def test_youtube_url_inside_sentence_is_text():
    tokens = tokenize("watch https://youtu.be/abc123 now")
    assert [t.kind for t in tokens] == [TEXT]


def test_delimiter_must_fill_the_line():
    assert [t.kind for t in tokenize("a *** b")] == [TEXT]
    assert DELIMITER in [t.kind for t in tokenize("a\n  ***  \nb")]


def test_custom_delimiter():
    kinds = [t.kind for t in tokenize("a\n---\nb", delimiter="---")]
    assert kinds == [TEXT, DELIMITER, TEXT]


def test_lowercase_html_is_not_a_tag():
    assert [t.kind for t in tokenize("<mark>x</mark> <br/>")] == [TEXT]


def test_is_markup_line():
    assert is_markup_line("<CardGroup cols={3}>")
    assert is_markup_line("  </Card>")
    assert is_markup_line('<Card title="A"></Card>')
    assert is_markup_line("***")
    assert not is_markup_line("text <Card>")
    assert not is_markup_line("")


def test_is_markup_line_restricted_to_known_names():
    names = {"Card", "CardGroup"}
    assert is_markup_line('<CardGroup cols={2}><Card title="A">', names=names)
    assert not is_markup_line('<Badge color="green" />', names=names)
    assert not is_markup_line('<Card title="A"><Badge />', names=names)
    assert is_markup_line("***", names=names)
