import pytest

from mdx_to_nodes import InteractionState, compile_document, iter_interactive


def test_toggle_panels():
    state = InteractionState()
    assert not state.is_open("0")
    assert state.toggle("0") is True
    assert state.is_open("0")
    assert state.toggle("0") is False
    assert not state.is_open("0")


def test_open_close_and_reset():
    state = InteractionState()
    state.open("a")
    state.open("b")
    state.close("a")
    assert not state.is_open("a")
    assert state.is_open("b")
    state.reset()
    assert not state.is_open("b")


def test_first_tab_is_default():
    state = InteractionState()
    assert state.active_tab("tabs") == 0
    state.select_tab("tabs", 2)
    assert state.active_tab("tabs") == 2
    assert state.active_tab("tabs", tab_count=2) == 0


def test_select_negative_tab_rejected():
    with pytest.raises(ValueError):
        InteractionState().select_tab("tabs", -1)


def test_states_are_independent():
    first = InteractionState()
    second = InteractionState()
    first.toggle("0")
    assert not second.is_open("0")


def test_state_is_not_part_of_the_tree():
    text = '<Accordion title="A">a</Accordion>'
    before = compile_document(text)
    state = InteractionState()
    for key, _node in iter_interactive(before):
        state.toggle(key)
    assert compile_document(text) == before


def test_iter_interactive_keys():
    text = """<AccordionGroup>
<Accordion title="A">a</Accordion>
<Accordion title="B">b</Accordion>
</AccordionGroup>
***
<Tabs>
<TabItem title="T">
<Accordion title="C">c</Accordion>
</TabItem>
</Tabs>"""
    keys = [key for key, _node in iter_interactive(compile_document(text))]
    assert keys == ["0.0", "0.1", "1", "1.0.0"]
