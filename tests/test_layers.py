import pytest

from emerald.layers import Layer, LayerStack


class RecordingLayer(Layer):
    def __init__(self, name, journal):
        super().__init__(name)
        self.journal = journal

    def on_detach(self):
        self.journal.append(("detach", self.name))


@pytest.fixture
def journal():
    return []


def make(name, journal):
    return RecordingLayer(name, journal)


def test_default_layer_name():
    assert Layer().name == "Layer"


def test_custom_layer_name():
    assert Layer("Editor Layer").name == "Editor Layer"


def test_layers_go_below_overlays(journal):
    stack = LayerStack()
    overlay = make("overlay", journal)
    first = make("first", journal)
    second = make("second", journal)
    stack.push_overlay(overlay)
    stack.push_layer(first)
    stack.push_layer(second)
    assert list(stack) == [first, second, overlay]
    assert len(stack) == 3


def test_reversed_runs_top_down(journal):
    stack = LayerStack()
    a, b, o = make("a", journal), make("b", journal), make("o", journal)
    stack.push_layer(a)
    stack.push_overlay(o)
    stack.push_layer(b)
    assert list(reversed(stack)) == [o, b, a]


def test_pop_layer_detaches_and_removes(journal):
    stack = LayerStack()
    a, b = make("a", journal), make("b", journal)
    stack.push_layer(a)
    stack.push_layer(b)
    stack.pop_layer(a)
    assert list(stack) == [b]
    assert journal == [("detach", "a")]


def test_pop_layer_ignores_overlays(journal):
    stack = LayerStack()
    o = make("o", journal)
    stack.push_overlay(o)
    stack.pop_layer(o)
    assert list(stack) == [o]
    assert journal == []


def test_pop_overlay_ignores_layers(journal):
    stack = LayerStack()
    a = make("a", journal)
    stack.push_layer(a)
    stack.pop_overlay(a)
    assert list(stack) == [a]
    assert journal == []


def test_pop_overlay_detaches_and_removes(journal):
    stack = LayerStack()
    a, o = make("a", journal), make("o", journal)
    stack.push_layer(a)
    stack.push_overlay(o)
    stack.pop_overlay(o)
    assert list(stack) == [a]
    assert journal == [("detach", "o")]


def test_pop_unknown_layer_is_noop(journal):
    stack = LayerStack()
    a = make("a", journal)
    stack.push_layer(a)
    stack.pop_layer(make("stranger", journal))
    assert list(stack) == [a]
    assert journal == []


def test_insert_position_follows_pops(journal):
    stack = LayerStack()
    a, b, o, c = (make(n, journal) for n in ("a", "b", "o", "c"))
    stack.push_layer(a)
    stack.push_layer(b)
    stack.push_overlay(o)
    stack.pop_layer(a)
    stack.push_layer(c)
    assert list(stack) == [b, c, o]


def test_identity_not_equality_is_used(journal):
    stack = LayerStack()
    a = make("same", journal)
    twin = make("same", journal)
    stack.push_layer(a)
    stack.pop_layer(twin)
    assert list(stack) == [a]


def test_close_detaches_all_in_order(journal):
    stack = LayerStack()
    a, o = make("a", journal), make("o", journal)
    stack.push_layer(a)
    stack.push_overlay(o)
    stack.close()
    assert journal == [("detach", "a"), ("detach", "o")]
    assert len(stack) == 0


def test_iteration_is_a_snapshot(journal):
    stack = LayerStack()
    a, b = make("a", journal), make("b", journal)
    stack.push_layer(a)
    seen = []
    for layer in stack:
        seen.append(layer)
        stack.push_layer(b)
    assert seen == [a]
    assert list(stack) == [a, b]