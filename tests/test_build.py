import pytest

from dfagen.automata.build import add_string, build, validate
from dfagen.automata.fsa import Automaton, InvalidSymbol


def test_single_word():
    dfa, start = build({"cat"})
    assert start == 0
    assert len(dfa) == 4
    assert dfa.state(0).transitions == {"c": 1}
    assert dfa.state(1).transitions == {"a": 2}
    assert dfa.state(2).transitions == {"t": 3}
    assert dfa.state(3).transitions == {}
    assert [s.accepting for s in dfa] == [False, False, False, True]


def test_shared_prefix():
    dfa, _ = build({"cat", "car"})
    # "car" sorts first, so it creates the chain and "cat" forks off it
    assert len(dfa) == 5
    assert dfa.state(2).transitions == {"r": 3, "t": 4}
    assert dfa.is_final(3) and dfa.is_final(4)
    assert not dfa.is_final(2)


def test_prefix_entry_marks_existing_state():
    dfa, _ = build({"ca", "cat"})
    assert len(dfa) == 4
    assert dfa.is_final(2)
    assert dfa.is_final(3)
    assert dfa.accept("ca")
    assert dfa.accept("cat")
    assert not dfa.accept("c")


def test_longer_entry_extends_shorter():
    dfa, _ = build(["cat", "cats", "ca"])
    assert len(dfa) == 5
    assert sorted(dfa.generate_all()) == ["ca", "cat", "cats"]


def test_empty_string():
    dfa, _ = build({""})
    assert len(dfa) == 1
    assert dfa.start().accepting
    assert dfa.start().label == "S*"
    assert dfa.transition_count() == 0


def test_empty_whitelist():
    dfa, _ = build(set())
    assert len(dfa) == 1
    assert not dfa.start().accepting
    assert list(dfa.generate_all()) == []


def test_ids_do_not_depend_on_order():
    words = ["delta", "alfa", "charlie", "bravo", "alpha"]
    dfa1, _ = build(words)
    dfa2, _ = build(reversed(words))
    assert [(s.id, s.transitions, s.accepting) for s in dfa1] == [
        (s.id, s.transitions, s.accepting) for s in dfa2
    ]


def test_duplicates():
    dfa, _ = build(["ab", "ab", "ab"])
    assert len(dfa) == 3


def test_no_dead_state_during_construction():
    dfa, _ = build({"a", "bc"})
    assert dfa.dead is None
    dfa.check()


def test_invalid_symbol():
    with pytest.raises(InvalidSymbol) as excinfo:
        build({"cat", "ca-t"})
    e = excinfo.value
    assert e.symbol == "-"
    assert e.string == "ca-t"
    assert e.position == 2
    assert "ca-t" in str(e)
    assert isinstance(e, ValueError)


def test_invalid_symbol_creates_nothing():
    dfa = Automaton()
    add_string(dfa, "cat")
    with pytest.raises(InvalidSymbol):
        add_string(dfa, "dog!")
    assert len(dfa) == 4
    assert "d" not in dfa.start().transitions


def test_custom_alphabet():
    dfa, _ = build({"0110", "10"}, alphabet="01")
    assert dfa.accept("0110")
    assert dfa.accept("10")
    with pytest.raises(InvalidSymbol):
        build({"012"}, alphabet="01")


def test_dot_is_literal():
    dfa, _ = build({"a.b"})
    assert dfa.accept("a.b")
    assert not dfa.accept("axb")


def test_case_sensitive():
    dfa, _ = build({"Cat"})
    assert dfa.accept("Cat")
    assert not dfa.accept("cat")


def test_validate():
    validate("abc.XYZ.019")
    with pytest.raises(InvalidSymbol):
        validate("a b")
    with pytest.raises(TypeError):
        validate(12)


def test_add_string_returns_created_count():
    dfa = Automaton()
    assert add_string(dfa, "cat") == 3
    assert add_string(dfa, "car") == 1
    assert add_string(dfa, "ca") == 0
    assert add_string(dfa, "") == 0
    assert dfa.start().accepting
