import pytest

from dfagen.automata.fsa import (
    ALPHABET,
    Automaton,
    EmptyGraphInvariantViolation,
    InvalidSymbol,
    State,
)


def test_alphabet():
    assert len(ALPHABET) == 63
    assert "." in ALPHABET
    assert "a" in ALPHABET and "Z" in ALPHABET and "0" in ALPHABET
    assert "-" not in ALPHABET
    assert " " not in ALPHABET


def test_state_label():
    s = State(3, "Q3")
    assert s.label == "Q3"
    s.accepting = True
    assert s.label == "Q3*"
    # The marker is cosmetic; the name is untouched
    assert s.name == "Q3"


def test_state_identity():
    assert State(1, "Q1") == State(1, "other")
    assert State(1, "Q1") != State(2, "Q1")
    assert len({State(1, "Q1"), State(1, "Q1"), State(2, "Q2")}) == 2


def test_start_state():
    dfa = Automaton()
    assert len(dfa) == 1
    assert dfa.initial == 0
    assert dfa.start().name == "S"
    assert not dfa.start().accepting
    assert dfa.dead is None


def test_ids_are_monotonic():
    dfa = Automaton("ab")
    ids = [dfa.new_state().id for _ in range(4)]
    assert ids == [1, 2, 3, 4]
    assert dfa.state(2).name == "Q2"

    dfa.add_transition(0, "a", 1)
    dfa.add_transition(1, "a", 2)
    dfa.add_transition(2, "b", 3)
    dfa.remove_state(4)
    assert dfa.new_state().id == 5
    assert 4 not in dfa
    assert [s.id for s in dfa] == [0, 1, 2, 3, 5]


def test_symbols():
    dfa = Automaton("cab")
    assert dfa.symbols == ("a", "b", "c")
    assert dfa.symbols is dfa.symbols


def test_add_transition():
    dfa = Automaton("ab")
    q = dfa.new_state()
    dfa.add_transition(0, "a", q.id)
    assert dfa.next_state(0, "a") == q.id
    assert dfa.next_state(0, "b") is None

    with pytest.raises(InvalidSymbol) as excinfo:
        dfa.add_transition(0, "c", q.id)
    assert excinfo.value.symbol == "c"

    with pytest.raises(EmptyGraphInvariantViolation):
        dfa.add_transition(0, "b", 99)
    assert "b" not in dfa.start().transitions


def test_unknown_state():
    dfa = Automaton()
    with pytest.raises(EmptyGraphInvariantViolation):
        dfa.state(7)


def test_start_cannot_be_removed():
    dfa = Automaton()
    with pytest.raises(EmptyGraphInvariantViolation):
        dfa.remove_state(0)


def test_dead_state():
    dfa = Automaton("abc")
    q = dfa.new_state()
    dead = dfa.add_dead_state()
    assert dead == 2
    assert dfa.add_dead_state() == dead

    state = dfa.state(dead)
    assert state.label == "dead-state"
    assert not state.accepting
    assert state.transitions == {"a": dead, "b": dead, "c": dead}

    # Missing transitions lead to the dead state while it exists
    assert dfa.next_state(q.id, "a") == dead

    dfa.remove_dead_state()
    assert dfa.dead is None
    assert dead not in dfa
    assert dfa.next_state(q.id, "a") is None


def test_check():
    dfa = Automaton("ab")
    q = dfa.new_state()
    dfa.add_transition(0, "a", q.id)
    dfa.check()

    # Bypass add_transition to leave a dangling reference
    dfa.start().transitions["b"] = 42
    with pytest.raises(EmptyGraphInvariantViolation) as excinfo:
        dfa.check()
    assert "42" in excinfo.value.message


def test_accept():
    dfa = Automaton("ab")
    q1 = dfa.new_state()
    q2 = dfa.new_state()
    dfa.add_transition(0, "a", q1.id)
    dfa.add_transition(q1.id, "b", q2.id)
    dfa.make_final(q2.id)

    assert dfa.accept("ab")
    assert not dfa.accept("a")
    assert not dfa.accept("")
    assert not dfa.accept("abb")
    assert not dfa.accept("b")
    assert not dfa.accept("a-b")

    dfa.add_dead_state()
    assert dfa.accept("ab")
    assert not dfa.accept("ba")


def test_generate_all():
    dfa = Automaton("abc")
    q1 = dfa.new_state()
    q2 = dfa.new_state()
    q3 = dfa.new_state()
    dfa.add_transition(0, "b", q1.id)
    dfa.add_transition(0, "a", q2.id)
    dfa.add_transition(q2.id, "c", q3.id)
    dfa.make_final(0)
    dfa.make_final(q1.id)
    dfa.make_final(q3.id)

    assert list(dfa.generate_all()) == ["", "ac", "b"]

    # The dead state's self loops are never followed
    dfa.add_dead_state()
    assert list(dfa.generate_all()) == ["", "ac", "b"]


def test_transition_count():
    dfa = Automaton("ab")
    assert dfa.transition_count() == 0
    q = dfa.new_state()
    dfa.add_transition(0, "a", q.id)
    dfa.add_transition(0, "b", q.id)
    assert dfa.transition_count() == 2
