"""Pruebas de la construcción por subconjuntos y del reconocimiento con AFD"""
import itertools

import pytest

from regex_tm.automata import DFA, DFAState
from regex_tm.subset import (
    dfa_accepts,
    empty_dfa,
    epsilon_closure,
    move,
    regex_to_dfa,
    subset_construct,
)
from regex_tm.thompson_nfa import build_nfa


def language(dfa, alphabet, max_length=4):
    return {
        "".join(p)
        for n in range(max_length + 1)
        for p in itertools.product(alphabet, repeat=n)
        if dfa_accepts(dfa, "".join(p))
    }


def test_epsilon_closure_follows_chains():
    nfa = build_nfa("a*")
    closure = epsilon_closure(nfa, {nfa.start})
    assert nfa.start in closure
    assert nfa.accept in closure


def test_move_unions_targets():
    nfa = build_nfa("a|a")
    start = epsilon_closure(nfa, {nfa.start})
    assert len(move(nfa, start, "a")) == 2
    assert move(nfa, start, "b") == set()


def test_start_state_accepting_iff_empty_string_in_language():
    assert regex_to_dfa("a*").states[regex_to_dfa("a*").start].accepting
    dfa = regex_to_dfa("a")
    assert not dfa.states[dfa.start].accepting


def test_missing_symbol_has_no_sink_state():
    dfa = regex_to_dfa("ab")
    # S0 -a-> S1 -b-> S2, sin estado sumidero
    assert len(dfa.states) == 3
    assert dfa.alphabet == {"a", "b"}
    assert "b" not in dfa.states[dfa.start].transitions


def test_subsets_are_deduplicated_by_content():
    dfa = regex_to_dfa("(a|b)*")
    subsets = list(dfa.subsets.values())
    assert len(subsets) == len(set(subsets))
    # (a|b)* solo necesita dos conjuntos: el inicial y el alcanzado con a/b
    assert len(dfa.states) <= 3


def test_dfa_is_deterministic():
    dfa = regex_to_dfa("(a|ab)(c|bcd)")
    for st in dfa.states.values():
        assert all(isinstance(dst, int) for dst in st.transitions.values())


def test_dfa_accepts_short_circuits_on_unknown_symbol():
    dfa = regex_to_dfa("a*")
    assert not dfa_accepts(dfa, "ba")
    assert not dfa_accepts(dfa, "ab")


def test_empty_pattern_accepts_only_empty_string():
    dfa = regex_to_dfa("")
    assert dfa_accepts(dfa, "")
    assert not dfa_accepts(dfa, "a")
    assert dfa.alphabet == set()


def test_empty_dfa_rejects_everything():
    dfa = empty_dfa()
    assert len(dfa.states) == 1
    assert dfa.alphabet == set()
    assert not dfa_accepts(dfa, "")
    assert not dfa_accepts(dfa, "a")


def test_regex_to_dfa_falls_back_on_structural_failure(monkeypatch):
    import regex_tm.subset as subset

    def boom(pattern):
        raise RecursionError("maximum recursion depth exceeded")

    monkeypatch.setattr(subset, "build_nfa", boom)
    dfa = subset.regex_to_dfa("((((a))))")
    assert len(dfa.states) == 1
    assert not dfa_accepts(dfa, "a")


def test_subset_construction_twice_gives_same_language():
    nfa = build_nfa("(a|b)*abb")
    first = subset_construct(nfa)
    second = subset_construct(nfa)
    assert language(first, "ab", 5) == language(second, "ab", 5)


def test_dead_state_detection():
    dfa = DFA(start=0, states={
        0: DFAState(0, transitions={"a": 1, "b": 2}),
        1: DFAState(1, accepting=True),
        2: DFAState(2, transitions={"a": 2, "b": 2}),
        3: DFAState(3),
    })
    assert not dfa.is_dead_state(0)
    assert not dfa.is_dead_state(1)
    assert dfa.is_dead_state(2)
    assert dfa.dead_states() == [2, 3]


@pytest.mark.parametrize("pattern, alphabet", [
    ("ab", "ab"),
    ("a|b", "abc"),
    ("a*", "ab"),
    ("(ab)+", "ab"),
    ("a?b", "ab"),
])
def test_concat_alternation_star_laws(pattern, alphabet):
    dfa = regex_to_dfa(pattern)
    got = language(dfa, alphabet, 4)
    expected = {
        "ab": {"ab"},
        "a|b": {"a", "b"},
        "a*": {"", "a", "aa", "aaa", "aaaa"},
        "(ab)+": {"ab", "abab"},
        "a?b": {"b", "ab"},
    }[pattern]
    assert got == expected


def test_star_plus_optional_language_laws():
    a = language(regex_to_dfa("(ab|c)"), "abc", 4)
    star = language(regex_to_dfa("(ab|c)*"), "abc", 4)
    plus = language(regex_to_dfa("(ab|c)+"), "abc", 4)
    opt = language(regex_to_dfa("(ab|c)?"), "abc", 4)

    assert opt == a | {""}
    assert star == plus | {""}
    # L(A+) = L(A)·L(A)*
    concat = {x + y for x in a for y in star if len(x + y) <= 4}
    assert plus == concat
