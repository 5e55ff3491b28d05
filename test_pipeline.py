"""Pruebas de punta a punta: Regex -> AFND -> AFD -> MT"""
import itertools

import pytest

from regex_tm.subset import dfa_accepts, regex_to_dfa, subset_construct
from regex_tm.thompson_nfa import build_nfa
from regex_tm.turing import tm_run, translate_to_tm

SCENARIOS = [
    ("a*", ["", "a", "aaaa"], ["b", "ab"]),
    ("a|b", ["a", "b"], ["", "ab", "c"]),
    ("(ab)+", ["ab", "abab"], ["", "a", "aba"]),
    ("a?b", ["b", "ab"], ["", "a", "aab"]),
    ("a.c", ["abc", "a1c"], ["ac", "abdc"]),
]

PATTERNS = [
    "a",
    "ab",
    "a|b",
    "a*",
    "a+",
    "a?",
    "(ab)+",
    "a?b",
    "a.c",
    "(a|b)*abb",
    "(a|b)*c?",
    "a(b|c)*d",
    "hola|mundo",
    "a?b+c*",
    "((a|b)(c|d))*",
    "a\\*b",
    "",
]


def build(pattern):
    dfa = regex_to_dfa(pattern)
    return dfa, translate_to_tm(dfa)


@pytest.mark.parametrize("pattern, accepted, rejected", SCENARIOS)
def test_scenarios(pattern, accepted, rejected):
    dfa, tm = build(pattern)
    for cadena in accepted:
        assert dfa_accepts(dfa, cadena), (pattern, cadena)
        assert tm_run(tm, cadena), (pattern, cadena)
    for cadena in rejected:
        assert not dfa_accepts(dfa, cadena), (pattern, cadena)
        assert not tm_run(tm, cadena), (pattern, cadena)


@pytest.mark.parametrize("pattern", PATTERNS)
def test_dfa_and_tm_agree(pattern):
    dfa, tm = build(pattern)
    # se agrega un símbolo fuera del alfabeto para cubrir el rechazo por falta de transición
    alphabet = sorted(dfa.alphabet)[:4] + ["z" if "z" not in dfa.alphabet else "9"]
    for n in range(5):
        for combo in itertools.product(alphabet, repeat=n):
            cadena = "".join(combo)
            assert dfa_accepts(dfa, cadena) == tm_run(tm, cadena), (pattern, cadena)


def test_empty_pattern_accepts_only_empty_string():
    dfa, tm = build("")
    assert dfa_accepts(dfa, "") and tm_run(tm, "")
    assert not dfa_accepts(dfa, "a")
    assert not tm_run(tm, "a")


def test_wildcard_does_not_match_punctuation():
    dfa, tm = build("a.c")
    assert not dfa_accepts(dfa, "a-c")
    assert not tm_run(tm, "a-c")


def test_pipeline_pieces_compose():
    nfa = build_nfa("(a|b)*abb")
    dfa = subset_construct(nfa)
    tm = translate_to_tm(dfa)
    assert tm_run(tm, "babb")
    assert not tm_run(tm, "abab")


def test_deep_nesting_still_converts():
    dfa, tm = build("(" * 300 + "a" + ")" * 300)
    assert dfa_accepts(dfa, "a") == tm_run(tm, "a")
