# subset.py
# AFND -> AFD (Subconjuntos) y reconocimiento de cadenas con el AFD.

import sys
from collections import deque
from typing import Dict, Set, FrozenSet, Iterable

from regex_tm.automata import Ids, NFA, DFA, DFAState
from regex_tm.thompson_nfa import build_nfa

# ------------------------------ Clausura-ε ------------------------------

def epsilon_closure(nfa: NFA, states: Iterable[int]) -> FrozenSet[int]:
    closure = set(states)
    queue = deque(closure)
    while queue:
        s = queue.popleft()
        for t in nfa.states[s].epsilon:
            if t not in closure:
                closure.add(t)
                queue.append(t)
    return frozenset(closure)

def move(nfa: NFA, states: Iterable[int], symbol: str) -> Set[int]:
    targets: Set[int] = set()
    for s in states:
        targets.update(nfa.states[s].transitions.get(symbol, ()))
    return targets

# ------------------------------ NFA -> DFA (Subconjuntos) ------------------------------

def subset_construct(nfa: NFA) -> DFA:
    ids = Ids()
    accepting_nfa = nfa.accepting_states()

    def new_state(subset: FrozenSet[int]) -> DFAState:
        st = DFAState(ids.new(), accepting=bool(subset & accepting_nfa))
        dfa.states[st.id] = st
        dfa.subsets[st.id] = subset
        seen[subset] = st.id
        queue.append(subset)
        return st

    start_subset = epsilon_closure(nfa, {nfa.start})
    seen: Dict[FrozenSet[int], int] = {}
    queue = deque()
    dfa = DFA(start=0, states={})
    dfa.start = new_state(start_subset).id

    while queue:
        S = queue.popleft()
        current = dfa.states[seen[S]]
        for a in sorted(nfa.alphabet):
            targets = move(nfa, S, a)
            if not targets:
                # sin transición: rechazo implícito, no hay estado sumidero
                continue
            T = epsilon_closure(nfa, targets)
            if T in seen:
                dst = seen[T]
            else:
                dst = new_state(T).id
            current.transitions[a] = dst
            dfa.alphabet.add(a)

    return dfa

def empty_dfa() -> DFA:
    """AFD de respaldo: un único estado sin aceptación y sin símbolos."""
    return DFA(start=0, states={0: DFAState(0)}, subsets={0: frozenset()})

def regex_to_dfa(regex: str) -> DFA:
    try:
        return subset_construct(build_nfa(regex))
    except RecursionError as e:
        print(f"[REGEX_TO_DFA] Error estructural al procesar {regex!r}: {type(e).__name__}; se usa AFD vacío")
        sys.stdout.flush()
        return empty_dfa()

# ------------------------------ Reconocimiento con AFD ------------------------------

def dfa_accepts(dfa: DFA, cadena: str) -> bool:
    estado = dfa.states[dfa.start]
    for ch in cadena:
        # si no hay transición definida para el símbolo, rechazo inmediato
        if ch not in estado.transitions:
            return False
        estado = dfa.states[estado.transitions[ch]]
    return estado.accepting
