# thompson_nfa.py
# Regex -> AFND (Thompson) con un parser descendente recursivo que arma los
# fragmentos a medida que reconoce cada producción de la gramática:
#
#   expr   := term ('|' expr)?
#   term   := factor*
#   factor := atom quantifier?
#   atom   := char | '\' char | '.' | '(' expr ')'
#   quantifier := '*' | '+' | '?'
#
# El parser es permisivo: nunca lanza excepciones. Cualquier carácter que no
# se reconoce en una posición se salta (fragmento vacío) y un '(' sin cerrar
# consume hasta el final.

from dataclasses import dataclass, field
from typing import Dict, Set, List

from regex_tm.automata import (
    BLANK,
    END_MARKER,
    WILDCARD_SYMBOLS,
    Ids,
    NFA,
    NFAState,
)

MAX_GROUP_DEPTH = 100
RESERVED_SYMBOLS = {BLANK, END_MARKER}
QUANTIFIERS = {"*", "+", "?"}

# ------------------------------ Fragmentos ------------------------------

@dataclass
class Fragment:
    start: int
    accept: int
    members: Set[int]
    alphabet: Set[str] = field(default_factory=set)

    def merge(self, *others: "Fragment") -> None:
        for other in others:
            self.members |= other.members
            self.alphabet |= other.alphabet

class ThompsonBuilder:
    """
    Dueño del arena de estados del AFND y del contador de ids.
    Cada regla de Thompson devuelve un Fragment con un único estado de
    aceptación; al componer, se limpia la bandera de los estados absorbidos.
    """

    def __init__(self):
        self.ids = Ids()
        self.arena: Dict[int, NFAState] = {}

    def _state(self) -> NFAState:
        st = NFAState(self.ids.new())
        self.arena[st.id] = st
        return st

    def _fresh(self, start: NFAState, accept: NFAState, alphabet: Set[str] = None) -> Fragment:
        accept.accepting = True
        return Fragment(start.id, accept.id, {start.id, accept.id}, set(alphabet or ()))

    def literal(self, symbol: str) -> Fragment:
        s = self._state(); f = self._state()
        s.add(symbol, f.id)
        return self._fresh(s, f, {symbol})

    def wildcard(self) -> Fragment:
        s = self._state(); f = self._state()
        for ch in WILDCARD_SYMBOLS:
            s.add(ch, f.id)
        return self._fresh(s, f, set(WILDCARD_SYMBOLS))

    def epsilon(self) -> Fragment:
        s = self._state()
        return self._fresh(s, s)

    def concat(self, a: Fragment, b: Fragment) -> Fragment:
        acc = self.arena[a.accept]
        acc.add_epsilon(b.start)
        acc.accepting = False
        frag = Fragment(a.start, b.accept, set(a.members), set(a.alphabet))
        frag.merge(b)
        return frag

    def union(self, a: Fragment, b: Fragment) -> Fragment:
        s = self._state(); f = self._state()
        s.add_epsilon(a.start)
        s.add_epsilon(b.start)
        for acc in (self.arena[a.accept], self.arena[b.accept]):
            acc.add_epsilon(f.id)
            acc.accepting = False
        frag = self._fresh(s, f)
        frag.merge(a, b)
        return frag

    def star(self, a: Fragment) -> Fragment:
        s = self._state(); f = self._state()
        s.add_epsilon(a.start)
        s.add_epsilon(f.id)
        acc = self.arena[a.accept]
        acc.add_epsilon(a.start)
        acc.add_epsilon(f.id)
        acc.accepting = False
        frag = self._fresh(s, f)
        frag.merge(a)
        return frag

    def plus(self, a: Fragment) -> Fragment:
        # A·A* reutilizando los mismos estados de A (no es una copia)
        return self.concat(a, self.star(a))

    def question(self, a: Fragment) -> Fragment:
        return self.union(a, self.epsilon())

    def concat_all(self, parts: List[Fragment]) -> Fragment:
        if not parts:
            return self.epsilon()
        frag = parts[0]
        for nxt in parts[1:]:
            frag = self.concat(frag, nxt)
        return frag

    def to_nfa(self, frag: Fragment) -> NFA:
        states = {sid: self.arena[sid] for sid in sorted(frag.members)}
        return NFA(start=frag.start, accept=frag.accept, states=states, alphabet=set(frag.alphabet))

# ------------------------------ Parsing Regex ------------------------------

def is_regular_char(c: str) -> bool:
    return c.isalpha() or c.isdecimal() or c in " \t"

class RegexParser:
    def __init__(self, pattern: str, builder: ThompsonBuilder):
        self.pattern = pattern
        self.builder = builder
        self.pos = 0
        self.depth = 0

    def parse(self) -> Fragment:
        return self._parse_expr()

    def _peek(self):
        if self.pos < len(self.pattern):
            return self.pattern[self.pos]
        return None

    def _parse_expr(self) -> Fragment:
        # las alternativas se juntan en una lista y se pliegan por la derecha,
        # igual que la recursión expr := term '|' expr pero sin anidar llamadas
        alternatives = [self._parse_term()]
        while self._peek() == "|":
            self.pos += 1
            alternatives.append(self._parse_term())
        frag = alternatives[-1]
        for alt in reversed(alternatives[:-1]):
            frag = self.builder.union(alt, frag)
        return frag

    def _parse_term(self) -> Fragment:
        parts: List[Fragment] = []
        while True:
            c = self._peek()
            if c is None or c == "|":
                break
            if c == ")" and self.depth > 0:
                break
            parts.append(self._parse_factor())
        return self.builder.concat_all(parts)

    def _parse_factor(self) -> Fragment:
        b = self.builder
        c = self.pattern[self.pos]
        nxt = self.pattern[self.pos + 1] if self.pos + 1 < len(self.pattern) else None

        if c == "(" and self.depth < MAX_GROUP_DEPTH:
            self.pos += 1
            self.depth += 1
            frag = self._parse_expr()
            self.depth -= 1
            if self._peek() == ")":
                self.pos += 1
        elif c == "\\" and nxt is not None and nxt not in RESERVED_SYMBOLS:
            frag = b.literal(nxt)
            self.pos += 2
        elif c == ".":
            frag = b.wildcard()
            self.pos += 1
        elif is_regular_char(c):
            frag = b.literal(c)
            self.pos += 1
        else:
            # carácter no reconocido: se ignora, sin cuantificador
            self.pos += 1
            return b.epsilon()

        q = self._peek()
        if q in QUANTIFIERS:
            self.pos += 1
            if q == "*":
                frag = b.star(frag)
            elif q == "+":
                frag = b.plus(frag)
            else:
                frag = b.question(frag)
        return frag

def build_nfa(pattern: str) -> NFA:
    builder = ThompsonBuilder()
    frag = RegexParser(pattern, builder).parse()
    return builder.to_nfa(frag)
