# automata.py
# Estructuras compartidas por todo el pipeline: AFND, AFD y Máquina de Turing.
# Los estados se guardan en un "arena" (dict id -> estado) y las transiciones
# referencian ids enteros, nunca objetos directamente.

from dataclasses import dataclass, field
from typing import Dict, Set, List, FrozenSet, Optional

BLANK = "_"
END_MARKER = "#"
WILDCARD_SYMBOLS = (
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789"
)
MAX_STEPS = 1000

LEFT = "L"
RIGHT = "R"

# ------------------------------ Ids ------------------------------

class Ids:
    def __init__(self):
        self._next = 0
    def new(self) -> int:
        v = self._next
        self._next += 1
        return v

# ------------------------------ AFND ------------------------------

@dataclass
class NFAState:
    id: int
    accepting: bool = False
    transitions: Dict[str, Set[int]] = field(default_factory=dict)
    epsilon: Set[int] = field(default_factory=set)
    def add(self, symbol: str, target: int):
        self.transitions.setdefault(symbol, set()).add(target)
    def add_epsilon(self, target: int):
        self.epsilon.add(target)

@dataclass
class NFA:
    start: int
    accept: int
    states: Dict[int, NFAState]
    alphabet: Set[str] = field(default_factory=set)

    def accepting_states(self) -> Set[int]:
        return {sid for sid, st in self.states.items() if st.accepting}

# ------------------------------ AFD ------------------------------

@dataclass
class DFAState:
    id: int
    accepting: bool = False
    transitions: Dict[str, int] = field(default_factory=dict)

@dataclass
class DFA:
    start: int
    states: Dict[int, DFAState]
    alphabet: Set[str] = field(default_factory=set)
    # subconjunto de estados del AFND detrás de cada estado del AFD
    subsets: Dict[int, FrozenSet[int]] = field(default_factory=dict)

    def accepts_ids(self) -> Set[int]:
        return {sid for sid, st in self.states.items() if st.accepting}

    def is_dead_state(self, sid: int) -> bool:
        """
        Un estado muerto no es de aceptación y, o no tiene transiciones,
        o todas sus transiciones vuelven a él mismo.
        """
        st = self.states[sid]
        if st.accepting:
            return False
        return all(dst == sid for dst in st.transitions.values())

    def dead_states(self) -> List[int]:
        return [sid for sid in sorted(self.states) if self.is_dead_state(sid)]

# ------------------------------ Máquina de Turing ------------------------------

@dataclass(frozen=True)
class TMTransition:
    from_state: str
    read: str
    to_state: str
    write: str
    move: str

    def __str__(self) -> str:
        return f"({self.from_state}, {self.read}) -> ({self.to_state}, {self.write}, {self.move})"

@dataclass
class TuringMachine:
    states: Set[str] = field(default_factory=set)
    input_alphabet: Set[str] = field(default_factory=set)
    tape_alphabet: Set[str] = field(default_factory=set)
    # lista ordenada; la primera transición para (estado, símbolo) gana
    transitions: List[TMTransition] = field(default_factory=list)
    start_state: Optional[str] = None
    accept_states: Set[str] = field(default_factory=set)
    reject_state: Optional[str] = None
    blank: str = BLANK
    # None: la cinta se inicializa solo con la entrada
    end_marker: Optional[str] = None

    def __post_init__(self):
        self.tape_alphabet.add(self.blank)

    def add_transition(self, t: TMTransition) -> None:
        self.transitions.append(t)

    def find_transition(self, state: str, symbol: str) -> Optional[TMTransition]:
        # se recorre la lista directamente para ver también lo agregado a mano
        for t in self.transitions:
            if t.from_state == state and t.read == symbol:
                return t
        return None
