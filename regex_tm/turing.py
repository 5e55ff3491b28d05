# turing.py
# AFD -> Máquina de Turing de una cinta, y simulador de la máquina.
#
# La MT reproduce la función de transición del AFD de izquierda a derecha:
# lee un símbolo, lo vuelve a escribir sin cambios y mueve el cabezal a la
# derecha. El final de la entrada se marca con END_MARKER; al leerlo la MT
# pasa a qAccept o a qReject según el estado del AFD en el que quedó.

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from regex_tm.automata import (
    BLANK,
    END_MARKER,
    LEFT,
    MAX_STEPS,
    RIGHT,
    DFA,
    TMTransition,
    TuringMachine,
)

ACCEPT_STATE = "qAccept"
REJECT_STATE = "qReject"

# ------------------------------ AFD -> MT ------------------------------

def tm_state_name(dfa_state_id: int) -> str:
    return f"q{dfa_state_id}"

def translate_to_tm(dfa: DFA) -> TuringMachine:
    tm = TuringMachine(
        start_state=tm_state_name(dfa.start),
        accept_states={ACCEPT_STATE},
        reject_state=REJECT_STATE,
        blank=BLANK,
        end_marker=END_MARKER,
    )
    tm.states.update(tm_state_name(sid) for sid in dfa.states)
    tm.states.update({ACCEPT_STATE, REJECT_STATE})
    tm.input_alphabet.update(dfa.alphabet)
    tm.tape_alphabet.update(dfa.alphabet)
    tm.tape_alphabet.add(END_MARKER)

    for sid in sorted(dfa.states):
        st = dfa.states[sid]
        name = tm_state_name(sid)
        for sym in sorted(st.transitions):
            tm.add_transition(TMTransition(name, sym, tm_state_name(st.transitions[sym]), sym, RIGHT))
        # fin de la entrada: decide según el estado del AFD
        target = ACCEPT_STATE if st.accepting else REJECT_STATE
        tm.add_transition(TMTransition(name, END_MARKER, target, END_MARKER, RIGHT))

    return tm

# ------------------------------ Simulación MT ------------------------------

class HaltReason(Enum):
    ACCEPT = "accept"
    REJECT_STATE = "reject_state"
    NO_TRANSITION = "no_transition"
    STEP_LIMIT = "step_limit"
    INVALID_INPUT = "invalid_input"

@dataclass(frozen=True)
class TMStep:
    number: int
    transition: TMTransition
    state: str
    tape: Tuple[str, ...]
    head: int

@dataclass
class TMRunResult:
    accepted: bool
    reason: HaltReason
    steps: int
    final_state: str
    tape: List[str]
    head: int

TraceHook = Callable[[TMStep], None]

def initial_tape(tm: TuringMachine, cadena: str) -> List[str]:
    tape = list(cadena)
    if tm.end_marker is not None:
        tape.append(tm.end_marker)
    if not tape:
        tape.append(tm.blank)
    return tape

def tm_execute(tm: TuringMachine, cadena: str, trace: Optional[TraceHook] = None) -> TMRunResult:
    """
    Ejecuta la MT sobre `cadena` hasta aceptar, rechazar o agotar MAX_STEPS.

    En cada paso, en este orden:
      1. estado de aceptación -> acepta
      2. estado de rechazo -> rechaza
      3. si el cabezal salió de la cinta, se agrega una celda en blanco de ese lado
      4. sin transición para (estado, símbolo) -> rechaza
      5. escribe, cambia de estado y mueve el cabezal

    `trace` recibe un TMStep después de cada transición aplicada.
    """
    state = tm.start_state
    tape = initial_tape(tm, cadena)
    head = 0
    steps = 0

    if tm.end_marker is not None and tm.end_marker in cadena:
        # la entrada no se puede delimitar si ya contiene la marca de fin
        return TMRunResult(False, HaltReason.INVALID_INPUT, steps, state, tape, head)

    while steps < MAX_STEPS:
        if state in tm.accept_states:
            return TMRunResult(True, HaltReason.ACCEPT, steps, state, tape, head)
        if state == tm.reject_state:
            return TMRunResult(False, HaltReason.REJECT_STATE, steps, state, tape, head)

        if head < 0:
            tape.insert(0, tm.blank)
            head = 0
        elif head >= len(tape):
            tape.append(tm.blank)
            head = len(tape) - 1

        t = tm.find_transition(state, tape[head])
        if t is None:
            return TMRunResult(False, HaltReason.NO_TRANSITION, steps, state, tape, head)

        tape[head] = t.write
        state = t.to_state
        if t.move == LEFT:
            head -= 1
        elif t.move == RIGHT:
            head += 1
        steps += 1

        if trace is not None:
            trace(TMStep(steps, t, state, tuple(tape), head))

    return TMRunResult(False, HaltReason.STEP_LIMIT, steps, state, tape, head)

def tm_run(tm: TuringMachine, cadena: str, trace: Optional[TraceHook] = None) -> bool:
    return tm_execute(tm, cadena, trace).accepted
