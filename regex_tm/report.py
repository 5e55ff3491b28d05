# report.py
# Salidas legibles para consola: AFD, MT, cinta y sugerencias de cadenas.
# Nada de esto participa en la conversión; solo lee las estructuras.

import itertools
import sys
from typing import Dict, List, Tuple

from regex_tm.automata import DFA, TuringMachine
from regex_tm.subset import dfa_accepts
from regex_tm.turing import TMStep

TRACE_LIMIT = 10

# ------------------------------ Alias para AFD ------------------------------

def alias_dfa(dfa: DFA) -> Tuple[Dict[int, str], Dict[str, int]]:
    """
    Asigna alias S0, S1, ... a los estados del AFD en un orden estable:
    S0 siempre es el estado inicial y luego el resto por id.
    """
    orden = [dfa.start] + sorted(sid for sid in dfa.states if sid != dfa.start)
    aliases = {sid: f"S{i}" for i, sid in enumerate(orden)}
    rev = {v: k for k, v in aliases.items()}
    return aliases, rev

# ------------------------------ Impresión AFD ------------------------------

def print_dfa_complete(dfa: DFA) -> None:
    """Imprime alfabeto, estados, aceptación, transiciones y estados muertos."""
    aliases, rev = alias_dfa(dfa)
    dead = set(dfa.dead_states())

    alphabet = sorted(dfa.alphabet)
    print("=== AFD ===")
    print("Alfabeto:", ", ".join(alphabet) if alphabet else "(ninguno)")
    print("Estados:", ", ".join(rev))
    print("Estado inicial:", aliases[dfa.start])
    accepts = [aliases[sid] for sid in sorted(dfa.accepts_ids(), key=lambda s: aliases[s])]
    print("Estados de aceptación:", ", ".join(accepts) if accepts else "(ninguno)")

    print("Transiciones:")
    for alias, sid in rev.items():
        if sid in dead:
            continue
        for sym, dst in sorted(dfa.states[sid].transitions.items()):
            print(f"  {alias} --{sym}--> {aliases[dst]}")

    print("Estados muertos:")
    if not dead:
        print("  (ninguno)")
    for sid in sorted(dead, key=lambda s: aliases[s]):
        print(f"  {aliases[sid]}")
        for sym, dst in sorted(dfa.states[sid].transitions.items()):
            print(f"    {aliases[sid]} --{sym}--> {aliases[dst]}")
    print()

# ------------------------------ Impresión MT ------------------------------

def print_tm(tm: TuringMachine) -> None:
    print("=== Máquina de Turing ===")
    print("Estados:", ", ".join(sorted(tm.states)))
    print("Alfabeto de entrada:", ", ".join(sorted(tm.input_alphabet)) or "(ninguno)")
    print("Alfabeto de cinta:", ", ".join(sorted(tm.tape_alphabet)))
    print("Estado inicial:", tm.start_state)
    print("Estados de aceptación:", ", ".join(sorted(tm.accept_states)) or "(ninguno)")
    print("Estado de rechazo:", tm.reject_state)
    print("Número de transiciones:", len(tm.transitions))
    for t in tm.transitions:
        print(f"  {t}")
    print()

def tape_to_string(tape, head: int) -> str:
    return "".join(f"[{sym}]" if i == head else sym for i, sym in enumerate(tape))

class StepPrinter:
    """Hook de traza para tm_execute: imprime los primeros pasos de la MT."""

    def __init__(self, limit: int = TRACE_LIMIT):
        self.limit = limit

    def __call__(self, step: TMStep) -> None:
        if step.number <= self.limit:
            print(f"Paso {step.number}: {step.transition} | Cinta: {tape_to_string(step.tape, step.head)}")
        elif step.number == self.limit + 1:
            print(f"... (solo se muestran los primeros {self.limit} pasos)")
        sys.stdout.flush()

# ------------------------------ Sugerencias de cadenas ------------------------------

def suggest_test_cases(regex: str) -> List[str]:
    hints = [
        'Cadena vacía: ""',
        'Caracteres sueltos: "a", "b", "c"',
    ]
    if "*" in regex:
        hints.append("Prueba la cadena vacía y el patrón repetido")
    if "+" in regex:
        hints.append("Prueba una sola aparición y varias apariciones")
    if "|" in regex:
        hints.append("Prueba cada una de las alternativas")
    if "?" in regex:
        hints.append("Prueba con y sin la parte opcional")
    hints.extend([
        'Cadenas cortas: "a", "ab", "abc"',
        'Cadenas largas: "hello", "world", "test123"',
        'Números: "123", "42"',
        'Mixtas: "a1b2c3"',
    ])
    return hints

def generate_test_strings(dfa: DFA, max_length: int = 4, limit: int = 20,
                          max_candidates: int = 20000) -> Dict[str, bool]:
    """
    Genera cadenas sobre el alfabeto del AFD en orden de longitud (0..max_length)
    y devuelve hasta `limit` aceptadas y `limit` rechazadas.
    Se prueban como mucho `max_candidates` cadenas.
    """
    alphabet = sorted(dfa.alphabet)
    accepted: Dict[str, bool] = {}
    rejected: Dict[str, bool] = {}
    candidates = itertools.chain.from_iterable(
        itertools.product(alphabet, repeat=length) for length in range(max_length + 1)
    )
    for combo in itertools.islice(candidates, max_candidates):
        cadena = "".join(combo)
        if dfa_accepts(dfa, cadena):
            if len(accepted) < limit:
                accepted[cadena] = True
        elif len(rejected) < limit:
            rejected[cadena] = False
        if len(accepted) >= limit and len(rejected) >= limit:
            break
    return {**accepted, **rejected}

# ------------------------------ Dibujo AFD (networkx) ------------------------------

def draw_dfa_networkx(dfa: DFA):
    import matplotlib.pyplot as plt
    import networkx as nx

    aliases, _ = alias_dfa(dfa)

    G = nx.DiGraph()
    for sid, st in dfa.states.items():
        G.add_node(aliases[sid], accepting=st.accepting)

    labels = {}
    for sid, st in dfa.states.items():
        for sym, dst in st.transitions.items():
            labels.setdefault((aliases[sid], aliases[dst]), []).append(sym)
            G.add_edge(aliases[sid], aliases[dst])

    pos = nx.spring_layout(G, k=0.9, seed=7)
    fig, ax = plt.subplots(figsize=(10, 7))
    ax.set_title("AFD (alias) – desde Thompson + Subconjuntos")
    ax.axis("off")

    node_linewidth = [2.8 if G.nodes[n].get("accepting", False) else 1.5 for n in G.nodes()]
    nx.draw_networkx_nodes(G, pos, node_color="#ffffff", node_size=1700,
                           edgecolors="black", linewidths=node_linewidth, ax=ax)
    nx.draw_networkx_labels(G, pos, font_size=10, ax=ax)
    nx.draw_networkx_edges(G, pos, arrows=True, arrowstyle="-|>",
                           connectionstyle="arc3,rad=0.1", ax=ax)

    # el comodín agrega 62 símbolos por arista; se recorta la etiqueta
    edge_labels = {}
    for (u, v), syms in labels.items():
        syms = sorted(syms)
        edge_labels[(u, v)] = ",".join(syms) if len(syms) <= 6 else ",".join(syms[:6]) + ",…"
    nx.draw_networkx_edge_labels(G, pos, edge_labels=edge_labels, font_size=9,
                                 label_pos=0.5, ax=ax)

    start_alias = aliases[dfa.start]
    if start_alias in pos:
        x, y = pos[start_alias]
        ax.annotate("", xy=(x, y), xycoords="data",
                    xytext=(x - 1.6, y), textcoords="data",
                    arrowprops=dict(arrowstyle="-|>", lw=1.6))
        ax.text(x - 1.7, y, "start", fontsize=9, va="center", ha="right")

    plt.show(block=False)
    return fig
