# export.py
# Serialización del AFD y de la MT (JSON, JFLAP) y procesamiento por lotes a CSV.

from pathlib import Path
from typing import Dict, List, Iterable
from xml.sax.saxutils import escape

import pandas as pd

from regex_tm.automata import DFA, TuringMachine, WILDCARD_SYMBOLS
from regex_tm.report import alias_dfa, generate_test_strings
from regex_tm.subset import dfa_accepts, regex_to_dfa
from regex_tm.turing import translate_to_tm, tm_execute

CSV_COLUMNS = [
    "Regex",
    "Alfabeto",
    "Estados",
    "Estados de aceptación",
    "Transiciones AFD",
    "Transiciones MT",
    "Coinciden",
    "Error",
]

# ------------------------------ JSON ------------------------------

def _alias_key(alias: str) -> int:
    return int(alias[1:]) if alias[1:].isdigit() else 999

def dfa_to_json(dfa: DFA) -> Dict:
    """Convierte un DFA a un diccionario JSON serializable (S0 es el inicial)."""
    aliases, rev = alias_dfa(dfa)
    states = sorted(rev, key=_alias_key)
    transitions = []
    for alias in states:
        sid = rev[alias]
        for sym, dst in sorted(dfa.states[sid].transitions.items()):
            transitions.append({"from": alias, "symbol": sym, "to": aliases[dst]})
    return {
        "alphabet": sorted(dfa.alphabet),
        "states": states,
        "start": aliases[dfa.start],
        "accepting": sorted((aliases[s] for s in dfa.accepts_ids()), key=_alias_key),
        "dead_states": sorted((aliases[s] for s in dfa.dead_states()), key=_alias_key),
        "transitions": transitions,
    }

def tm_to_json(tm: TuringMachine) -> Dict:
    return {
        "states": sorted(tm.states),
        "input_alphabet": sorted(tm.input_alphabet),
        "tape_alphabet": sorted(tm.tape_alphabet),
        "start": tm.start_state,
        "accepting": sorted(tm.accept_states),
        "reject": tm.reject_state,
        "blank": tm.blank,
        "end_marker": tm.end_marker,
        "transitions": [
            {"from": t.from_state, "read": t.read, "to": t.to_state, "write": t.write, "move": t.move}
            for t in tm.transitions
        ],
    }

# ------------------------------ Exportar MT a JFLAP ------------------------------

def tm_to_jff_string(tm: TuringMachine) -> str:
    """
    Convierte la MT a formato JFLAP (.jff, tipo "turing") como string.
    El estado inicial es el id 0; el resto va en orden alfabético.
    """
    orden = [tm.start_state] + sorted(s for s in tm.states if s != tm.start_state)
    idmap = {name: i for i, name in enumerate(orden)}

    lines = []
    lines.append('<?xml version="1.0" encoding="UTF-8" standalone="no"?>')
    lines.append('<structure>')
    lines.append('  <type>turing</type>')
    lines.append('  <automaton>')
    for name in orden:
        lines.append(f'    <state id="{idmap[name]}" name="{escape(name)}">')
        if name == tm.start_state:
            lines.append('      <initial/>')
        if name in tm.accept_states:
            lines.append('      <final/>')
        lines.append('    </state>')

    for t in tm.transitions:
        lines.append('    <transition>')
        lines.append(f'      <from>{idmap[t.from_state]}</from>')
        lines.append(f'      <to>{idmap[t.to_state]}</to>')
        # en JFLAP el blanco se representa con la etiqueta vacía
        lines.append('      <read/>' if t.read == tm.blank else f'      <read>{escape(t.read)}</read>')
        lines.append('      <write/>' if t.write == tm.blank else f'      <write>{escape(t.write)}</write>')
        lines.append(f'      <move>{t.move}</move>')
        lines.append('    </transition>')

    lines.append('  </automaton>')
    lines.append('</structure>')
    return "\n".join(lines)

def export_tm_jff(tm: TuringMachine, path: str):
    jff_content = tm_to_jff_string(tm)
    with open(path, "w", encoding="utf-8") as f:
        f.write(jff_content)

# ------------------------------ Comparación AFD vs MT ------------------------------

def cross_check(dfa: DFA, tm: TuringMachine, cadenas: Iterable[str], with_trace: bool = False) -> List[Dict]:
    """
    Corre cada cadena en el AFD y en la MT. Si el pipeline es correcto
    ambos veredictos coinciden siempre ("agree").
    """
    results = []
    for cadena in cadenas:
        steps = []
        trace = None
        if with_trace:
            def trace(step, steps=steps):
                steps.append({
                    "step": step.number,
                    "transition": str(step.transition),
                    "state": step.state,
                    "tape": "".join(step.tape),
                    "head": step.head,
                })
        dfa_ok = dfa_accepts(dfa, cadena)
        run = tm_execute(tm, cadena, trace)
        row = {
            "string": cadena,
            "dfa_accepted": dfa_ok,
            "tm_accepted": run.accepted,
            "halt_reason": run.reason.value,
            "steps": run.steps,
            "agree": dfa_ok == run.accepted,
        }
        if with_trace:
            row["trace"] = steps
        results.append(row)
    return results

def probe_strings(dfa: DFA) -> List[str]:
    """Cadenas de prueba para un lote: generadas + una con símbolo fuera del alfabeto."""
    cadenas = list(generate_test_strings(dfa, max_length=3, limit=10))
    outsider = next((c for c in WILDCARD_SYMBOLS if c not in dfa.alphabet), None)
    if outsider is not None:
        cadenas.append(outsider)
    return cadenas

# ------------------------------ Procesamiento por lotes ------------------------------

def read_regex_lines(in_path: Path) -> List[str]:
    if in_path.suffix.lower() == ".csv":
        df = pd.read_csv(in_path, dtype=str, keep_default_na=False)
        # columna "Regex" o "regex"; si no hay, la primera
        column = next((c for c in ("Regex", "regex") if c in df.columns), df.columns[0])
        raw = df[column].tolist()
    else:
        with in_path.open("r", encoding="utf-8") as f_in:
            raw = f_in.read().splitlines()
    # saltar vacías o comentarios
    return [rx.strip() for rx in raw if rx.strip() and not rx.strip().startswith("#")]

def process_single_regex(lineno: int, rx: str) -> Dict[str, str]:
    row = {col: "" for col in CSV_COLUMNS}
    row["Regex"] = rx
    try:
        dfa = regex_to_dfa(rx)
        tm = translate_to_tm(dfa)
        dfa_json = dfa_to_json(dfa)
        row["Alfabeto"] = " ".join(dfa_json["alphabet"])
        row["Estados"] = " ".join(dfa_json["states"])
        row["Estados de aceptación"] = " ".join(dfa_json["accepting"])
        row["Transiciones AFD"] = " | ".join(
            f"{t['from']} --{t['symbol']}--> {t['to']}" for t in dfa_json["transitions"]
        )
        row["Transiciones MT"] = " | ".join(str(t) for t in tm.transitions)
        checks = cross_check(dfa, tm, probe_strings(dfa))
        row["Coinciden"] = "si" if all(c["agree"] for c in checks) else "no"
    except Exception as e:
        # registrar error pero continuar con las demás líneas
        row["Error"] = f"Línea {lineno}: {type(e).__name__}: {e}"
    return row

def process_regex_file_to_csv(input_path: str, output_csv: str) -> pd.DataFrame:
    """
    Lee regex (una por línea, o la columna Regex/primera columna de un csv)
    desde input_path y escribe output_csv con las columnas de CSV_COLUMNS.
    """
    in_path = Path(input_path)
    if not in_path.exists():
        raise FileNotFoundError(f"No existe el archivo: {input_path}")

    rows = [process_single_regex(lineno, rx) for lineno, rx in enumerate(read_regex_lines(in_path), start=1)]
    df = pd.DataFrame(rows, columns=CSV_COLUMNS)
    df.to_csv(output_csv, index=False, encoding="utf-8")
    return df
