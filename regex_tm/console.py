# console.py
# Conversor interactivo Regex -> AFD -> MT.
# Uso:
#   python -m regex_tm.console
#   python -m regex_tm.console "<regex>" [--jff=salida.jff] [--draw]
#   python -m regex_tm.console --batch=entrada.txt --csv=salida.csv

import sys
import time

from regex_tm.export import export_tm_jff, process_regex_file_to_csv
from regex_tm.report import (
    StepPrinter,
    draw_dfa_networkx,
    print_dfa_complete,
    print_tm,
    suggest_test_cases,
)
from regex_tm.subset import dfa_accepts, regex_to_dfa
from regex_tm.turing import translate_to_tm, tm_execute

BANNER = """\
Conversor universal: Expresión Regular -> AFD -> Máquina de Turing
Soporta:
- Caracteres: a, b, c, 1, 2, 3, ...
- Concatenación: ab, abc, hola
- Alternancia: a|b, (gato|perro)
- Estrella de Kleene: a*, (ab)*, (a|b)*
- Uno o más: a+, (ab)+
- Opcional: a?, (hola)?
- Agrupación: (a|b)*c, a(b|c)*d
- Escapes: \\*, \\+, \\(, \\)
- Cualquier carácter: . (a-z, A-Z, 0-9)
Ejemplos: a*, a+b, (a|b)*c, hola|mundo, a?b+c*"""

def check_string(dfa, tm, cadena: str) -> bool:
    """Prueba una cadena en el AFD y en la MT; devuelve True si coinciden."""
    print("\n" + "-" * 50)
    dfa_ok = dfa_accepts(dfa, cadena)
    print("Resultado AFD:", "ACEPTADA ✓" if dfa_ok else "RECHAZADA ✗")

    print("\nEjecutando Máquina de Turing:")
    print(f'Cinta inicial para "{cadena}"')
    run = tm_execute(tm, cadena, trace=StepPrinter())
    print(f"MT detenida en {run.final_state} tras {run.steps} paso(s) - motivo: {run.reason.value}")

    print("\nComparación:")
    print("AFD:", "ACEPTADA" if dfa_ok else "RECHAZADA")
    print("MT: ", "ACEPTADA" if run.accepted else "RECHAZADA")
    agree = dfa_ok == run.accepted
    print("✓ Los resultados coinciden" if agree else "⚠ Los resultados NO coinciden")
    print("-" * 50)
    sys.stdout.flush()
    return agree

def convert(regex: str):
    print("\n" + "=" * 60)
    print(f"Procesando regex: {regex}")
    print("=" * 60)
    print("Paso 1: Regex -> AFD (Thompson + Subconjuntos)")
    t0 = time.time()
    dfa = regex_to_dfa(regex)
    print(f"Conversión completada en {(time.time() - t0) * 1000:.1f} ms")
    print_dfa_complete(dfa)

    print("Paso 2: AFD -> Máquina de Turing")
    tm = translate_to_tm(dfa)
    print_tm(tm)
    sys.stdout.flush()
    return dfa, tm

def interactive(input_fn=input) -> None:
    print("=" * 70)
    print(BANNER)
    print("=" * 70)
    try:
        while True:
            regex = input_fn("\nIngresa una expresión regular ('exit' para salir): ").strip()
            if regex.lower() == "exit":
                print("¡Gracias por usar el conversor!")
                break
            if not regex:
                print("¡Ingresa una regex válida!")
                continue

            dfa, tm = convert(regex)

            print("Paso 3: Probar los autómatas")
            print("Ingresa cadenas ('done' para terminar, 'examples' para sugerencias):")
            while True:
                cadena = input_fn("Cadena: ").strip()
                if cadena.lower() == "done":
                    break
                if cadena.lower() == "examples":
                    print(f"Sugerencias para la regex '{regex}':")
                    for hint in suggest_test_cases(regex):
                        print(f"- {hint}")
                    continue
                check_string(dfa, tm, cadena)
    except (KeyboardInterrupt, EOFError):
        pass

def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    batch_arg = next((a for a in argv if a.startswith("--batch=")), None)
    csv_arg = next((a for a in argv if a.startswith("--csv=")), None)
    if batch_arg:
        input_path = batch_arg.split("=", 1)[1]
        output_csv = csv_arg.split("=", 1)[1] if csv_arg else "resultado.csv"
        try:
            df = process_regex_file_to_csv(input_path, output_csv)
        except FileNotFoundError as e:
            print(f"[!] Error en modo batch: {e}")
            return 1
        print(f"[OK] CSV generado: {output_csv} ({len(df)} regex)")
        return 0

    positional = [a for a in argv if not a.startswith("--")]
    if not positional:
        interactive()
        return 0

    # --- una sola regex por línea de comandos ---
    regex = positional[0]
    dfa, tm = convert(regex)

    jff_arg = next((a for a in argv if a.startswith("--jff=")), None)
    if jff_arg:
        export_tm_jff(tm, jff_arg.split("=", 1)[1])
        print("[OK] Exportado JFLAP:", jff_arg.split("=", 1)[1])

    if "--draw" in argv:
        try:
            draw_dfa_networkx(dfa)
        except ImportError:
            print("\n[!] Para ver el gráfico instala:")
            print("    pip install networkx matplotlib")

    for cadena in positional[1:]:
        check_string(dfa, tm, cadena)
    return 0

if __name__ == "__main__":
    sys.exit(main())
