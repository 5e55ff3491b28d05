# regex_tm/views.py
from datetime import datetime
import json
import os
import re
import sys
import tempfile
from urllib.parse import quote

from django.http import HttpResponse, JsonResponse
from django.views.decorators.http import require_http_methods
from django.views.decorators.csrf import csrf_exempt

from regex_tm.export import (
    cross_check,
    dfa_to_json,
    process_regex_file_to_csv,
    tm_to_jff_string,
    tm_to_json,
)
from regex_tm.subset import dfa_accepts, regex_to_dfa
from regex_tm.turing import translate_to_tm


def _log_request(tag, request):
    print("=" * 80)
    print(f"[{tag}] Petición recibida - {datetime.now()}")
    print(f"[{tag}] Método HTTP: {request.method}")
    print(f"[{tag}] IP Cliente: {request.META.get('REMOTE_ADDR', 'Unknown')}")
    print(f"[{tag}] User-Agent: {request.META.get('HTTP_USER_AGENT', 'Unknown')}")
    print(f"[{tag}] Path: {request.path}")
    print(f"[{tag}] Query String: {request.META.get('QUERY_STRING', 'None')}")
    sys.stdout.flush()


def _error(tag, message, status=400, **extra):
    error_response = {"success": False, **extra, "error": message}
    print(f"[{tag}] --- RESPUESTA DE ERROR ---")
    print(json.dumps(error_response, ensure_ascii=False, indent=2))
    print(f"[{tag}] --- FIN RESPUESTA ---")
    print("=" * 80)
    sys.stdout.flush()
    return JsonResponse(error_response, status=status, json_dumps_params={"ensure_ascii": False})


def _parse_tests(value):
    if isinstance(value, list):
        return [str(s) for s in value]
    if isinstance(value, str):
        # Si es una cadena, separarla por comas
        return [s.strip() for s in value.split(",") if s.strip()]
    if value is None:
        return []
    return [str(value)]


def _read_params(tag, request):
    """
    Lee regex, cadenas de prueba y el flag de traza desde GET o desde el
    cuerpo JSON de un POST. Lanza ValueError si el JSON es inválido.

    - GET: ?regex=<expresion>&test=c1&test=c2 o ?tests=c1,c2 [&trace=true]
    - POST: {"regex": "...", "test": "..."} o {"regex": "...", "tests": [...], "trace": true}
    """
    if request.method == "GET":
        regex = request.GET.get("regex")
        test_strings = request.GET.getlist("test") or _parse_tests(request.GET.get("tests"))
        trace = request.GET.get("trace", "").lower() in ("1", "true", "yes")
        print(f"[{tag}] GET - regex={regex!r}, tests={test_strings}, trace={trace}")
    else:
        body_str = request.body.decode("utf-8") if request.body else "{}"
        print(f"[{tag}] POST Body (raw): {body_str[:200]}...")
        try:
            data = json.loads(body_str)
        except json.JSONDecodeError as e:
            raise ValueError(f"JSON inválido en el cuerpo de la petición: {e}")
        if not isinstance(data, dict):
            raise ValueError("El cuerpo JSON debe ser un objeto")
        regex = data.get("regex")
        if "tests" in data:
            test_strings = _parse_tests(data.get("tests"))
        else:
            # "test" admite una cadena única (incluida la vacía) o una lista
            test = data.get("test")
            test_strings = _parse_tests(test) if isinstance(test, list) else ([] if test is None else [str(test)])
        trace = bool(data.get("trace", False))
        print(f"[{tag}] POST - regex={regex!r}, tests={test_strings}, trace={trace}")
    sys.stdout.flush()
    return regex, test_strings, trace


@csrf_exempt
@require_http_methods(["GET", "POST"])
def regex_to_dfa_endpoint(request):
    """
    Endpoint que convierte una expresión regular a AFD.

    Retorna JSON con:
    {
        "success": true/false,
        "regex": "<expresion>",
        "dfa": {"alphabet": [...], "states": [...], "start": "S0", "accepting": [...],
                "dead_states": [...], "transitions": [...]},
        "test_results": null o [{"string": "...", "accepted": true/false}, ...],
        "error": null o "mensaje de error"
    }
    """
    tag = "REGEX_TO_DFA"
    _log_request(tag, request)
    try:
        regex, test_strings, _ = _read_params(tag, request)
    except ValueError as e:
        print(f"[{tag}] ERROR - {e}")
        return _error(tag, "JSON inválido en el cuerpo de la petición")

    if not regex:
        print(f"[{tag}] ERROR - Parámetro 'regex' faltante")
        return _error(tag, "Parámetro 'regex' requerido")

    try:
        print(f"[{tag}] Paso 1: Regex -> AFD (Thompson + Subconjuntos)")
        dfa = regex_to_dfa(regex)
        dfa_json = dfa_to_json(dfa)
        print(f"[{tag}] AFD creado - Estados: {len(dfa_json['states'])}, Alfabeto: {dfa_json['alphabet']}")
        sys.stdout.flush()

        test_results = None
        if test_strings:
            test_results = []
            for test_str in test_strings:
                accepted = dfa_accepts(dfa, test_str)
                test_results.append({"string": test_str, "accepted": accepted})
                print(f"[{tag}] Cadena '{test_str}': {'ACEPTADA' if accepted else 'RECHAZADA'}")
            sys.stdout.flush()

        response_data = {
            "success": True,
            "regex": regex,
            "dfa": dfa_json,
            "test_results": test_results,
            "error": None,
        }
        print(f"[{tag}] ÉXITO - Respuesta generada correctamente")
        print("=" * 80)
        sys.stdout.flush()
        return JsonResponse(response_data, json_dumps_params={"ensure_ascii": False})

    except Exception as e:
        import traceback
        print(f"[{tag}] ERROR - Excepción capturada: {type(e).__name__}: {e}")
        traceback.print_exc()
        return _error(tag, str(e), regex=regex, dfa=None, test_results=None)


@csrf_exempt
@require_http_methods(["GET", "POST"])
def regex_to_tm_endpoint(request):
    """
    Endpoint que convierte una expresión regular a AFD y luego a Máquina de Turing,
    y compara ambos veredictos para cada cadena de prueba.

    Retorna JSON con:
    {
        "success": true/false,
        "regex": "<expresion>",
        "dfa": {...},
        "tm": {"states": [...], "input_alphabet": [...], "tape_alphabet": [...],
               "start": "q0", "accepting": ["qAccept"], "reject": "qReject",
               "blank": "_", "end_marker": "#", "transitions": [...]},
        "test_results": null o [{"string": "...", "dfa_accepted": ..., "tm_accepted": ...,
                                 "halt_reason": "...", "steps": n, "agree": ...}, ...],
        "error": null o "mensaje de error"
    }
    Con trace=true cada resultado incluye además "trace" con los pasos de la MT.
    """
    tag = "REGEX_TO_TM"
    _log_request(tag, request)
    try:
        regex, test_strings, trace = _read_params(tag, request)
    except ValueError as e:
        print(f"[{tag}] ERROR - {e}")
        return _error(tag, "JSON inválido en el cuerpo de la petición")

    if not regex:
        print(f"[{tag}] ERROR - Parámetro 'regex' faltante")
        return _error(tag, "Parámetro 'regex' requerido")

    try:
        print(f"[{tag}] Paso 1: Regex -> AFD (Thompson + Subconjuntos)")
        dfa = regex_to_dfa(regex)
        print(f"[{tag}] Paso 2: AFD -> MT")
        tm = translate_to_tm(dfa)
        print(f"[{tag}] MT creada - Estados: {len(tm.states)}, Transiciones: {len(tm.transitions)}")
        sys.stdout.flush()

        test_results = None
        if test_strings:
            test_results = cross_check(dfa, tm, test_strings, with_trace=trace)
            for tr in test_results:
                print(f"[{tag}] Cadena '{tr['string']}': AFD={tr['dfa_accepted']} MT={tr['tm_accepted']} "
                      f"({tr['halt_reason']}, {tr['steps']} pasos)")
                if not tr["agree"]:
                    print(f"[{tag}] ADVERTENCIA - AFD y MT no coinciden para '{tr['string']}'")
            sys.stdout.flush()

        response_data = {
            "success": True,
            "regex": regex,
            "dfa": dfa_to_json(dfa),
            "tm": tm_to_json(tm),
            "test_results": test_results,
            "error": None,
        }
        print(f"[{tag}] ÉXITO - Respuesta generada correctamente")
        print("=" * 80)
        sys.stdout.flush()
        return JsonResponse(response_data, json_dumps_params={"ensure_ascii": False})

    except Exception as e:
        import traceback
        print(f"[{tag}] ERROR - Excepción capturada: {type(e).__name__}: {e}")
        traceback.print_exc()
        return _error(tag, str(e), regex=regex, dfa=None, tm=None, test_results=None)


@csrf_exempt
@require_http_methods(["GET", "POST"])
def regex_to_tm_jff(request):
    """
    Endpoint que convierte una expresión regular a Máquina de Turing y la devuelve
    en formato JFLAP (.jff) como archivo descargable.
    """
    tag = "REGEX_TO_TM_JFF"
    _log_request(tag, request)
    try:
        regex, _, _ = _read_params(tag, request)
    except ValueError as e:
        print(f"[{tag}] ERROR - {e}")
        return _error(tag, "JSON inválido en el cuerpo de la petición")

    if not regex:
        print(f"[{tag}] ERROR - Parámetro 'regex' faltante")
        return _error(tag, "Parámetro 'regex' requerido")

    try:
        tm = translate_to_tm(regex_to_dfa(regex))
        jff_content = tm_to_jff_string(tm)
        jff_size = len(jff_content.encode("utf-8"))
        print(f"[{tag}] Archivo JFF generado - Tamaño: ~{jff_size} bytes")

        # Generar nombre de archivo seguro desde la regex
        safe_filename = re.sub(r"[^\w\s-]", "_", regex)
        safe_filename = re.sub(r"[-\s]+", "_", safe_filename)[:50]
        filename = f"tm_{safe_filename}.jff" if safe_filename else "tm.jff"
        print(f"[{tag}] Nombre de archivo: {filename}")
        print("=" * 80)
        sys.stdout.flush()

        response = HttpResponse(jff_content, content_type="application/xml; charset=utf-8")
        encoded_filename = quote(filename, safe="")
        response["Content-Disposition"] = f"attachment; filename=\"{filename}\"; filename*=UTF-8''{encoded_filename}"
        response["Content-Length"] = jff_size
        response["Access-Control-Expose-Headers"] = "Content-Disposition, Content-Length, Content-Type"
        return response

    except Exception as e:
        import traceback
        print(f"[{tag}] ERROR - Excepción capturada: {type(e).__name__}: {e}")
        traceback.print_exc()
        return _error(tag, str(e), regex=regex)


@csrf_exempt
@require_http_methods(["POST"])
def regex_file_to_csv(request):
    """
    Endpoint que recibe un archivo txt o csv con expresiones regulares (campo 'file')
    y devuelve un CSV con el AFD, la MT y si ambos coinciden en las cadenas de prueba.
    """
    tag = "REGEX_FILE_TO_CSV"
    _log_request(tag, request)

    if "file" not in request.FILES:
        print(f"[{tag}] ERROR - No se proporcionó archivo")
        return _error(tag, "No se proporcionó archivo. Use el campo 'file' en el formulario.")

    uploaded_file = request.FILES["file"]
    file_extension = os.path.splitext(uploaded_file.name)[1].lower()
    print(f"[{tag}] Archivo recibido: {uploaded_file.name}")
    sys.stdout.flush()

    if file_extension not in [".txt", ".csv"]:
        print(f"[{tag}] ERROR - Extensión no válida: {file_extension}")
        return _error(tag, f"Formato de archivo no soportado. Use .txt o .csv (recibido: {file_extension})")

    temp_input_path = temp_output_path = None
    try:
        with tempfile.NamedTemporaryFile(mode="w+b", delete=False, suffix=file_extension) as temp_input:
            temp_input_path = temp_input.name
            for chunk in uploaded_file.chunks():
                temp_input.write(chunk)
        with tempfile.NamedTemporaryFile(mode="w", delete=False, suffix=".csv", encoding="utf-8") as temp_output:
            temp_output_path = temp_output.name

        df = process_regex_file_to_csv(temp_input_path, temp_output_path)
        print(f"[{tag}] Archivo procesado - {len(df)} regex")

        with open(temp_output_path, "r", encoding="utf-8") as f:
            csv_content = f.read()
        print(f"[{tag}] ÉXITO - CSV generado correctamente")
        print("=" * 80)
        sys.stdout.flush()

        output_filename = f"regex_tm_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
        response = HttpResponse(csv_content, content_type="text/csv; charset=utf-8")
        response["Content-Disposition"] = f'attachment; filename="{output_filename}"'
        response["Content-Length"] = len(csv_content.encode("utf-8"))
        return response

    except Exception as e:
        import traceback
        print(f"[{tag}] ERROR - Excepción capturada: {type(e).__name__}: {e}")
        traceback.print_exc()
        return _error(tag, str(e))

    finally:
        # Limpiar archivos temporales
        for path in (temp_input_path, temp_output_path):
            if path and os.path.exists(path):
                os.unlink(path)
