from __future__ import annotations
import argparse
import logging
from dataclasses import asdict

from flask import Flask, request, jsonify

from graph_autocomplete import Engine
from graph_autocomplete import config as CFG
from graph_autocomplete.markers import diagnostic_from_mapping
from graph_autocomplete.models import AutocompleteSpec

log = logging.getLogger(__name__)

app = Flask(__name__)
_engine: Engine | None = None


def _get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = Engine()
    return _engine


def _payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object body")
    return data


def _position(data: dict) -> tuple[str, int, int]:
    text = data.get("text", "")
    if not isinstance(text, str):
        raise ValueError("'text' must be a string")
    try:
        line = int(data.get("line", data.get("lineNumber", 1)))
        column = int(data.get("column", 1))
    except (TypeError, ValueError):
        raise ValueError("'line' and 'column' must be integers")
    return text, line, column


@app.errorhandler(ValueError)
def bad_request(exc: ValueError):
    return jsonify({"error": str(exc)}), 400


# ---------- API ----------
@app.get("/api/health")
def api_health():
    return jsonify({"ok": True, "catalog": _get_engine().catalog.profile_id or None})


@app.get("/api/docs/<key>")
def api_docs(key: str):
    return jsonify({"key": key, "documentation": _get_engine().documentation(key)})


@app.post("/api/context")
def api_context():
    data = _payload()
    text, line, column = _position(data)
    runtime = _get_engine().context_at(text, line, column, data.get("version"))
    return jsonify({
        "context": asdict(runtime.context),
        "objectKeys": list(runtime.object_keys),
        "itemContextKeys": list(runtime.item_context_keys),
        "canContinueItem": runtime.can_continue_item,
    })


@app.post("/api/complete")
def api_complete():
    data = _payload()
    text, line, column = _position(data)
    eng = _get_engine()
    if data.get("changed"):
        eng.invalidate()
    items = eng.complete(text, line, column, data.get("version"))
    return jsonify([asdict(i) for i in items])


@app.post("/api/keypress")
def api_keypress():
    data = _payload()
    text, line, column = _position(data)
    action = _get_engine().plan_key(data.get("key", ""), text, line, column)
    return jsonify(asdict(action))


@app.post("/api/markers")
def api_markers():
    data = _payload()
    text = data.get("text", "")
    if not isinstance(text, str):
        raise ValueError("'text' must be a string")
    diagnostics = [diagnostic_from_mapping(d) for d in data.get("diagnostics") or [] if isinstance(d, dict)]
    markers = _get_engine().markers(text, diagnostics, data.get("schemaError") or None)
    return jsonify([asdict(m) for m in markers])


@app.post("/api/catalog")
def api_catalog():
    catalog = _get_engine().apply_catalog(_payload())
    return jsonify(asdict(catalog))


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the Flask JSON host on top of Engine")
    ap.add_argument("--spec", default=None, help="YAML/JSON autocomplete spec file")
    ap.add_argument("--indent", type=int, default=CFG.INDENT_SIZE)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    global _engine
    spec = AutocompleteSpec.from_file(args.spec) if args.spec else None
    _engine = Engine(spec=spec, indent_size=args.indent)
    log.info("Serving graph autocomplete on %s:%d", args.host, args.port)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
