from __future__ import annotations
import argparse, json, logging, sys
from dataclasses import asdict

import yaml

from . import config as CFG
from .engine import Engine
from .models import AutocompleteSpec


def _csv(value: str | None) -> list[str] | None:
    if not value:
        return None
    return [v.strip() for v in value.split(",") if v.strip()]


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Graph YAML autocomplete CLI (Engine-backed)")
    p.add_argument("--file", default="-", help="YAML document to inspect ('-' reads stdin)")
    p.add_argument("--line", type=int, required=True, help="1-based cursor line")
    p.add_argument("--column", type=int, required=True, help="1-based cursor column")
    p.add_argument("--key", choices=["enter", "backspace"], default=None,
                   help="Plan a key press instead of listing completions")
    p.add_argument("--spec", default=None, help="YAML/JSON autocomplete spec file")
    p.add_argument("--catalog", default=None, help="YAML/JSON profile catalog payload")
    p.add_argument("--indent", type=int, default=CFG.INDENT_SIZE, help="Indent size in spaces")
    p.add_argument("--node-types", default=None, help="Comma-separated node type vocabulary")
    p.add_argument("--link-types", default=None, help="Comma-separated link type vocabulary")
    p.add_argument("--json", action="store_true", help="Emit JSON")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    spec = AutocompleteSpec.from_file(args.spec) if args.spec else None
    eng = Engine(
        spec=spec,
        indent_size=args.indent,
        node_types=_csv(args.node_types),
        link_types=_csv(args.link_types),
    )
    try:
        if args.catalog:
            with open(args.catalog, "r", encoding="utf-8") as f:
                eng.apply_catalog(yaml.safe_load(f))

        text = _read_text(args.file)

        if args.key:
            action = eng.plan_key(args.key, text, args.line, args.column)
            if args.json:
                print(json.dumps(asdict(action), ensure_ascii=False, indent=2))
            else:
                print(f"{args.key}: {'handled' if action.should_handle else 'default'} {asdict(action)}")
            return 0

        runtime = eng.context_at(text, args.line, args.column)
        items = eng.complete(text, args.line, args.column)
        if args.json:
            print(json.dumps({
                "context": asdict(runtime.context),
                "items": [asdict(i) for i in items],
            }, ensure_ascii=False, indent=2))
            return 0

        ctx = runtime.context
        print(f"context: {ctx.kind} section={ctx.section} prefix={ctx.prefix!r}"
              + (f" endpoint={ctx.endpoint}" if ctx.endpoint else ""))
        if not items:
            print("(no suggestions)")
            return 0
        print("#  Label                Insert")
        for i, item in enumerate(items, 1):
            print(f"{i:<2} {item.label:<20} {item.insert_text!r}")
        return 0
    finally:
        eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
