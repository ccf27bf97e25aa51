#!/usr/bin/env python3
import json

from fscontent.core.app_context import AppContext


def register(subparsers):
    sp = subparsers.add_parser("models", help="Content model utilities")
    sps = sp.add_subparsers(dest="models_cmd")

    # default when user runs: `fscontent models`
    def models_default(args, ctx: AppContext) -> int:
        sp.print_help()
        return 1
    sp.set_defaults(func=models_default)

    lp = sps.add_parser("list", help="List models")
    lp.add_argument("--all", action="store_true", help="Include invalid model files")
    lp.add_argument("--invalid", action="store_true", help="Show only invalid model files")
    lp.add_argument("--json", action="store_true", help="JSON output")
    lp.set_defaults(func=list_models)

    ssp = sps.add_parser("show", help="Show model JSON")
    ssp.add_argument("model", help="Model name")
    ssp.set_defaults(func=show_model)


def list_models(args, ctx: AppContext) -> int:
    print("Searched model_paths:", ", ".join(str(r) for r in ctx.models.roots) or "<none>")

    if args.invalid:
        entries = ctx.models.invalid_entries()
    elif args.all:
        entries = ctx.models.entries()
    else:
        entries = ctx.models.valid_entries()

    if args.json:
        payload = [{
            "name": e.name,
            "valid": e.valid,
            "path": str(e.path),
            "reason": e.reason,
        } for e in entries]
        print(json.dumps(payload, indent=2))
        return 0 if payload else 1

    if not entries:
        print("No models found.")
        return 1

    print("\nModels Found:")
    for e in sorted(entries, key=lambda x: (not x.valid, x.name.lower())):
        brief = e.reason.splitlines()[0] if e.reason else "unknown"
        status = "✓ valid" if e.valid else f"✗ invalid ({brief})"
        print(f"  - {e.name:24} {status:35}  {e.path}")
    return 0


def show_model(args, ctx: AppContext) -> int:
    try:
        model = ctx.registry.require(args.model)
    except LookupError as e:
        print(f"Error: {e}")
        return 1
    print(json.dumps(model.model_dump(exclude_none=True), indent=2))
    return 0
