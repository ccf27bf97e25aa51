#!/usr/bin/env python3
import json

from fscontent.core.app_context import AppContext


def register(subparsers):
    sp = subparsers.add_parser("assets", help="Asset utilities")
    sps = sp.add_subparsers(dest="assets_cmd")

    def assets_default(args, ctx: AppContext) -> int:
        sp.print_help()
        return 1
    sp.set_defaults(func=assets_default)

    lp = sps.add_parser("list", help="List assets")
    lp.add_argument("--json", action="store_true", help="JSON output")
    lp.set_defaults(func=list_assets)


def list_assets(args, ctx: AppContext) -> int:
    assets = ctx.source.get_assets()
    if args.json:
        print(json.dumps([a.to_dict(json_safe=True) for a in assets], indent=2))
        return 0 if assets else 1

    if not assets:
        print(f"No assets found in {ctx.source.assets_path}.")
        return 1

    print("\nAssets Found:")
    for a in assets:
        print(f"  - {a.id:40} {a.fields.file.url}")
    return 0
