#!/usr/bin/env python3

import argparse
import sys

from fscontent.core.app_context import build_context
from fscontent.core.config import load_config
from fscontent.core.logging_setup import configure_logging
from fscontent.cli import assets, config, documents, models


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="fscontent", description="File-backed content source toolkit")
    parser.add_argument("--root-dir", help="Project root (overrides config 'root_dir').")
    parser.add_argument("--content-dir", help="Content directory relative to the root.")
    parser.add_argument(
        "--model-path",
        action="append",
        default=None,
        help="Model definition file or directory (can be used multiple times).",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register subcommands (they should accept ctx)
    config.register(subparsers)
    models.register(subparsers)
    documents.register(subparsers)
    assets.register(subparsers)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    cfg = load_config()
    if args.root_dir:
        cfg["root_dir"] = args.root_dir
    if args.content_dir:
        cfg["content_dir"] = args.content_dir
    if args.model_path:
        cfg["model_paths"] = args.model_path
    configure_logging(cfg)

    ctx = build_context(config=cfg)  # built once
    return args.func(args, ctx)


if __name__ == "__main__":
    sys.exit(main())
