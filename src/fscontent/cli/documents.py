#!/usr/bin/env python3
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List

import yaml
from pydantic import ValidationError

from fscontent.core.app_context import AppContext
from fscontent.core.constants import DEFAULT_TEXT_ENCODING, JSON_FILE_EXTENSIONS
from fscontent.core.document.update import UpdateOperation, update_operations_adapter
from fscontent.core.exceptions import ContentSourceError
from fscontent.core.formatting import format_pydantic_errors_simple


def register(subparsers):
    sp = subparsers.add_parser("documents", help="Document utilities")
    sps = sp.add_subparsers(dest="documents_cmd")

    def documents_default(args, ctx: AppContext) -> int:
        sp.print_help()
        return 1
    sp.set_defaults(func=documents_default)

    lp = sps.add_parser("list", help="List documents")
    lp.add_argument("--json", action="store_true", help="JSON output")
    lp.set_defaults(func=list_documents)

    ssp = sps.add_parser("show", help="Show a document as JSON")
    ssp.add_argument("document_id", help="Document id (path relative to the project root)")
    ssp.set_defaults(func=show_document)

    up = sps.add_parser("update", help="Apply update operations to a document")
    up.add_argument("document_id", help="Document id (path relative to the project root)")
    up.add_argument("operations", help="JSON/YAML file holding a list of update operations")
    up.set_defaults(func=update_document)


def list_documents(args, ctx: AppContext) -> int:
    documents = ctx.source.get_documents(ctx.registry)
    if args.json:
        payload = [{"id": d.id, "modelName": d.model_name, "updatedAt": d.updated_at} for d in documents]
        print(json.dumps(payload, indent=2))
        return 0 if payload else 1

    if not documents:
        print(f"No documents found in {ctx.source.content_path}.")
        return 1

    print("\nDocuments Found:")
    for d in documents:
        print(f"  - {d.id:40} {d.model_name}")
    return 0


def show_document(args, ctx: AppContext) -> int:
    document = ctx.source.get_document(args.document_id, ctx.registry)
    if document is None:
        print(f"Error: document {args.document_id!r} could not be loaded")
        return 1
    print(json.dumps(document.to_dict(json_safe=True), indent=2))
    return 0


def update_document(args, ctx: AppContext) -> int:
    registry = ctx.registry
    document = ctx.source.get_document(args.document_id, registry)
    if document is None:
        print(f"Error: document {args.document_id!r} could not be loaded")
        return 1

    try:
        operations = load_operations(Path(args.operations))
    except ValidationError as e:
        print("Error: invalid update operations")
        for msg in format_pydantic_errors_simple(e):
            print(f"  - {msg}")
        return 1
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: failed to read operations ({e})")
        return 1

    try:
        updated = ctx.source.update_document(document, operations, registry)
    except ContentSourceError as e:
        print(f"Error: {e}")
        return 1
    print(json.dumps(updated.to_dict(json_safe=True), indent=2))
    return 0


def load_operations(path: Path) -> List[UpdateOperation]:
    """Parse a JSON/YAML list of update operations."""
    text = path.read_text(encoding=DEFAULT_TEXT_ENCODING)
    raw: Any = json.loads(text) if path.suffix.lower() in JSON_FILE_EXTENSIONS else yaml.safe_load(text)
    return update_operations_adapter.validate_python(raw or [])
