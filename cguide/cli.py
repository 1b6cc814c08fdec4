from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from cguide.config import Config, build_parser, resolve_config
from cguide.navigation import export_documents, resolve_name, show, write_outline, write_search, write_snippets
from cguide.rendering.rich_renderer import print_document
from cguide.store.document_store import DocumentNotFound, DocumentStore, load_store
from cguide.utils.logging import configure_logging

log = logging.getLogger("cguide")


def _print_list(store: DocumentStore, long: bool) -> int:
    if not long:
        for name in store.list_documents():
            print(name)
        return 0

    table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold")
    table.add_column("NAME", no_wrap=True, style="bold cyan")
    table.add_column("TITLE")
    table.add_column("BLOCKS", justify="right", no_wrap=True)
    for doc in store.documents():
        table.add_row(doc.name, doc.title, str(len(doc.body)))
    Console().print(table)
    return 0


def _show(store: DocumentStore, cfg: Config, name: str) -> int:
    if cfg.render.format == "rich" and sys.stdout.isatty():
        print_document(Console(width=cfg.render.width), store.get_document(resolve_name(name)))
        return 0
    return show(
        store,
        name,
        cfg.render.format,
        sys.stdout,
        width=cfg.render.width,
        full_page=cfg.render.full_page,
    )


def _export(store: DocumentStore, cfg: Config, args: argparse.Namespace) -> int:
    fmt = args.format or ("text" if cfg.render.format == "rich" else cfg.render.format)
    written = export_documents(store, Path(args.out_dir), fmt, width=cfg.render.width, overwrite=args.overwrite)
    for path in written:
        print(str(path))
    return 0


def dispatch(store: DocumentStore, cfg: Config, args: argparse.Namespace) -> int:
    if args.command == "list":
        return _print_list(store, args.long)
    if args.command == "show":
        return _show(store, cfg, args.name)
    if args.command == "toc":
        return write_outline(store, args.name, sys.stdout)
    if args.command == "snippets":
        return write_snippets(store, args.name, sys.stdout, args.lang)
    if args.command == "search":
        return write_search(store, args.term, sys.stdout)
    if args.command == "export":
        return _export(store, cfg, args)
    if args.command == "serve":
        from cguide.service.app import serve

        serve(store, cfg)
        return 0
    raise ValueError(f"Unknown command: {args.command}")


def run(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = resolve_config(args)
    except ValueError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2

    configure_logging(cfg.logging.verbose, cfg.logging.quiet, cfg.logging.log_file)

    try:
        store = load_store(cfg.docs.extra_dirs)
        return dispatch(store, cfg, args)
    except DocumentNotFound as e:
        print(str(e), file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Usage error: {e}", file=sys.stderr)
        return 2
    except Exception as e:  # noqa: BLE001
        log.debug("Unhandled error", exc_info=True)
        print(f"Runtime error: {e}", file=sys.stderr)
        return 3


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":
    main()
