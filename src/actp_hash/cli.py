"""actp-hash CLI: type hash tables, catalogue verification and reference vectors."""

import argparse
import json
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Optional

from actp_hash.catalogue import AGIRAILS_CATALOGUE, Catalogue, load_catalogue_from_path
from actp_hash.kernel.type_registry import TypeHashRegistry


def _load_catalogue(path: Optional[Path]) -> Catalogue:
    if path is None:
        return AGIRAILS_CATALOGUE
    return load_catalogue_from_path(path.resolve())


def _fail(exc: Exception) -> None:
    code = getattr(exc, "code", None)
    if code is not None:
        print(f"Error [{code.value}]: {exc}", file=sys.stderr)
    else:
        print(f"Error: {exc}", file=sys.stderr)
    sys.exit(1)


def _cmd_type_hashes(args) -> None:
    registry = TypeHashRegistry.from_catalogue(_load_catalogue(args.catalogue))
    entries = registry.entries()
    if args.quiet:
        return
    if args.json:
        rows = [
            {
                "message_type": entry.message_type,
                "label": entry.label,
                "type_string": entry.type_string,
                "type_hash": entry.type_hash.hex(),
            }
            for entry in entries
        ]
        print(json.dumps(rows, indent=2))
        return

    width = max((len(entry.message_type) for entry in entries), default=0)
    print(f"| {'Label':<8} | {'Message Type':<{width}} | Type Hash |")
    print(f"|{'-' * 10}|{'-' * (width + 2)}|{'-' * 68}|")
    for entry in entries:
        print(f"| {entry.label:<8} | {entry.message_type:<{width}} | {entry.type_hash.hex()} |")


def _cmd_type_string(args) -> None:
    registry = TypeHashRegistry.from_catalogue(_load_catalogue(args.catalogue))
    entry = registry.lookup(args.message_type)
    if args.quiet:
        return
    print(f"Type String: {entry.type_string}")
    print(f"Type Hash: {entry.type_hash.hex()}")


def _cmd_verify_catalogue(args) -> None:
    from .api import verify_catalogue

    result = verify_catalogue(_load_catalogue(args.catalogue))
    if not args.quiet:
        for check in result.checks:
            status = "OK" if check.ok else "MISMATCH"
            expected = check.expected or "(not pinned)"
            print(f"[{status}] {check.message_type}")
            print(f"  expected: {expected}")
            print(f"  actual:   {check.actual}")
        print(f"Status: {'OK' if result.ok else 'FAILED'}")
    if not result.ok:
        sys.exit(1)


def _cmd_vectors(args) -> None:
    from ._internal.vectors import check_vectors

    results = check_vectors()
    if args.quiet:
        pass
    elif args.json:
        print(json.dumps([r.model_dump() for r in results], indent=2, ensure_ascii=False))
    else:
        for result in results:
            print(f"[{'OK' if result.ok else 'MISMATCH'}] {result.name}")
            print(f"  canonical: {result.actual_canonical}")
            print(f"  digest:    {result.actual_digest}")
            if not result.digest_ok:
                print(f"  expected:  {result.expected_digest}")
    failed = [r.name for r in results if not r.ok]
    if failed:
        print(f"Failed vectors: {', '.join(failed)}", file=sys.stderr)
        sys.exit(1)


def main():
    """Main CLI entry point for actp-hash commands."""
    try:
        package_version = get_version("actp-hash")
    except PackageNotFoundError:
        package_version = "dev"

    parser = argparse.ArgumentParser(
        prog="actp-hash",
        description="actp-hash: canonical metadata digests and EIP-712 type hashes"
    )
    parser.add_argument("--version", action="version", version=f"actp-hash {package_version}")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging."
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    # Common arguments; SUPPRESS keeps a subcommand from resetting the global --quiet
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Suppress all non-error output."
    )
    catalogue_parser = argparse.ArgumentParser(add_help=False)
    catalogue_parser.add_argument(
        "--catalogue",
        type=Path,
        default=None,
        help="Path to a catalogue JSON file (defaults to the built-in AGIRAILS catalogue)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    type_hashes_parser = subparsers.add_parser(
        "type-hashes",
        help="Print the type hash of every message type",
        parents=[parent_parser, catalogue_parser]
    )
    type_hashes_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON instead of a table"
    )

    type_string_parser = subparsers.add_parser(
        "type-string",
        help="Print the type signature and type hash of one message type",
        parents=[parent_parser, catalogue_parser]
    )
    type_string_parser.add_argument(
        "message_type",
        help="Message type identifier, e.g. agirails.request.v1"
    )

    subparsers.add_parser(
        "verify-catalogue",
        help="Recompute type hashes and compare them with the pinned values",
        parents=[parent_parser, catalogue_parser]
    )

    vectors_parser = subparsers.add_parser(
        "vectors",
        help="Recompute the reference canonicalization vectors",
        parents=[parent_parser]
    )
    vectors_parser.add_argument(
        "--json",
        action="store_true",
        help="Emit JSON results"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "type-hashes": _cmd_type_hashes,
        "type-string": _cmd_type_string,
        "verify-catalogue": _cmd_verify_catalogue,
        "vectors": _cmd_vectors,
    }
    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        handler(args)
    except OSError as e:
        _fail(e)
    except LookupError as e:
        _fail(e)
    except ValueError as e:
        _fail(e)


if __name__ == "__main__":
    main()
