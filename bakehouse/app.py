import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .check import DuplicateCheck
from .env import get_db_path, get_threshold, load_env
from .logger import get_logger, reset_logger
from .models import CandidateEntry, SimilarityResult
from .review import review_catalog, similarity_label
from .schema import KINDS, InvalidArgumentError, parse_threshold, validate_entry
from .similarity import compute_similarity
from .storage import add_item, fetch_catalog, fetch_entries, import_catalog, load_catalog


def _threshold(args: argparse.Namespace) -> float:
    if args.threshold is not None:
        return parse_threshold(args.threshold)
    return get_threshold()


def _db_path(args: argparse.Namespace) -> Path:
    return Path(args.db) if args.db else get_db_path()


def _load_entries(args: argparse.Namespace, kind: str) -> list:
    if getattr(args, "catalog", None):
        catalog_path = Path(args.catalog)
        if not catalog_path.exists():
            raise SystemExit(f"Catalog file not found: {catalog_path}")
        return load_catalog(catalog_path)[kind]
    return fetch_entries(_db_path(args), kind)


def _print_matches(name: str, kind: str, matches: List[SimilarityResult]) -> None:
    print(f"Similar {kind}s found for \"{name}\":")
    for m in matches:
        line = f" - {m.name} ({round(m.similarity * 100)}% similar)"
        if m.exact_match:
            line += f" [code match: {m.code}]"
        print(line)


def cmd_similarity(args: argparse.Namespace) -> None:
    score = compute_similarity(args.first, args.second)
    print(f"{score:.3f} ({similarity_label(score)})")


def _new_entry(args: argparse.Namespace) -> CandidateEntry:
    candidate = CandidateEntry(name=args.name, code=args.code)
    errors = validate_entry({**candidate.to_dict(), "kind": args.kind})
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    return candidate


def cmd_check(args: argparse.Namespace) -> None:
    candidate = _new_entry(args)
    existing = _load_entries(args, args.kind)
    check = DuplicateCheck(threshold=_threshold(args))
    if check.check(candidate.name, candidate.code, existing, on_proceed=lambda: None):
        print(f"No similar {args.kind}s found.")
        return

    _print_matches(args.name, args.kind, check.similar_items)
    check.cancel()
    raise SystemExit(1)


def cmd_add(args: argparse.Namespace) -> None:
    candidate = _new_entry(args)
    db_path = _db_path(args)
    existing = fetch_entries(db_path, args.kind)
    check = DuplicateCheck(threshold=_threshold(args))

    def create() -> str:
        return add_item(db_path, args.kind, candidate.name, candidate.code)

    if check.check(candidate.name, candidate.code, existing, on_proceed=create):
        item_id = create()
    else:
        _print_matches(args.name, args.kind, check.similar_items)
        if not args.force:
            check.cancel()
            print("Not created. Re-run with --force to create anyway.")
            raise SystemExit(1)
        item_id = check.proceed()

    print(f"Created {args.kind}: {item_id}")


def cmd_review(args: argparse.Namespace) -> None:
    if args.catalog:
        catalog_path = Path(args.catalog)
        if not catalog_path.exists():
            raise SystemExit(f"Catalog file not found: {catalog_path}")
        catalog = load_catalog(catalog_path)
    else:
        catalog = fetch_catalog(_db_path(args))

    kinds = [args.kind] if args.kind else list(KINDS)
    report = review_catalog({kind: catalog[kind] for kind in kinds}, _threshold(args))

    for kind in kinds:
        groups = report["groups"][kind]
        print(f"Found {len(groups)} groups of similar {kind}s")
        for group in groups:
            print(f"  {group.main_item.name} ({group.size} items)")
            for similar in group.similar_items:
                print(
                    f"    - {similar.name}: {round(similar.similarity * 100)}% "
                    f"- {similarity_label(similar.similarity)}"
                )

    if report["total_groups"]:
        print(f"{report['total_groups']} potential duplicate groups found")
    else:
        print("No duplicates found - everything looks clean!")


def cmd_import(args: argparse.Namespace) -> None:
    catalog_path = Path(args.catalog)
    if not catalog_path.exists():
        raise SystemExit(f"Catalog file not found: {catalog_path}")
    inserted = import_catalog(load_catalog(catalog_path), _db_path(args))
    print(f"Imported {inserted} entries")


def main(argv: Optional[List[str]] = None):
    # Load .env if present (BAKEHOUSE_DB, BAKEHOUSE_SIMILARITY_THRESHOLD, etc.)
    load_env()
    # Rebuild the logger so .env log settings apply
    reset_logger()
    parser = argparse.ArgumentParser(prog="bakehouse", description="Bakehouse catalog duplicate guard")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    sim = subparsers.add_parser("similarity", help="Show the similarity score of two names")
    sim.add_argument("first", help="First name")
    sim.add_argument("second", help="Second name")
    sim.set_defaults(func=cmd_similarity)

    chk = subparsers.add_parser("check", help="Check a new entry against the catalog for duplicates")
    chk.add_argument("--name", required=True, help="Name of the new entry")
    chk.add_argument("--code", help="Code of the new entry (exact match)")
    chk.add_argument("--kind", required=True, choices=KINDS, help="Catalog section")
    chk.add_argument("--db", help="Path to SQLite catalog (default: $BAKEHOUSE_DB or data/catalog.db)")
    chk.add_argument("--catalog", help="Check against a JSON catalog file instead of the database")
    chk.add_argument("--threshold", help="Minimum name similarity (default: 0.7)")
    chk.set_defaults(func=cmd_check)

    add = subparsers.add_parser("add", help="Add a catalog entry after a duplicate check")
    add.add_argument("--name", required=True, help="Name of the new entry")
    add.add_argument("--code", help="Code of the new entry")
    add.add_argument("--kind", required=True, choices=KINDS, help="Catalog section")
    add.add_argument("--db", help="Path to SQLite catalog (default: $BAKEHOUSE_DB or data/catalog.db)")
    add.add_argument("--threshold", help="Minimum name similarity (default: 0.7)")
    add.add_argument("--force", action="store_true", help="Create even if similar entries exist")
    add.set_defaults(func=cmd_add)

    rev = subparsers.add_parser("review", help="List groups of similar entries already in the catalog")
    rev.add_argument("--kind", choices=KINDS, help="Only review one catalog section")
    rev.add_argument("--db", help="Path to SQLite catalog (default: $BAKEHOUSE_DB or data/catalog.db)")
    rev.add_argument("--catalog", help="Review a JSON catalog file instead of the database")
    rev.add_argument("--threshold", help="Minimum name similarity (default: 0.7)")
    rev.set_defaults(func=cmd_review)

    imp = subparsers.add_parser("import", help="Load a JSON catalog file into the database")
    imp.add_argument("--catalog", required=True, help="Path to JSON catalog file")
    imp.add_argument("--db", help="Path to SQLite catalog (default: $BAKEHOUSE_DB or data/catalog.db)")
    imp.set_defaults(func=cmd_import)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        try:
            args.func(args)
        except InvalidArgumentError as e:
            get_logger().error("Invalid argument", command=args.command, error=str(e))
            print(f"Error: {e}", file=sys.stderr)
            raise SystemExit(2)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
