import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from .database import CatalogItem, get_session, init_database
from .logger import get_logger
from .models import ExistingEntry
from .schema import KINDS, InvalidArgumentError, validate_entry

# JSON catalog files use plural section names
SECTIONS = {"ingredient": "ingredients", "product": "products", "recipe": "recipes"}


def _empty_catalog() -> Dict[str, List[Dict[str, Any]]]:
    return {kind: [] for kind in KINDS}


def _clean_code(code: Optional[str]) -> Optional[str]:
    code = code.strip() if code else ""
    return code or None


def load_catalog(path: Path) -> Dict[str, List[Dict[str, Any]]]:
    """Read a JSON catalog file into {kind: [entries]}.

    A missing, empty, unreadable or non-object file gives an empty catalog.
    Sections that are not lists are left empty.
    """
    if not path.exists():
        return _empty_catalog()
    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read().strip()
            if not content:
                return _empty_catalog()
            data = json.loads(content)
    except (json.JSONDecodeError, IOError) as e:
        get_logger().warning("Could not read catalog file", path=str(path), error=str(e))
        return _empty_catalog()

    if not isinstance(data, dict):
        get_logger().warning(
            "Catalog file is not a JSON object", path=str(path), found=type(data).__name__
        )
        return _empty_catalog()

    catalog = _empty_catalog()
    for kind, section in SECTIONS.items():
        entries = data.get(section)
        if entries is None:
            continue
        if not isinstance(entries, list):
            get_logger().warning(
                "Catalog section is not a list", path=str(path), section=section,
                found=type(entries).__name__,
            )
            continue
        catalog[kind] = entries
    return catalog


def save_catalog(path: Path, catalog: Dict[str, List[Dict[str, Any]]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {section: catalog.get(kind, []) for kind, section in SECTIONS.items()}
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def _check_kind(kind: str) -> None:
    if kind not in KINDS:
        raise InvalidArgumentError(f"Unknown kind '{kind}', expected one of: {', '.join(KINDS)}")


def fetch_entries(db_path: Path, kind: str) -> List[ExistingEntry]:
    """
    Load all catalog entries of one kind, ordered by name.

    Args:
        db_path: Path to SQLite database file
        kind: ingredient, product or recipe

    Returns:
        List of ExistingEntry (empty if the database does not exist yet)
    """
    _check_kind(kind)
    if not db_path.exists():
        get_logger().debug("Catalog database not found", db_path=str(db_path))
        return []

    session = get_session(db_path)
    try:
        rows = (
            session.query(CatalogItem)
            .filter(CatalogItem.kind == kind)
            .order_by(CatalogItem.name)
            .all()
        )
        return [ExistingEntry(id=row.id, name=row.name, code=row.code) for row in rows]
    finally:
        session.close()


def fetch_catalog(db_path: Path) -> Dict[str, List[ExistingEntry]]:
    return {kind: fetch_entries(db_path, kind) for kind in KINDS}


def add_item(
    db_path: Path,
    kind: str,
    name: str,
    code: Optional[str] = None,
    item_id: Optional[str] = None,
) -> str:
    """
    Insert a catalog entry.

    Returns:
        The id of the new entry

    Raises:
        InvalidArgumentError: If the entry fails validation
    """
    errors = validate_entry({"kind": kind, "name": name, "code": code})
    if errors:
        raise InvalidArgumentError("; ".join(errors))

    init_database(db_path)
    session = get_session(db_path)
    try:
        item = CatalogItem(
            kind=kind,
            name=name.strip(),
            code=_clean_code(code),
        )
        if item_id is not None:
            item.id = item_id
        session.add(item)
        session.commit()
        get_logger().info("Catalog entry added", id=item.id, kind=kind, name=item.name, code=item.code)
        return item.id
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def import_catalog(catalog: Dict[str, List[Dict[str, Any]]], db_path: Path) -> int:
    """
    Copy a JSON catalog into the database.

    Entries whose id already exists are skipped, as are entries that fail
    validation.

    Returns:
        Number of entries inserted
    """
    logger = get_logger()
    init_database(db_path)
    session = get_session(db_path)
    inserted = 0
    skipped = 0
    try:
        existing_ids = {row.id for row in session.query(CatalogItem.id).all()}
        for kind in KINDS:
            for data in catalog.get(kind, []):
                if not isinstance(data, dict):
                    logger.warning("Skipping invalid catalog entry", kind=kind, entry=data)
                    skipped += 1
                    continue
                errors = validate_entry({**data, "kind": kind})
                if errors:
                    logger.warning("Skipping invalid catalog entry", kind=kind, entry=data, errors=errors)
                    skipped += 1
                    continue

                item_id = str(data["id"]) if data.get("id") is not None else None
                if item_id is not None and item_id in existing_ids:
                    skipped += 1
                    continue

                item = CatalogItem(kind=kind, name=data["name"].strip(), code=_clean_code(data.get("code")))
                if item_id is not None:
                    item.id = item_id
                    existing_ids.add(item_id)
                session.add(item)
                inserted += 1

        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

    logger.info(
        f"Import complete: {inserted} inserted, {skipped} skipped",
        db_path=str(db_path),
    )
    return inserted
