"""
Duplicate review across a whole catalog.

Groups entries that already look like each other so they can be merged
or cleaned up by hand.
"""

from typing import Any, Dict, Iterable, List, Mapping

from .models import DuplicateGroup, EntryLike, as_entry
from .schema import KINDS
from .similarity import DEFAULT_THRESHOLD, find_similar_by_name

VERY_SIMILAR = 0.9
SIMILAR = 0.8


def similarity_label(similarity: float) -> str:
    if similarity >= VERY_SIMILAR:
        return "Very Similar"
    if similarity >= SIMILAR:
        return "Similar"
    return "Somewhat Similar"


def find_similar_groups(
    items: Iterable[EntryLike],
    threshold: float = DEFAULT_THRESHOLD,
) -> List[DuplicateGroup]:
    """
    Group catalog entries by name similarity.

    Items are visited in order. An item already placed in a group does not
    start a new one, but it can still show up as a match of a later item.

    Args:
        items: Catalog entries of one kind
        threshold: Minimum similarity for two names to be grouped (default: 0.7)

    Returns:
        List of DuplicateGroup, one per item that starts a group
    """
    entries = [as_entry(item) for item in items]
    groups: List[DuplicateGroup] = []
    processed_ids = set()

    for entry in entries:
        if entry.id in processed_ids:
            continue

        others = [other for other in entries if other.id != entry.id]
        similar_items = find_similar_by_name(entry.name, others, threshold)
        if not similar_items:
            continue

        groups.append(DuplicateGroup(main_item=entry, similar_items=similar_items))
        processed_ids.add(entry.id)
        processed_ids.update(similar.id for similar in similar_items)

    return groups


def review_catalog(
    catalog: Mapping[str, Iterable[EntryLike]],
    threshold: float = DEFAULT_THRESHOLD,
) -> Dict[str, Any]:
    """Duplicate groups for each kind in the catalog, plus a total count.

    catalog maps a kind ("ingredient", "product", "recipe") to its entries.
    Kinds missing from the catalog get an empty group list.
    """
    report: Dict[str, Any] = {"groups": {}, "total_groups": 0}
    for kind in KINDS:
        groups = find_similar_groups(catalog.get(kind, []), threshold)
        report["groups"][kind] = groups
        report["total_groups"] += len(groups)
    return report
