"""
Name and code similarity checks used to catch duplicate catalog entries.

Every function here is pure: callers fetch the existing entries, pass them
in, and decide what to do with the matches (block, warn or proceed).
"""

from typing import Iterable, List, Optional

from .models import EntryLike, ExistingEntry, SimilarityResult, as_entry
from .normalize import is_blank, normalize_code, normalize_name
from .schema import InvalidArgumentError, require_text

DEFAULT_THRESHOLD = 0.7


def levenshtein_distance(a: str, b: str) -> int:
    """
    Minimum number of single-character insertions, deletions or
    substitutions that turn a into b.

    Cell [i][j] of the matrix holds the distance between the first i
    characters of a and the first j characters of b.
    """
    n = len(a)
    m = len(b)
    matrix = [[0] * (m + 1) for _ in range(n + 1)]

    for i in range(n + 1):
        matrix[i][0] = i
    for j in range(m + 1):
        matrix[0][j] = j

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            if a[i - 1] == b[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = 1 + min(
                    matrix[i][j - 1],
                    matrix[i - 1][j],
                    matrix[i - 1][j - 1],
                )

    return matrix[n][m]


def compute_similarity(a: str, b: str) -> float:
    """
    Similarity of two names in [0.0, 1.0], ignoring case and surrounding
    whitespace.

    Args:
        a: First string
        b: Second string

    Returns:
        1.0 for identical normalized strings (two empty strings included),
        otherwise 1 - distance / length of the longer string

    Raises:
        InvalidArgumentError: If either argument is None or not a string
    """
    s1 = normalize_name(require_text(a, "a"))
    s2 = normalize_name(require_text(b, "b"))

    if s1 == s2:
        return 1.0

    distance = levenshtein_distance(s1, s2)
    return 1.0 - distance / max(len(s1), len(s2))


def _check_threshold(threshold: float) -> float:
    if threshold is None or isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise InvalidArgumentError(f"Threshold must be a number, got {threshold!r}")
    return threshold


def find_similar_by_name(
    candidate_name: str,
    existing: Iterable[EntryLike],
    threshold: float = DEFAULT_THRESHOLD,
) -> List[SimilarityResult]:
    """
    Score every existing entry against the candidate name.

    Args:
        candidate_name: Name of the item about to be created
        existing: Catalog entries (ExistingEntry or mappings with id/name/code)
        threshold: Minimum similarity to keep an entry (default: 0.7)

    Returns:
        Entries with similarity >= threshold, most similar first. Entries
        with equal scores keep their input order.
    """
    require_text(candidate_name, "candidate_name")
    _check_threshold(threshold)

    scored = []
    for item in existing:
        entry = as_entry(item)
        similarity = compute_similarity(candidate_name, entry.name)
        if similarity >= threshold:
            scored.append(SimilarityResult.from_entry(entry, similarity))

    # sorted() is stable with reverse=True as well
    return sorted(scored, key=lambda r: r.similarity, reverse=True)


def find_exact_by_code(
    candidate_code: str,
    existing: Iterable[EntryLike],
) -> List[ExistingEntry]:
    """Entries whose code equals candidate_code after trim + lower-case.

    Codes are identifiers, not free text, so there is no fuzzy matching.
    Entries without a code never match.
    """
    key = normalize_code(require_text(candidate_code, "candidate_code"))

    matches = []
    for item in existing:
        entry = as_entry(item)
        if entry.code is None:
            continue
        if normalize_code(entry.code) == key:
            matches.append(entry)
    return matches


def find_duplicates(
    candidate_name: str,
    candidate_code: Optional[str] = None,
    existing: Iterable[EntryLike] = (),
    threshold: float = DEFAULT_THRESHOLD,
) -> List[SimilarityResult]:
    """
    Everything a new entry could be a duplicate of.

    Exact code matches come first, in the order found, flagged with
    exact_match=True and carrying their name similarity. Name matches
    follow, most similar first, minus any entry already matched by code.
    A missing or blank candidate_code skips the code phase.

    Args:
        candidate_name: Name of the item about to be created
        candidate_code: Optional code of the item about to be created
        existing: Catalog entries to compare against
        threshold: Minimum name similarity (default: 0.7)

    Returns:
        List of SimilarityResult, empty when nothing looks like a duplicate
    """
    require_text(candidate_name, "candidate_name")
    if candidate_code is not None:
        require_text(candidate_code, "candidate_code")
    entries = [as_entry(item) for item in existing]

    code_matches: List[SimilarityResult] = []
    if not is_blank(candidate_code):
        code_matches = [
            SimilarityResult.from_entry(
                entry,
                compute_similarity(candidate_name, entry.name),
                exact_match=True,
            )
            for entry in find_exact_by_code(candidate_code, entries)
        ]

    matched_ids = {match.id for match in code_matches}
    name_matches = [
        match
        for match in find_similar_by_name(candidate_name, entries, threshold)
        if match.id not in matched_ids
    ]

    return code_matches + name_matches
