__version__ = "0.1.0"

from .models import CandidateEntry, DuplicateGroup, ExistingEntry, SimilarityResult  # noqa: E402
from .schema import InvalidArgumentError  # noqa: E402
from .similarity import (  # noqa: E402
    DEFAULT_THRESHOLD,
    compute_similarity,
    find_duplicates,
    find_exact_by_code,
    find_similar_by_name,
    levenshtein_distance,
)

__all__ = [
    "__version__",
    "CandidateEntry",
    "DuplicateGroup",
    "ExistingEntry",
    "SimilarityResult",
    "InvalidArgumentError",
    "DEFAULT_THRESHOLD",
    "compute_similarity",
    "find_duplicates",
    "find_exact_by_code",
    "find_similar_by_name",
    "levenshtein_distance",
]
