"""
Plain records passed between the duplicate checks and their callers.

Nothing here is persisted; every value is built fresh for a single call.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from .schema import InvalidArgumentError


@dataclass(frozen=True)
class CandidateEntry:
    """The item a user is about to create."""

    name: str
    code: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "code": self.code}


@dataclass(frozen=True)
class ExistingEntry:
    """A catalog row the caller fetched from storage."""

    id: Any
    name: str
    code: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ExistingEntry":
        try:
            return cls(id=data["id"], name=data["name"], code=data.get("code"))
        except KeyError as e:
            raise InvalidArgumentError(f"Catalog entry is missing field: {e.args[0]}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "code": self.code}


EntryLike = Union[ExistingEntry, Mapping[str, Any]]


def as_entry(item: EntryLike) -> ExistingEntry:
    if isinstance(item, ExistingEntry):
        return item
    if isinstance(item, Mapping):
        return ExistingEntry.from_mapping(item)
    raise InvalidArgumentError(
        f"Catalog entry must be an ExistingEntry or a mapping, got {type(item).__name__}"
    )


@dataclass(frozen=True)
class SimilarityResult:
    id: Any
    name: str
    code: Optional[str]
    similarity: float
    exact_match: bool = False

    @classmethod
    def from_entry(
        cls, entry: ExistingEntry, similarity: float, exact_match: bool = False
    ) -> "SimilarityResult":
        return cls(
            id=entry.id,
            name=entry.name,
            code=entry.code,
            similarity=similarity,
            exact_match=exact_match,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "code": self.code,
            "similarity": self.similarity,
            "exact_match": self.exact_match,
        }


@dataclass
class DuplicateGroup:
    """An item from the catalog together with the other items that look like it."""

    main_item: ExistingEntry
    similar_items: List[SimilarityResult] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.similar_items) + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "main_item": self.main_item.to_dict(),
            "similar_items": [item.to_dict() for item in self.similar_items],
        }
