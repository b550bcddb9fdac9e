"""
Duplicate check workflow for create forms.

A check either clears the new entry straight away or holds it while the
user reviews the similar entries and decides to proceed or cancel.
"""

from typing import Any, Callable, Iterable, List, Optional

from .logger import StructuredLogger, get_logger
from .models import EntryLike, SimilarityResult
from .similarity import DEFAULT_THRESHOLD, find_duplicates


class DuplicateCheck:
    """
    States:
    - IDLE: No check pending
    - AWAITING_DECISION: Similar entries found, waiting for proceed/cancel
    """

    IDLE = "idle"
    AWAITING_DECISION = "awaiting_decision"

    def __init__(
        self,
        threshold: float = DEFAULT_THRESHOLD,
        logger: Optional[StructuredLogger] = None,
    ):
        self.threshold = threshold
        self.logger = logger or get_logger()

        self.state = self.IDLE
        self.similar_items: List[SimilarityResult] = []
        self.pending_action: Optional[Callable[[], Any]] = None

    @property
    def show_warning(self) -> bool:
        return self.state == self.AWAITING_DECISION

    def check(
        self,
        name: str,
        code: Optional[str],
        existing: Iterable[EntryLike],
        on_proceed: Callable[[], Any],
        threshold: Optional[float] = None,
    ) -> bool:
        """
        Look for duplicates of a new entry.

        Args:
            name: Name of the entry about to be created
            code: Optional code of the entry
            existing: Catalog entries of the same kind
            on_proceed: Action to run if the user proceeds despite matches
            threshold: Override for this check only

        Returns:
            True if nothing similar exists and the caller should go ahead.
            False if matches were found; on_proceed is held until proceed().
        """
        threshold = self.threshold if threshold is None else threshold
        matches = find_duplicates(name, code, existing, threshold)

        exact = sum(1 for m in matches if m.exact_match)
        self.logger.record_check(exact_matches=exact, name_matches=len(matches) - exact)

        if not matches:
            self.logger.debug("No similar entries found", name=name, code=code)
            return True

        self.logger.info(
            f"Found {len(matches)} similar entries",
            name=name,
            code=code,
            exact_matches=exact,
            threshold=threshold,
        )
        self.similar_items = matches
        self.pending_action = on_proceed
        self.state = self.AWAITING_DECISION
        return False

    def proceed(self) -> Any:
        """Run the pending action and reset. Returns the action's result."""
        action = self.pending_action
        if self.state == self.AWAITING_DECISION:
            self.logger.record_decision("proceeded")
        self.reset()
        if action is not None:
            return action()
        return None

    def cancel(self) -> None:
        if self.state == self.AWAITING_DECISION:
            self.logger.record_decision("cancelled")
        self.reset()

    def reset(self) -> None:
        self.state = self.IDLE
        self.similar_items = []
        self.pending_action = None
