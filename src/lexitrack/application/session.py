"""
Review Session Service — Application layer orchestrator.

Coordinates loading the previous snapshot from the caller's store,
applying a review, and saving the result.
"""

import logging

from lexitrack.domain.clock import Clock, utc_now
from lexitrack.domain.constants import DEFAULT_DICTIONARY_SCORE, TREND_WINDOW
from lexitrack.domain.models import FullProgress, ReviewGrade
from lexitrack.domain.ports import ProgressRepository

from .progress import apply_review, apply_review_strict

logger = logging.getLogger(__name__)


class ReviewSession:
    """
    Records answers for one practice session.

    Depends on the ProgressRepository abstraction; the caller provides the
    concrete store. Two answers for the same (learner, item) must not be
    recorded concurrently: this class does not lock.
    """

    def __init__(
        self,
        repo: ProgressRepository,
        clock: Clock | None = None,
        strict: bool = False,
    ):
        """
        Args:
            repo: The caller's progress store (port).
            clock: Time source; defaults to the system UTC clock.
            strict: Reject malformed stored state instead of coercing it.
        """
        self._repo = repo
        self._clock = clock or utc_now
        self._strict = strict

    def record_answer(
        self,
        learner_id: str,
        item_id: str,
        grade: ReviewGrade | str,
        dictionary_score: int = DEFAULT_DICTIONARY_SCORE,
    ) -> FullProgress:
        """
        Apply one answer and persist the new snapshot.

        Returns:
            The FullProgress that was saved.
        """
        previous = self._repo.get(learner_id, item_id)
        history = self._repo.recent_history(learner_id, item_id, TREND_WINDOW * 2)

        apply = apply_review_strict if self._strict else apply_review
        progress = apply(
            previous.state if previous else None,
            previous.counters if previous else None,
            grade,
            dictionary_score,
            history,
            now=self._clock(),
        )

        self._repo.save(learner_id, item_id, progress)
        logger.info(
            f"{learner_id}/{item_id}: {progress.state.last_grade.value} -> "
            f"{progress.word_state.value}, next in {progress.state.interval_days}d"
        )
        return progress
