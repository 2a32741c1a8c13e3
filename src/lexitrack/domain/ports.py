"""
Ports (interfaces) for progress persistence.

lexitrack never stores anything itself. These define the contract the
caller's persistence layer implements so application services can load
and save snapshots without depending on a concrete store.
"""

from abc import ABC, abstractmethod

from .models import FullProgress, ReviewOutcome


class ProgressRepository(ABC):
    """
    Port for the caller-owned per-(learner, item) progress store.

    Implementations must serialize writes for the same (learner, item)
    pair themselves; lexitrack has no locking of its own.
    """

    @abstractmethod
    def get(self, learner_id: str, item_id: str) -> FullProgress | None:
        """
        Fetch the latest snapshot.

        Returns:
            The stored FullProgress, or None if the learner never reviewed the item.
        """
        pass

    @abstractmethod
    def save(self, learner_id: str, item_id: str, progress: FullProgress) -> None:
        """Upsert the snapshot and append its outcome to the review history."""
        pass

    @abstractmethod
    def recent_history(self, learner_id: str, item_id: str, limit: int) -> list[ReviewOutcome]:
        """
        Fetch recent answers for the item.

        Returns:
            At most `limit` outcomes, most recent first.
        """
        pass
