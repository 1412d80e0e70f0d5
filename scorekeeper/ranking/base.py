"""Abstract base class for ranking policies."""

from abc import ABC, abstractmethod
from typing import Sequence


class RankingPolicy(ABC):
    """Abstract base class for ranking policies.

    A policy decides which rank each group of equal totals receives. Groups
    are passed best first; the group of unscored athletes, when there is one,
    is always last. Policies are registered via the @register_ranking_policy
    decorator in scorekeeper/ranking/__init__.py.
    """

    #: Registry key used to select the policy by name
    key: str = ""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this ranking policy."""
        pass

    @property
    def description(self) -> str:
        """Optional description of how ranks are assigned."""
        return ""

    @abstractmethod
    def assign_ranks(self, group_sizes: Sequence[int]) -> list[int]:
        """Assign a rank to each group of tied athletes.

        Args:
            group_sizes: Number of athletes in each group, best group first

        Returns:
            One 1-indexed rank per group, in the same order
        """
        pass
