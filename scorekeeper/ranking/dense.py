"""Dense ranking ("1223")."""

from typing import Sequence

from scorekeeper.ranking import register_ranking_policy
from scorekeeper.ranking.base import RankingPolicy


@register_ranking_policy
class DenseRanking(RankingPolicy):
    """Dense ranking: ties share a rank and the next group follows directly.

    90, 80, 80, 70 ranks as 1, 2, 2, 3. Only used when a caller asks for
    it by key; results default to standard competition ranking.
    """

    key = "dense"

    @property
    def name(self) -> str:
        return "Dense ranking"

    @property
    def description(self) -> str:
        return "Ties share a rank without a gap: 1, 1, 2"

    def assign_ranks(self, group_sizes: Sequence[int]) -> list[int]:
        return list(range(1, len(group_sizes) + 1))
