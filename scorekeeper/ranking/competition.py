"""Standard competition ranking ("1224")."""

from typing import Sequence

from scorekeeper.ranking import register_ranking_policy
from scorekeeper.ranking.base import RankingPolicy


@register_ranking_policy
class CompetitionRanking(RankingPolicy):
    """Standard competition ranking.

    Tied athletes share a rank and the next group's rank is its 1-indexed
    position, leaving a gap after every tie: 90, 80, 80, 70 ranks as
    1, 2, 2, 4. Athletes without a score all share the rank after the last
    scored athlete.
    """

    key = "competition"

    @property
    def name(self) -> str:
        return "Standard competition ranking"

    @property
    def description(self) -> str:
        return "Ties share a rank and leave a gap: 1, 1, 3"

    def assign_ranks(self, group_sizes: Sequence[int]) -> list[int]:
        ranks = []
        position = 1
        for size in group_sizes:
            ranks.append(position)
            position += size
        return ranks
