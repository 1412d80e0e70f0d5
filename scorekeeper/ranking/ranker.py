"""Rank athletes by their final totals."""

from typing import Sequence

from scorekeeper.models import (
    JUDGE_ROLES,
    Athlete,
    Category,
    FinalScoreResult,
    RankedAthlete,
    Score,
)
from scorekeeper.ranking import get_ranking_policy
from scorekeeper.ranking.base import RankingPolicy
from scorekeeper.scoring import compute_final_score


def _group_by_total(scored: list[FinalScoreResult]) -> list[list[FinalScoreResult]]:
    """Split results (already sorted by total, descending) into runs of equal totals."""
    groups: list[list[FinalScoreResult]] = []
    for result in scored:
        if groups and groups[-1][0].total == result.total:
            groups[-1].append(result)
        else:
            groups.append([result])
    return groups


def rank_athletes(
    scores: Sequence[Score],
    categories: Sequence[Category],
    athletes: Sequence[Athlete],
    policy: str | RankingPolicy | None = None,
) -> list[RankedAthlete]:
    """Rank athletes by their final totals.

    Athletes are sorted by total, highest first. Equal totals share a rank;
    with the default standard competition policy the following rank reflects
    position (1, 1, 3). Athletes with no score at all are placed after every
    scored athlete and share one rank (1 if nobody has scored).

    Incomplete athletes are ranked by their partial totals; callers check the
    complete flag to mark results as provisional.

    Args:
        scores: All scores in the event
        categories: Categories contributing to the totals
        athletes: The athletes to rank
        policy: Ranking policy instance or registry key (default "competition")

    Returns:
        One RankedAthlete per athlete, ordered by rank, then bib.
    """
    if not isinstance(policy, RankingPolicy):
        policy = get_ranking_policy(policy)

    finals = [compute_final_score(scores, categories, a) for a in athletes]
    scored = sorted((f for f in finals if f.has_score), key=lambda f: f.total, reverse=True)
    unscored = [f for f in finals if not f.has_score]

    groups = _group_by_total(scored)
    if unscored:
        groups.append(unscored)
    ranks = policy.assign_ranks([len(g) for g in groups])

    ranked = []
    for group, rank in zip(groups, ranks):
        for result in group:
            tied = result.has_score and len(group) > 1
            ranked.append(RankedAthlete.from_result(result, rank, tied))

    ranked.sort(key=lambda r: (r.rank, r.athlete_bib))
    return ranked


def rank_for_judge(
    scores: Sequence[Score],
    category: Category,
    judge_role: str,
    policy: str | RankingPolicy | None = None,
) -> list[RankedAthlete]:
    """Rank a category's athletes using only one judge's scores.

    Lets each judge see a personal leaderboard that is not influenced by the
    other judges. Results are never complete, since only one role is counted.

    Raises:
        ValueError: If judge_role is not one of JUDGE_ROLES
    """
    if judge_role not in JUDGE_ROLES:
        raise ValueError(f"Invalid judge role {judge_role!r}")
    judge_scores = [
        s for s in scores if s.judge_role == judge_role and s.category_id == category.id
    ]
    return rank_athletes(judge_scores, [category], category.athletes, policy)
