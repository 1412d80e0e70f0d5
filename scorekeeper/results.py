"""Orchestrator: build per-category leaderboards for an event."""

from dataclasses import dataclass
from typing import Any

from scorekeeper.models import JUDGE_ROLES, Category, Event, RankedAthlete
from scorekeeper.ranking import get_ranking_policy, rank_athletes, rank_for_judge
from scorekeeper.ranking.base import RankingPolicy


class ResultsError(Exception):
    """Error building results for an event."""
    pass


@dataclass
class CategoryResults:
    """Leaderboard for one category.

    Attributes:
        category: The category that was ranked
        leaderboard: Ranked athletes, by rank then bib
    """
    category: Category
    leaderboard: list[RankedAthlete]

    @property
    def is_final(self) -> bool:
        """True once every athlete in the category has a complete score."""
        return bool(self.leaderboard) and all(r.complete for r in self.leaderboard)

    def to_dict(self) -> dict[str, Any]:
        return {
            "categoryId": self.category.id,
            "categoryName": self.category.name,
            "athleteCount": len(self.category.athletes),
            "final": self.is_final,
            "leaderboard": [r.to_dict() for r in self.leaderboard],
        }


@dataclass
class EventResults:
    """Complete results for an event."""
    event_name: str
    ranking_policy: str
    judge_role: str | None
    categories: list[CategoryResults]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "event": self.event_name,
            "rankingPolicy": self.ranking_policy,
            "judge": self.judge_role,
            "categories": [c.to_dict() for c in self.categories],
        }


def build_results(
    event: Event,
    category_id: str | None = None,
    judge_role: str | None = None,
    policy: str | None = None,
) -> EventResults:
    """Rank every category of an event, or a single one.

    Each category is ranked on its own: athletes belong to one category and
    bibs are only unique within it.

    Args:
        event: The loaded event
        category_id: Only rank this category
        judge_role: Only count this judge's scores (per-judge leaderboard)
        policy: Ranking policy key (default "competition")

    Returns:
        EventResults with one CategoryResults per ranked category

    Raises:
        ResultsError: If the category, judge role or policy is unknown
    """
    if category_id is not None:
        category = event.get_category(category_id)
        if category is None:
            raise ResultsError(f"Category not found: {category_id}")
        categories = [category]
    else:
        categories = event.categories

    if judge_role is not None and judge_role not in JUDGE_ROLES:
        raise ResultsError(f"Invalid judge role: {judge_role}")

    try:
        ranking_policy: RankingPolicy = get_ranking_policy(policy)
    except KeyError as e:
        raise ResultsError(str(e.args[0])) from e

    category_results = []
    for category in categories:
        if judge_role is not None:
            leaderboard = rank_for_judge(event.scores, category, judge_role, ranking_policy)
        else:
            leaderboard = rank_athletes(event.scores, [category], category.athletes, ranking_policy)
        category_results.append(CategoryResults(category=category, leaderboard=leaderboard))

    return EventResults(
        event_name=event.name,
        ranking_policy=ranking_policy.key,
        judge_role=judge_role,
        categories=category_results,
    )
