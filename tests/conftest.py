"""Shared test helpers."""

from scorekeeper.models import JUDGE_ROLES, Athlete, Category, Score


def make_score(
    judge_role: str,
    value: int,
    *,
    category_id: str = "cat1",
    athlete_bib: int = 1,
    run: int = 1,
    attempt: int = 1,
) -> Score:
    """Build a Score, defaulting to category cat1, bib 1, run 1, attempt 1."""
    return Score(
        judge_role=judge_role,
        category_id=category_id,
        athlete_bib=athlete_bib,
        run=run,
        value=value,
        attempt=attempt,
    )


def full_panel(values: int | tuple[int, int, int], **kwargs) -> list[Score]:
    """Scores from every judge role for one attempt.

    Args:
        values: One value for all judges, or one per judge in role order
        **kwargs: Passed to make_score (category_id, athlete_bib, run, attempt)
    """
    if isinstance(values, int):
        values = (values,) * len(JUDGE_ROLES)
    return [make_score(role, v, **kwargs) for role, v in zip(JUDGE_ROLES, values)]


def make_category(category_id: str = "cat1", name: str = "Freestyle", bibs: int = 0) -> Category:
    """Build a Category with athletes numbered 1..bibs."""
    athletes = [Athlete(bib=b, name=f"Athlete {b}") for b in range(1, bibs + 1)]
    return Category(id=category_id, name=name, athletes=athletes)


def ranks_by_bib(ranked) -> list[tuple[int, int]]:
    """(bib, rank) pairs in output order."""
    return [(r.athlete_bib, r.rank) for r in ranked]
