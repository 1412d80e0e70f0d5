"""Run and final score computation.

Both scorers are pure functions of the submitted scores. They assume runs
are 1 or 2 and values lie within 1-100; checking that is the job of whoever
loads the scores (see scorekeeper.events). When a judge has more than one
entry for the same category, athlete, run and attempt, the later one counts.
"""

from typing import Sequence

from scorekeeper.models import (
    JUDGE_ROLES,
    Athlete,
    Category,
    CategoryScoreDetail,
    FinalScoreResult,
    RunScoreResult,
    Score,
)
from scorekeeper.rounding import mean2, sum2


def _selection_key(result: RunScoreResult) -> tuple[bool, float]:
    """Ordering used to pick the better of two attempts or two runs.

    A fully judged result always beats a partial one, so a re-run that only
    one judge has scored so far cannot displace a finished attempt.
    """
    return (result.complete, result.average if result.average is not None else -1.0)


def _score_attempt(attempt: int, attempt_scores: list[Score]) -> RunScoreResult:
    by_role = {s.judge_role: s.value for s in attempt_scores}
    judge_map = {role: by_role.get(role) for role in JUDGE_ROLES}
    values = [v for v in judge_map.values() if v is not None]
    return RunScoreResult(
        complete=len(values) == len(JUDGE_ROLES),
        average=mean2(values),
        attempt=attempt,
        scores=judge_map,
    )


def compute_run_score(
    scores: Sequence[Score], category_id: str, athlete_bib: int, run: int
) -> RunScoreResult | None:
    """Compute the representative score for one athlete, category and run.

    Scores are grouped by attempt and the best attempt is returned: complete
    attempts beat incomplete ones, then the higher average wins. Attempts are
    considered in ascending order, so on a full tie the earliest attempt is
    kept.

    Args:
        scores: All scores in the event (pre-filtered is fine too)
        category_id: The category to compute for
        athlete_bib: The athlete's bib number
        run: Which run (1 or 2)

    Returns:
        The best attempt's RunScoreResult, or None if nobody has scored the run
    """
    by_attempt: dict[int, list[Score]] = {}
    for s in scores:
        if s.category_id == category_id and s.athlete_bib == athlete_bib and s.run == run:
            by_attempt.setdefault(s.attempt, []).append(s)

    if not by_attempt:
        return None

    candidates = [
        _score_attempt(attempt, by_attempt[attempt]) for attempt in sorted(by_attempt)
    ]
    # max() keeps the first of several equal keys
    return max(candidates, key=_selection_key)


def _best_run(
    run1: RunScoreResult | None, run2: RunScoreResult | None
) -> tuple[int | None, RunScoreResult | None]:
    if run1 and run2:
        # Equal keys fall back to run 1
        if _selection_key(run2) > _selection_key(run1):
            return 2, run2
        return 1, run1
    if run1:
        return 1, run1
    if run2:
        return 2, run2
    return None, None


def compute_category_score(
    scores: Sequence[Score], category: Category, athlete_bib: int
) -> CategoryScoreDetail:
    """Select the better of an athlete's two runs within one category."""
    run1 = compute_run_score(scores, category.id, athlete_bib, 1)
    run2 = compute_run_score(scores, category.id, athlete_bib, 2)
    best_run, best = _best_run(run1, run2)

    return CategoryScoreDetail(
        category_id=category.id,
        category_name=category.name,
        best_run=best_run,
        best_average=best.average if best else None,
        best_attempt=best.attempt if best else None,
        complete=best.complete if best else False,
        run1=run1,
        run2=run2,
    )


def compute_final_score(
    scores: Sequence[Score], categories: Sequence[Category], athlete: Athlete
) -> FinalScoreResult:
    """Compute an athlete's final score across categories.

    The total is the plain sum of each category's best-run average; every
    category counts equally. Partial averages still contribute, but any
    category without a complete best run marks the result incomplete.

    Args:
        scores: All scores in the event
        categories: Categories to total over, in output order
        athlete: The athlete

    Returns:
        FinalScoreResult; total is None when no category has any score, and
        complete is False for an empty category list.
    """
    category_scores = [compute_category_score(scores, c, athlete.bib) for c in categories]
    contributed = [d.best_average for d in category_scores if d.best_average is not None]

    return FinalScoreResult(
        athlete_bib=athlete.bib,
        athlete_name=athlete.name,
        complete=bool(category_scores) and all(d.complete for d in category_scores),
        total=sum2(contributed) if contributed else None,
        category_scores=category_scores,
    )
