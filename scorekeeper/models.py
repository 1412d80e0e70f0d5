"""Core data models for score submissions, rosters and scoring results."""

from dataclasses import dataclass, field
from typing import Any, Self

# The fixed panel of judge roles. Every run attempt is complete once each
# role has submitted exactly one value.
JUDGE_ROLES: tuple[str, ...] = ("J1", "J2", "J3")

RUNS: tuple[int, ...] = (1, 2)

MIN_SCORE = 1
MAX_SCORE = 100


@dataclass(frozen=True)
class Score:
    """A single judge's rating for one athlete, category, run and attempt.

    Attributes:
        judge_role: One of JUDGE_ROLES
        category_id: Category the athlete competes in
        athlete_bib: Bib number, unique within the category
        run: 1 or 2
        value: Integer rating, MIN_SCORE to MAX_SCORE inclusive
        attempt: 1 for the first attempt, incremented for each re-run
    """
    judge_role: str
    category_id: str
    athlete_bib: int
    run: int
    value: int
    attempt: int = 1

    @property
    def key(self) -> tuple[str, str, int, int, int]:
        """The identity tuple; at most one stored score exists per key."""
        return (self.judge_role, self.category_id, self.athlete_bib, self.run, self.attempt)

    def to_dict(self) -> dict[str, Any]:
        return {
            "judgeRole": self.judge_role,
            "categoryId": self.category_id,
            "athleteBib": self.athlete_bib,
            "run": self.run,
            "attempt": self.attempt,
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build a Score from the camelCase shape stored in event.json.

        A missing attempt means the score predates re-runs and counts as
        attempt 1.
        """
        attempt = data.get("attempt")
        return cls(
            judge_role=data["judgeRole"],
            category_id=data["categoryId"],
            athlete_bib=data["athleteBib"],
            run=data["run"],
            value=data["value"],
            attempt=1 if attempt is None else attempt,
        )


@dataclass(frozen=True)
class Athlete:
    bib: int
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"bib": self.bib, "name": self.name}


@dataclass
class Category:
    """A judged category and its ordered start list.

    Attributes:
        id: Unique category identifier
        name: Display name
        athletes: Athletes in start order
    """
    id: str
    name: str
    athletes: list[Athlete] = field(default_factory=list)

    def get_athlete(self, bib: int) -> Athlete | None:
        for athlete in self.athletes:
            if athlete.bib == bib:
                return athlete
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "athletes": [a.to_dict() for a in self.athletes],
        }


@dataclass
class Event:
    """The scoring-relevant part of a stored event.

    Attributes:
        id: Event identifier
        name: Event name
        created_at: ISO 8601 creation timestamp, as stored
        categories: Categories in display order
        scores: Every score submission recorded for the event
    """
    id: str
    name: str
    created_at: str
    categories: list[Category] = field(default_factory=list)
    scores: list[Score] = field(default_factory=list)

    @property
    def num_athletes(self) -> int:
        return sum(len(c.athletes) for c in self.categories)

    def get_category(self, category_id: str) -> Category | None:
        for category in self.categories:
            if category.id == category_id:
                return category
        return None


@dataclass
class RunScoreResult:
    """Representative score for one athlete, category and run.

    Attributes:
        complete: True when every judge role scored the selected attempt
        average: Mean of the submitted values (2 dp), or None if there are none
        attempt: The attempt the result was taken from
        scores: judge role -> submitted value, None where the judge has not scored
    """
    complete: bool
    average: float | None
    attempt: int
    scores: dict[str, int | None]

    def to_dict(self) -> dict[str, Any]:
        return {
            "complete": self.complete,
            "average": self.average,
            "attempt": self.attempt,
            "scores": dict(self.scores),
        }


@dataclass
class CategoryScoreDetail:
    """One athlete's result within one category.

    Attributes:
        category_id: Category identifier
        category_name: Category display name
        best_run: The run (1 or 2) selected as representative, or None
        best_average: Average of the best run, or None
        best_attempt: Attempt of the best run that was used, or None
        complete: Whether the best run is fully judged
        run1: Best attempt of run 1, or None if nobody has scored it
        run2: Best attempt of run 2, or None if nobody has scored it
    """
    category_id: str
    category_name: str
    best_run: int | None
    best_average: float | None
    best_attempt: int | None
    complete: bool
    run1: RunScoreResult | None
    run2: RunScoreResult | None

    def get_run(self, run: int) -> RunScoreResult | None:
        return self.run1 if run == 1 else self.run2 if run == 2 else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "categoryId": self.category_id,
            "categoryName": self.category_name,
            "bestRun": self.best_run,
            "bestAverage": self.best_average,
            "bestAttempt": self.best_attempt,
            "complete": self.complete,
            "run1": self.run1.to_dict() if self.run1 else None,
            "run2": self.run2.to_dict() if self.run2 else None,
        }


@dataclass
class FinalScoreResult:
    """An athlete's aggregate across categories.

    Attributes:
        athlete_bib: Athlete bib number
        athlete_name: Athlete name
        complete: True only if every category has a complete best run
        total: Unweighted sum of best-run averages, or None without any score
        category_scores: Per-category breakdown, in category order
    """
    athlete_bib: int
    athlete_name: str
    complete: bool
    total: float | None
    category_scores: list[CategoryScoreDetail]

    @property
    def has_score(self) -> bool:
        return self.total is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "athleteBib": self.athlete_bib,
            "athleteName": self.athlete_name,
            "complete": self.complete,
            "total": self.total,
            "categoryScores": [c.to_dict() for c in self.category_scores],
        }


@dataclass
class RankedAthlete(FinalScoreResult):
    """A final score result with its place in a ranking.

    Attributes:
        rank: 1-indexed rank (tied athletes share the same rank)
        tied: Whether another scored athlete shares this rank. Unscored
            athletes share the last rank but are never reported as tied.
    """
    rank: int = 0
    tied: bool = False

    @classmethod
    def from_result(cls, result: FinalScoreResult, rank: int, tied: bool = False) -> Self:
        return cls(
            athlete_bib=result.athlete_bib,
            athlete_name=result.athlete_name,
            complete=result.complete,
            total=result.total,
            category_scores=result.category_scores,
            rank=rank,
            tied=tied,
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["rank"] = self.rank
        data["tied"] = self.tied
        return data
