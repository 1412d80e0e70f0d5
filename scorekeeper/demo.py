"""Generate a realistic demo event for trying out the results views.

All randomness comes from a seeded Faker instance, so the same seed always
produces the same event.
"""

from datetime import datetime, timezone
from typing import Any, Sequence

from faker import Faker

from scorekeeper.models import JUDGE_ROLES, MAX_SCORE, MIN_SCORE

SEED = 20260301

DEFAULT_CATEGORIES = ("Freestyle", "Street")

# Judges rarely stray far from the athlete's "true" level
JUDGE_SPREAD = 6

# Bounds for the generated creation timestamp; fixed so the seed alone decides it
CREATED_FROM = datetime(2025, 1, 1)
CREATED_TO = datetime(2026, 12, 31)


def _judge_value(fake: Faker, level: int) -> int:
    value = level + fake.random_int(-JUDGE_SPREAD, JUDGE_SPREAD)
    return max(MIN_SCORE, min(MAX_SCORE, value))


def _score(role: str, category_id: str, bib: int, run: int, attempt: int, value: int) -> dict[str, Any]:
    return {
        "judgeRole": role,
        "categoryId": category_id,
        "athleteBib": bib,
        "run": run,
        "attempt": attempt,
        "value": value,
    }


def generate_demo_event(
    seed: int = SEED,
    categories: Sequence[str] = DEFAULT_CATEGORIES,
    athletes_per_category: int = 8,
    in_progress: bool = True,
    locale: str = "en_US",
) -> dict[str, Any]:
    """Build an event document in the stored event.json shape.

    Every athlete gets a fully judged run 1 and run 2. A few athletes get a
    second attempt at run 2 (a granted re-run). When in_progress is set, the
    last athlete of each category is on their first run: only the first
    judge has scored it and run 2 has not started.

    Args:
        seed: Faker seed
        categories: Category names; ids are derived as "cat1", "cat2", ...
        athletes_per_category: Start list length per category
        in_progress: Leave the last athlete with a partially judged run 1 only
        locale: Faker locale for athlete names and the event city

    Returns:
        A dict that scorekeeper.events.event_from_dict accepts
    """
    fake = Faker(locale)
    fake.seed_instance(seed)

    event_categories = []
    scores = []
    for ci, category_name in enumerate(categories, start=1):
        category_id = f"cat{ci}"
        athletes = []
        for bib in range(1, athletes_per_category + 1):
            athletes.append({"bib": bib, "name": fake.name()})
            level = fake.random_int(45, 92)
            last = bib == athletes_per_category

            if in_progress and last:
                # On course now: only the first judge has scored run 1
                scores.append(_score(JUDGE_ROLES[0], category_id, bib, 1, 1, _judge_value(fake, level)))
                continue

            for run in (1, 2):
                for role in JUDGE_ROLES:
                    scores.append(_score(role, category_id, bib, run, 1, _judge_value(fake, level)))

            if not last and fake.boolean(chance_of_getting_true=15):
                for role in JUDGE_ROLES:
                    scores.append(_score(role, category_id, bib, 2, 2, _judge_value(fake, level)))

        event_categories.append({"id": category_id, "name": category_name, "athletes": athletes})

    return {
        "id": fake.uuid4(),
        "name": f"{fake.city()} Open",
        "createdAt": fake.date_time_between(CREATED_FROM, CREATED_TO, tzinfo=timezone.utc).isoformat(),
        "categories": event_categories,
        "scores": scores,
    }
