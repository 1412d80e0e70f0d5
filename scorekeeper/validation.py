"""Schemas for the stored event document, using Pydantic v2.

Field names follow the camelCase keys of event.json. Anything else in the
document (keys, live state, locked runs) is ignored.
"""

from typing import Any, Literal, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    ValidationError,
    field_validator,
    model_validator,
)

from scorekeeper.models import MAX_SCORE, MIN_SCORE

# Message per field for type and range failures
FIELD_RULES = {
    "id": "must be a non-empty string",
    "name": "must be a non-empty string",
    "createdAt": "must be a non-empty string",
    "categories": "must be an array",
    "athletes": "must be an array",
    "scores": "must be an array",
    "bib": "must be an integer",
    "categoryId": "must be a string",
    "athleteBib": "must be an integer",
    "run": "must be 1 or 2",
    "attempt": "must be a positive integer",
    "value": f"must be integer {MIN_SCORE}-{MAX_SCORE}",
}


def _whole_float_to_int(v: Any) -> Any:
    # JSON writers may emit 80.0 for 80
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return v


class ReferenceErrors(ValueError):
    """Cross-reference problems found after every field validated."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class AthleteDocument(BaseModel):
    bib: StrictInt
    name: str = Field(..., min_length=1)

    @field_validator("bib", mode="before")
    @classmethod
    def whole_bib(cls, v: Any) -> Any:
        return _whole_float_to_int(v)


class CategoryDocument(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    athletes: list[AthleteDocument] = Field(default_factory=list)


class ScoreDocument(BaseModel):
    """One judge's submission as stored; attempt is absent on old files."""

    judgeRole: Literal["J1", "J2", "J3"]
    categoryId: str
    athleteBib: StrictInt
    run: Literal[1, 2]
    attempt: StrictInt | None = Field(None, ge=1)
    value: StrictInt = Field(..., ge=MIN_SCORE, le=MAX_SCORE)

    @field_validator("athleteBib", "run", "attempt", "value", mode="before")
    @classmethod
    def whole_numbers(cls, v: Any) -> Any:
        return _whole_float_to_int(v)


class EventDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    createdAt: str = Field(..., min_length=1)
    categories: list[CategoryDocument] = Field(default_factory=list)
    scores: list[ScoreDocument] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_references(self) -> Self:
        """Category ids and bibs are unique; every score points at a known athlete."""
        errors = []
        bibs_by_category: dict[str, set[int]] = {}
        for category in self.categories:
            if category.id in bibs_by_category:
                errors.append(f"Duplicate category id {category.id!r}")
                continue
            bibs: set[int] = set()
            for athlete in category.athletes:
                if athlete.bib in bibs:
                    errors.append(f"Category {category.name!r}: duplicate athlete bib {athlete.bib}")
                bibs.add(athlete.bib)
            bibs_by_category[category.id] = bibs

        for i, score in enumerate(self.scores):
            bibs = bibs_by_category.get(score.categoryId)
            if bibs is None:
                errors.append(f"scores[{i}]: categoryId {score.categoryId!r} does not match any category")
            elif score.athleteBib not in bibs:
                errors.append(
                    f"scores[{i}]: athleteBib {score.athleteBib} not found in category {score.categoryId!r}"
                )

        if errors:
            raise ReferenceErrors(errors)
        return self


def _location(loc: tuple) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _describe(error: dict[str, Any]) -> list[str]:
    loc = error["loc"]
    reference_errors = error.get("ctx", {}).get("error")
    if isinstance(reference_errors, ReferenceErrors):
        return list(reference_errors.errors)

    if not loc or isinstance(loc[-1], int):
        return [f"{_location(loc) or 'document'}: must be an object"]

    field = loc[-1]
    prefix = _location(loc[:-1])
    if error["type"] == "missing":
        message = f"{field} is required"
    elif field == "judgeRole":
        message = f"invalid judgeRole {error['input']!r}"
    elif field in FIELD_RULES:
        message = f"{field} {FIELD_RULES[field]}"
    else:
        message = f"{field}: {error['msg']}"
    return [f"{prefix}: {message}" if prefix else message]


def validation_messages(exc: ValidationError) -> list[str]:
    """Flatten a ValidationError into one readable message per problem."""
    messages = []
    for error in exc.errors():
        messages.extend(_describe(error))
    return messages
