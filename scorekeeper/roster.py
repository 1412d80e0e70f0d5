"""Athlete roster import from "bib,name" CSV text."""

import csv
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from scorekeeper.models import Athlete, Category

logger = logging.getLogger(__name__)

# First-column values that mark a header row
HEADER_PREFIXES = ("bib", "startnummer", "#")

# Only LF and CRLF end a line; other Unicode separators stay inside the field
_LINE_BREAK = re.compile(r"\r?\n")


@dataclass
class RosterError:
    """A problem with one line of roster CSV.

    Attributes:
        line: 1-indexed line number in the submitted text
        message: What is wrong with the line
    """
    line: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"line": self.line, "message": self.message}


@dataclass
class RosterImport:
    """Parsed roster: valid athletes in input order plus per-line errors."""
    athletes: list[Athlete] = field(default_factory=list)
    errors: list[RosterError] = field(default_factory=list)


@dataclass
class RosterMerge:
    """Outcome of merging an imported roster into a category.

    Attributes:
        athletes: The category's full athlete list after the merge, by bib
        added: Athletes that were not in the category before
        skipped: Bibs that already existed and were left unchanged
    """
    athletes: list[Athlete]
    added: list[Athlete]
    skipped: list[int]


def _parse_bib(raw: str, line: int) -> int | RosterError:
    try:
        bib = float(raw)
    except ValueError:
        return RosterError(line, f'Invalid bib "{raw}" - must be a number')
    if not bib.is_integer() or bib <= 0:
        return RosterError(line, f"Bib {raw} must be a positive integer")
    return int(bib)


def parse_roster_csv(text: str) -> RosterImport:
    """Parse roster CSV with one "bib,name" athlete per line.

    A leading BOM, blank lines, quoted fields and a header row (first
    non-blank line starting with "bib", "startnummer" or "#") are accepted.
    Only the first comma separates bib from name, so names may contain
    commas. A bib repeated within the text keeps its first occurrence and
    reports the rest as errors.
    """
    result = RosterImport()
    seen_bibs: set[int] = set()
    text = text.removeprefix("\ufeff")

    for line_no, raw_line in enumerate(_LINE_BREAK.split(text), start=1):
        line = raw_line.strip()
        if not line:
            continue

        if not result.athletes and not result.errors and line.lower().startswith(HEADER_PREFIXES):
            continue

        if "," not in line:
            result.errors.append(RosterError(line_no, "Missing comma separator (expected: bib,name)"))
            continue

        bib_part, _, rest = line.partition(",")
        bib_raw = bib_part.strip().strip('"')
        name_raw = next(csv.reader([rest.strip()]), [""])
        name = ",".join(name_raw).strip()

        if not bib_raw:
            result.errors.append(RosterError(line_no, 'Invalid bib "" - must be a number'))
            continue
        bib = _parse_bib(bib_raw, line_no)
        if isinstance(bib, RosterError):
            result.errors.append(bib)
            continue
        if not name:
            result.errors.append(RosterError(line_no, f"Empty name for bib {bib}"))
            continue
        if bib in seen_bibs:
            result.errors.append(
                RosterError(line_no, f"Duplicate bib {bib} within CSV (kept first occurrence)")
            )
            continue

        seen_bibs.add(bib)
        result.athletes.append(Athlete(bib=bib, name=name))

    if result.errors:
        logger.info("Roster import: %d athlete(s), %d error(s)", len(result.athletes), len(result.errors))
    return result


def merge_roster(category: Category, imported: RosterImport) -> RosterMerge:
    """Merge imported athletes into a category without touching existing ones.

    Returns the merged list sorted by bib; the category itself is not
    modified.
    """
    added: list[Athlete] = []
    skipped = []
    for athlete in imported.athletes:
        if category.get_athlete(athlete.bib) is not None:
            skipped.append(athlete.bib)
        elif all(a.bib != athlete.bib for a in added):
            added.append(athlete)

    athletes = list(category.athletes)
    if added:
        athletes = sorted(athletes + added, key=lambda a: a.bib)
    return RosterMerge(athletes=athletes, added=added, skipped=skipped)
