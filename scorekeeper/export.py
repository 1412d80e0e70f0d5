"""CSV and JSON renderings of event results."""

import csv
import io
import json
import re
from datetime import date

from scorekeeper.models import RUNS, RankedAthlete
from scorekeeper.results import EventResults

CSV_COLUMNS = ["Rank", "Bib", "Name", "Run 1", "Run 2", "Best Run", "Score"]

# Excel needs the BOM to detect UTF-8
CSV_BOM = "\ufeff"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9_-]")


def _fmt(value: float | None) -> str:
    return "" if value is None else f"{value:.2f}"


def _csv_row(entry: RankedAthlete) -> list[str]:
    # Each leaderboard is ranked within a single category
    detail = entry.category_scores[0] if entry.category_scores else None
    runs = [detail.get_run(run) if detail else None for run in RUNS]
    best_run = f"Run {detail.best_run}" if detail and detail.best_run else ""
    return [
        f"{entry.rank}{'T' if entry.tied else ''}",
        str(entry.athlete_bib),
        entry.athlete_name,
        *(_fmt(run.average if run else None) for run in runs),
        best_run,
        _fmt(entry.total),
    ]


def results_to_csv(results: EventResults) -> str:
    """Render results as CSV, one section per category.

    Each section starts with a "Category,<name>" row and the column headers;
    sections are separated by a blank row. Tied ranks carry a "T" suffix and
    missing values are left empty. Rows end in CRLF.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n")
    for i, category_results in enumerate(results.categories):
        if i > 0:
            writer.writerow([])
        writer.writerow(["Category", category_results.category.name])
        writer.writerow(CSV_COLUMNS)
        for entry in category_results.leaderboard:
            writer.writerow(_csv_row(entry))
    return CSV_BOM + buffer.getvalue()


def results_to_json(results: EventResults) -> str:
    return json.dumps(results.to_dict(), indent=2, ensure_ascii=False)


def export_filename(event_name: str, kind: str = "results", today: date | None = None) -> str:
    """Build a download filename such as "Spring_Jam_results_2026-03-01.csv".

    Args:
        event_name: Event name; characters outside [a-zA-Z0-9_-] become "_"
        kind: "results" for the CSV, "json" for a JSON results export
        today: Date stamped into CSV filenames (defaults to today)
    """
    safe_name = _UNSAFE_FILENAME_CHARS.sub("_", event_name)
    if kind == "json":
        return f"{safe_name}_results.json"
    if kind != "results":
        raise ValueError(f"Unknown export kind: {kind}")
    today = today or date.today()
    return f"{safe_name}_results_{today.isoformat()}.csv"
