"""Print or export the results of an event.

Reads the stored event.json (or an exported event fetched from a URL),
ranks every category and prints a leaderboard, or writes CSV/JSON.

Usage:
    python scripts/show_results.py
    python scripts/show_results.py data/event.json --category cat1 --judge J2
    python scripts/show_results.py --url https://example.com/export.json --format csv -o results.csv
"""

import argparse
import logging
import sys
from pathlib import Path

# Add the project root to the path so scripts run from a plain checkout
sys.path.insert(0, str(Path(__file__).parent.parent))

from scorekeeper.events import (  # noqa: E402
    EventFetchError,
    EventFormatError,
    default_event_path,
    fetch_event,
    load_event,
)
from scorekeeper.export import export_filename, results_to_csv, results_to_json  # noqa: E402
from scorekeeper.models import JUDGE_ROLES  # noqa: E402
from scorekeeper.ranking import DEFAULT_RANKING_POLICY, get_all_ranking_policies  # noqa: E402
from scorekeeper.results import EventResults, ResultsError, build_results  # noqa: E402

logger = logging.getLogger("show_results")


def format_table(results: EventResults) -> str:
    """Render results as a plain-text leaderboard per category."""
    lines = [results.event_name]
    if results.judge_role:
        lines[0] += f" (judge {results.judge_role} only)"
    for category_results in results.categories:
        status = "final" if category_results.is_final else "provisional"
        lines.append("")
        lines.append(f"{category_results.category.name} [{status}]")
        lines.append(f"{'Rank':>5}  {'Bib':>4}  {'Name':<28} {'Best':>6}  {'Score':>7}")
        for entry in category_results.leaderboard:
            detail = entry.category_scores[0] if entry.category_scores else None
            best = f"Run {detail.best_run}" if detail and detail.best_run else ""
            score = "—" if entry.total is None else f"{entry.total:.2f}"
            rank = f"{entry.rank}{'T' if entry.tied else ''}"
            marker = "" if entry.complete or entry.total is None else " *"
            lines.append(
                f"{rank:>5}  {entry.athlete_bib:>4}  {entry.athlete_name:<28} {best:>6}  {score:>7}{marker}"
            )
    lines.append("")
    lines.append("* incomplete: not every judge has scored the best run yet")
    return "\n".join(lines)


def main():
    policies = [p.key for p in get_all_ranking_policies()]

    parser = argparse.ArgumentParser(description="Show or export event results")
    parser.add_argument("event", nargs="?", default=None,
                        help=f"Path to event.json (default: {default_event_path()})")
    parser.add_argument("--url", help="Fetch an exported event from this URL instead")
    parser.add_argument("--category", help="Only show this category id")
    parser.add_argument("--judge", choices=JUDGE_ROLES,
                        help="Only count this judge's scores")
    parser.add_argument("--policy", choices=policies, default=DEFAULT_RANKING_POLICY,
                        help=f"Ranking policy (default: {DEFAULT_RANKING_POLICY})")
    parser.add_argument("--format", choices=["table", "csv", "json"], default="table")
    parser.add_argument("-o", "--output",
                        help="Write to this file; a directory gets a generated filename")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        event = fetch_event(args.url) if args.url else load_event(args.event)
    except (EventFetchError, EventFormatError) as e:
        logger.error("%s", e)
        return 1
    if event is None:
        logger.error("No event found at %s", args.event or default_event_path())
        return 1

    try:
        results = build_results(event, args.category, args.judge, args.policy)
    except ResultsError as e:
        logger.error("%s", e)
        return 1

    if args.format == "csv":
        output = results_to_csv(results)
    elif args.format == "json":
        output = results_to_json(results)
    else:
        output = format_table(results)

    if not args.output:
        print(output)
        return 0

    output_path = Path(args.output)
    if output_path.is_dir():
        kind = "json" if args.format == "json" else "results"
        output_path = output_path / export_filename(event.name, kind)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the CSV's CRLF line endings intact
    with open(output_path, "w", encoding="utf-8", newline="") as f:
        f.write(output)
    print(f"Written to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
