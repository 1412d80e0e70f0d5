"""Write a seeded demo event to event.json.

Usage:
    python scripts/generate_demo_event.py
    python scripts/generate_demo_event.py -o /tmp/event.json --seed 7 --athletes 12
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from scorekeeper.demo import DEFAULT_CATEGORIES, SEED, generate_demo_event  # noqa: E402
from scorekeeper.events import default_event_path, event_from_dict  # noqa: E402


def main():
    default_output = default_event_path()

    parser = argparse.ArgumentParser(description="Generate a demo event")
    parser.add_argument("-o", "--output", default=str(default_output),
                        help=f"Output path (default: {default_output})")
    parser.add_argument("--seed", type=int, default=SEED)
    parser.add_argument("--athletes", type=int, default=8,
                        help="Athletes per category")
    parser.add_argument("--category", action="append", dest="categories",
                        help="Category name (repeatable; default: %s)" % ", ".join(DEFAULT_CATEGORIES))
    parser.add_argument("--finished", action="store_true",
                        help="Fully judge every run instead of leaving one in progress")
    parser.add_argument("--force", action="store_true",
                        help="Overwrite an existing file")
    args = parser.parse_args()

    output_path = Path(args.output)
    if output_path.exists() and not args.force:
        print(f"{output_path} already exists; use --force to overwrite")
        return 1

    data = generate_demo_event(
        seed=args.seed,
        categories=args.categories or DEFAULT_CATEGORIES,
        athletes_per_category=args.athletes,
        in_progress=not args.finished,
    )
    # Refuse to write anything the loader would reject
    event = event_from_dict(data)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"{event.name}: {len(event.categories)} categories, "
          f"{event.num_athletes} athletes, {len(event.scores)} scores")
    print(f"Written to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
