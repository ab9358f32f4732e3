"""
Simulate a review sequence and print the resulting schedule.

Each review happens on the day the previous one made the card due.

Usage:
    python -m scripts.simulate_sequence good good fail good good good
    python -m scripts.simulate_sequence easy hard --retention 0.85
    python -m scripts.simulate_sequence easy --legacy-interval 50
"""

import argparse
from datetime import date

from srs import fsrs
from srs.logging import configure_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Replay ratings through the scheduler")
    parser.add_argument("ratings", nargs="+", help="Ratings: fail, hard, good, easy (or 0-3)")
    parser.add_argument("--retention", type=float, default=None, help="Target retention (0-1)")
    parser.add_argument("--max-interval", type=int, default=None, help="Maximum interval in days")
    parser.add_argument("--legacy-interval", type=float, default=None,
                        help="Start from a migrated legacy card with this interval")
    parser.add_argument("--start", type=date.fromisoformat, default=date.today(),
                        help="Date of the first review (YYYY-MM-DD)")
    return parser.parse_args(argv)


def main(argv=None):
    configure_logging()
    args = parse_args(argv)

    ratings = [int(r) if r.isdigit() else r for r in args.ratings]
    config = {
        "target_retention": args.retention,
        "maximum_interval_days": args.max_interval,
    }

    start_state = None
    initial_elapsed = 0.0
    if args.legacy_interval is not None:
        start_state = fsrs.migrate_legacy_item(args.legacy_interval)
        initial_elapsed = args.legacy_interval

    try:
        results = fsrs.replay(ratings, start_state, args.start, config, initial_elapsed)
    except fsrs.InvalidRatingError as exc:
        print(f"[ERROR] {exc}")
        return 1

    print("=" * 72)
    print("Review sequence: " + ", ".join(str(r) for r in args.ratings))
    print("=" * 72)
    print(f"{'#':>3}  {'rating':<8}{'phase':<12}{'interval':>9}{'stability':>11}{'difficulty':>11}  due")
    print("-" * 72)

    for i, (rating, result) in enumerate(zip(ratings, results), 1):
        name = fsrs.parse_rating(rating).name
        print(
            f"{i:>3}  {name:<8}{result.phase.name:<12}{result.interval_days:>9}"
            f"{result.stability:>11.2f}{result.difficulty:>11.2f}  {result.due_date.isoformat()}"
        )

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
