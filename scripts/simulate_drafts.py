#!/usr/bin/env python3
"""Auto-play drafts with the deterministic recommender.

Each turn takes the top recommendation, or with --top-k a seeded random
choice among the top k. Prints both compositions, their warnings/strengths
and the final win probability, plus an aggregate at the end.

Usage:
  uv run python scripts/simulate_drafts.py --drafts 10 --top-k 3 --seed 7
  uv run python scripts/simulate_drafts.py --profile compact --json results.json
"""

import argparse
import json
import random
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend" / "src"))

from draftboard.models.draft import TeamSide
from draftboard.repositories.champion_repository import load_catalog
from draftboard.services.draft_session import DraftSession


def play_draft(session: DraftSession, rng: random.Random, top_k: int) -> dict:
    """Fill all 20 slots and return a summary of the finished draft."""
    while session.current_turn_info() is not None:
        choices = session.recommendations.items[:top_k]
        session.select(rng.choice(choices).champion_id)

    state = session.state
    return {
        "blue_bans": state.blue_bans,
        "red_bans": state.red_bans,
        "blue_picks": state.blue_picks,
        "red_picks": state.red_picks,
        "blue_analysis": session.blue_analysis.to_dict(),
        "red_analysis": session.red_analysis.to_dict(),
        "win_probability": session.win_probability.to_dict(),
    }


def print_draft(number: int, result: dict, session: DraftSession):
    def names(ids):
        return ", ".join(c.name for c in session.catalog.resolve(ids))

    wp = result["win_probability"]
    print(f"\n=== Draft {number} ===")
    for side in TeamSide:
        analysis = result[f"{side.value}_analysis"]
        print(f"  {side.value.upper():4} picks: {names(result[f'{side.value}_picks'])}")
        print(f"       bans:  {names(result[f'{side.value}_bans'])}")
        if analysis["strengths"]:
            print(f"       +  {', '.join(analysis['strengths'])}")
        if analysis["warnings"]:
            print(f"       -  {', '.join(analysis['warnings'])}")
    print(f"  Win probability: blue {wp['blue_win_probability']}% / red {wp['red_win_probability']}%")
    for factor in wp["factors"]:
        print(f"    {factor['description']}: {factor['impact']:.1f} ({factor['favored_team']})")


def main():
    parser = argparse.ArgumentParser(
        description="Auto-play drafts using the recommendation engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--drafts", "-n", type=int, default=5, help="Number of drafts to play")
    parser.add_argument("--top-k", "-k", type=int, default=1,
                        help="Choose randomly among the top k recommendations (1 = always the best)")
    parser.add_argument("--seed", "-s", type=int, default=None, help="Random seed")
    parser.add_argument("--profile", choices=["full", "compact"], default="full",
                        help="Composition strength rule set")
    parser.add_argument("--knowledge-dir", type=Path, default=None,
                        help="Directory holding champions.json (default: repo knowledge/)")
    parser.add_argument("--json", "-j", type=str, metavar="FILE", help="Write results to a JSON file")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print the aggregate")
    args = parser.parse_args()

    if args.top_k < 1:
        parser.error("--top-k must be at least 1")

    catalog = load_catalog(args.knowledge_dir)
    rng = random.Random(args.seed)

    results = []
    for number in range(1, args.drafts + 1):
        session = DraftSession(catalog, profile=args.profile)
        result = play_draft(session, rng, args.top_k)
        results.append(result)
        if not args.quiet:
            print_draft(number, result, session)

    if results:
        blue_avg = sum(r["win_probability"]["blue_win_probability"] for r in results) / len(results)
        print(f"\n{len(results)} drafts, average blue win probability {blue_avg:.1f}%")

    if args.json:
        with open(args.json, "w") as f:
            json.dump(results, f, indent=2)
        print(f"Results written to {args.json}")


if __name__ == "__main__":
    main()
