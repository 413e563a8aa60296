"""Sort a leaderboard workbook and write the ranked results.

Reads the points and spending tables from the first sheet, ranks every
player with the tiebreaker cascade, prints the leaderboard, and writes the
sorted and detailed workbooks.

Usage:
    python scripts/sort_leaderboard.py
    python scripts/sort_leaderboard.py input/leaderboard.xlsx -o output/sorted.xlsx
    python scripts/sort_leaderboard.py input/leaderboard.xlsx --summary output/summary.xlsx
"""

import argparse
import logging
import sys
from pathlib import Path

# Add the project root to the path so we can import leaderboard modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from leaderboard.analyze import AnalysisError, analyze_leaderboard
from leaderboard.config import (
    DEFAULT_DETAILED_OUTPUT_FILE,
    DEFAULT_INPUT_FILE,
    DEFAULT_OUTPUT_FILE,
    LOG_LEVEL,
)
from leaderboard.logging_config import setup_logging
from leaderboard.render import (
    format_leaderboard,
    format_stats,
    write_detailed_leaderboard,
    write_leaderboard,
    write_summary,
)

logger = logging.getLogger("sort_leaderboard")


def run(input_path: Path, output: Path, detailed: Path, summary: Path | None) -> int:
    content = input_path.read_bytes()
    result = analyze_leaderboard(input_path.name, content)
    leaderboard = result.leaderboard

    print(format_leaderboard(leaderboard))
    print(format_stats(leaderboard.stats))

    write_leaderboard(leaderboard, output)
    write_detailed_leaderboard(leaderboard, detailed)
    if summary is not None:
        write_summary(leaderboard, summary)

    print("\nOutput files created:")
    print(f"  1. {output}")
    print(f"  2. {detailed}")
    if summary is not None:
        print(f"  3. {summary}")

    if leaderboard.stats.tied_count > 0:
        print("\nWARNING: Some players are tied even after all tiebreakers!")
        print("   These players are highlighted in RED in the output file.")
        print("   They are sorted alphabetically.")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Rank a leaderboard workbook with points, spending and countback tiebreakers")
    parser.add_argument("input", nargs="?", default=str(DEFAULT_INPUT_FILE),
                        help=f"Path to the leaderboard workbook (default: {DEFAULT_INPUT_FILE})")
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT_FILE),
                        help=f"Sorted leaderboard output (default: {DEFAULT_OUTPUT_FILE})")
    parser.add_argument("--detailed", default=str(DEFAULT_DETAILED_OUTPUT_FILE),
                        help=f"Detailed leaderboard output (default: {DEFAULT_DETAILED_OUTPUT_FILE})")
    parser.add_argument("--summary", default=None,
                        help="Optional summary workbook output")
    parser.add_argument("--log-level", default=LOG_LEVEL,
                        help=f"Logging level (default: {LOG_LEVEL})")
    args = parser.parse_args()

    setup_logging(args.log_level)

    try:
        status = run(
            Path(args.input),
            Path(args.output),
            Path(args.detailed),
            Path(args.summary) if args.summary else None,
        )
    except (AnalysisError, OSError) as e:
        logger.error("Error: %s", e)
        status = 1
    sys.exit(status)


if __name__ == "__main__":
    main()
