"""Anonymize a leaderboard workbook.

Finds every player name in the points and spending tables, generates fake
replacements using faker with a fixed seed, and writes an anonymized copy.
The same player gets the same fake name in both tables, so the copy still
parses and ranks exactly like the original.

Usage:
    python scripts/anonymize_leaderboard.py input/leaderboard.xlsx
    python scripts/anonymize_leaderboard.py input/leaderboard.xlsx -o anonymized.xlsx
"""

import argparse
import sys
from pathlib import Path

import openpyxl
from faker import Faker

# Add the project root to the path so we can import leaderboard modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from leaderboard.parsers.base import SheetLayout, is_player_name

DEFAULT_OUTPUT = Path(__file__).parent.parent / "input" / "leaderboard-anonymized.xlsx"

SEED = 20260101


def _name_cells(sheet, layout: SheetLayout):
    """Yield the cells holding player names in both tables."""
    column = layout.name_column + 1  # openpyxl columns are 1-indexed
    for start, end in (layout.points_rows, layout.spending_rows):
        for row in range(start + 1, end + 1):
            cell = sheet.cell(row=row, column=column)
            if isinstance(cell.value, str) and is_player_name(cell.value.strip()):
                yield cell


def discover_names(sheet, layout: SheetLayout) -> set[str]:
    """Collect the distinct player names (case-insensitive, first spelling wins)."""
    names: dict[str, str] = {}
    for cell in _name_cells(sheet, layout):
        name = cell.value.strip()
        names.setdefault(name.lower(), name)
    return set(names.values())


def generate_fake_names(names: set[str], seed: int) -> dict[str, str]:
    """Generate a mapping of lowercased real names to fake names."""
    fake = Faker(["en_US", "en_GB"])
    Faker.seed(seed)

    real = {name.lower() for name in names}
    mapping: dict[str, str] = {}
    for name in sorted(names, key=str.lower):  # Sort for determinism
        fake_name = fake.name()
        # Ensure no collisions with existing names or other fakes
        while fake_name.lower() in real or fake_name in mapping.values():
            fake_name = fake.name()
        mapping[name.lower()] = fake_name

    return mapping


def main():
    parser = argparse.ArgumentParser(
        description="Anonymize player names in a leaderboard workbook")
    parser.add_argument("input", help="Path to the input workbook")
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT),
                        help=f"Output path (default: {DEFAULT_OUTPUT})")
    args = parser.parse_args()

    layout = SheetLayout()
    workbook = openpyxl.load_workbook(args.input)
    sheet = workbook.worksheets[0]

    names = discover_names(sheet, layout)
    print(f"Found {len(names)} unique player names")

    mapping = generate_fake_names(names, SEED)
    for original in sorted(names, key=str.lower):
        print(f"  {original} -> {mapping[original.lower()]}")

    for cell in _name_cells(sheet, layout):
        cell.value = mapping[cell.value.strip().lower()]

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output_path)
    print(f"Written to {output_path}")


if __name__ == "__main__":
    main()
