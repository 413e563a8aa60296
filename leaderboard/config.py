"""Project-wide settings for the leaderboard sorter."""

import os
from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent

# Decimal places kept for every score and spending amount
PRECISION = 2

# Default input/output locations used by the command-line sorter
INPUT_DIR = PROJECT_ROOT / "input"
OUTPUT_DIR = PROJECT_ROOT / "output"
DEFAULT_INPUT_FILE = INPUT_DIR / "leaderboard.xlsx"
DEFAULT_OUTPUT_FILE = OUTPUT_DIR / "sorted_leaderboard.xlsx"
DEFAULT_DETAILED_OUTPUT_FILE = OUTPUT_DIR / "detailed_leaderboard.xlsx"

# Sheet layout (0-indexed rows/columns, end-exclusive ranges).
# Rows 0-1 are headers and row 27 holds totals for the points table;
# row 31 is the spending header and row 57 its totals.
POINTS_ROWS = (2, 27)
SPENDING_ROWS = (32, 57)
NAME_COLUMN = 1
EVENT_COLUMNS = (2, 24)  # 22 events

# Cell markers that mean "no score"
DISQUALIFIED_MARKERS = ("D$Q", "DSQ")
EMPTY_MARKERS = ("", "-")

# Logging
LOG_DIR = PROJECT_ROOT / "logs"
LOG_FILE = LOG_DIR / "leaderboard.log"
LOG_LEVEL = os.environ.get("LEADERBOARD_LOG_LEVEL", "INFO")
