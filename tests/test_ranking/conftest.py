"""Shared fixtures for ranking tests."""

import pytest
from tests.conftest import make_competitor


@pytest.fixture
def identical_profiles():
    """Same scores in a different event order, nothing spent.

         E1  E2  E3  E4  E5   Total
    A    10  15   8  20  12   65
    B    15  10  20   8  12   65

    Countback sees the same profile {20, 15, 12, 10, 8}: A, B both tied.
    """
    return [
        make_competitor("B", [15, 10, 20, 8, 12]),
        make_competitor("A", [10, 15, 8, 20, 12]),
    ]


@pytest.fixture
def spending_decides():
    """Equal points, different spending.

         Points  Spending
    C    100     500
    D    100     300

    D ranks above C on spending; neither is tied.
    """
    return [
        make_competitor("C", [60, 40], [250, 250]),
        make_competitor("D", [50, 50], [100, 200]),
    ]


@pytest.fixture
def countback_decides():
    """Equal points and spending, different profiles.

         E1  E2  E3   Profile
    E    50   0   0   [50]
    F    25  25   0   [25, 25]

    E wins countback at the first position (50 > 25).
    """
    return [
        make_competitor("F", [25, 25, 0]),
        make_competitor("E", [50, 0, 0]),
    ]


@pytest.fixture
def mixed_field():
    """Seven players exercising every tiebreak level.

                  E1  E2  E3   Points  Spending
    Zoe           30  20  10   60      100
    Adam          30  20  10   60      100     (fully tied with Zoe)
    Cara          40  10  10   60      100     (countback beats Adam/Zoe)
    Dan           20  20  20   60       50     (spending beats everyone on 60)
    Eve           25  25   0   50        0
    Finn          25  25   0   50        0     (fully tied with Eve)
    Gus            0   0   0    0        0

    Order: Dan, Cara, Adam, Zoe, Eve, Finn, Gus
    Ranks: 1,   2,    3,    3,   5,   5,    7
    """
    return [
        make_competitor("Zoe", [30, 20, 10], [50, 50, 0]),
        make_competitor("Gus", [0, 0, 0], [0, 0, 0]),
        make_competitor("Adam", [10, 30, 20], [0, 0, 100]),
        make_competitor("Eve", [25, 25, 0], [0, 0, 0]),
        make_competitor("Cara", [10, 40, 10], [100, 0, 0]),
        make_competitor("Finn", [0, 25, 25], [0, 0, 0]),
        make_competitor("Dan", [20, 20, 20], [25, 25, 0]),
    ]
