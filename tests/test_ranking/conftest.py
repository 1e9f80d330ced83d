"""Shared fixtures for ranking tests."""

import pytest
from tests.conftest import make_performance, make_technical

from diabolo.ranking.final import JudgeAssignment


@pytest.fixture
def technical_field():
    """Four technical competitors, submitted in alphabetical order.

    Alice  35   (10:00)
    Bob    45   (10:05)
    Cara   20   (10:10)
    Dan    60   DQ (10:15)

    Dan has the best raw total but is disqualified, so Bob's 45 is the
    normalization denominator. Ranked: Bob, Alice, Cara, Dan.
    """
    return [
        make_technical("Alice", 35, submitted_at="2025-03-01T10:00:00"),
        make_technical("Bob", 45, submitted_at="2025-03-01T10:05:00"),
        make_technical("Cara", 20, submitted_at="2025-03-01T10:10:00"),
        make_technical("Dan", 60, disqualified=True, submitted_at="2025-03-01T10:15:00"),
    ]


@pytest.fixture
def performance_field():
    """Three performance competitors.

    Eve    control 5, style 4.5, showmanship 5  = 14.5  (11:00)
    Finn   control 3, style 3                   = 6     DQ (11:05)
    Gus    every category 3                     = 18    (11:10)

    Ranked: Gus, Eve, Finn.
    """
    return [
        make_performance("Eve", {"control": 5, "style": 4.5, "showmanship": 5},
                         submitted_at="2025-03-01T11:00:00"),
        make_performance("Finn", {"control": 3, "style": 3}, disqualified=True,
                         submitted_at="2025-03-01T11:05:00"),
        make_performance("Gus", {
            "control": 3, "style": 3, "space_usage": 3,
            "choreography": 3, "construction": 3, "showmanship": 3,
        }, submitted_at="2025-03-01T11:10:00"),
    ]


@pytest.fixture
def mixed_field(technical_field, performance_field):
    return technical_field + performance_field


@pytest.fixture
def assignments():
    """Three entrants judged by three technical and two performance judges.

            T1  T2  T3  P1  P2
    Ana     20  25  15  26  24    tech 60 (highest), perf avg 25
    Ben     10  10  10  20  22    tech 30, perf avg 21
    Cy      30  30  30  30  30    DQ

    Ana: 70 + 25 = 95. Ben: 35 + 21 = 56. Cy: 0.
    """
    return [
        JudgeAssignment("Ana", tech1=20, tech2=25, tech3=15, perf1=26, perf2=24),
        JudgeAssignment("Ben", tech1=10, tech2=10, tech3=10, perf1=20, perf2=22),
        JudgeAssignment("Cy", tech1=30, tech2=30, tech3=30, perf1=30, perf2=30,
                        is_disqualified=True),
    ]
