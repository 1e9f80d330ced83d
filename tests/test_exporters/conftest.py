"""Shared fixtures for exporter tests."""

from datetime import datetime

import pytest
from tests.conftest import make_performance, make_selection, make_technical

from diabolo.engine import submit
from diabolo.ranking.final import JudgeAssignment, calculate_final_rankings
from diabolo.ranking.performance import PerformanceRankingView
from diabolo.ranking.technical import TechnicalRankingView


@pytest.fixture
def generated_at():
    return datetime(2025, 3, 1, 12, 30)


@pytest.fixture
def records():
    """Two attempts: 6.84 and a -0.8 deduction-only attempt (total 6.04)."""
    first, _ = submit(make_selection(
        "Toss/High", "2D", level=2, features=["Turn 360"], grade=1,
        deductions=["Unintentional Drop"],
    ))
    second, _ = submit(make_selection(deductions=["Unintentional Drop", "Tangle"]))
    return [first, second]


@pytest.fixture
def technical_result():
    """Bob 45 -> 70, Alice 35 -> 54.444, Cara DQ."""
    competitors = [
        make_technical("Alice", 35, submitted_at="2025-03-01T10:00:00"),
        make_technical("Bob", 45, submitted_at="2025-03-01T10:05:00"),
        make_technical("Cara", 50, disqualified=True, submitted_at="2025-03-01T10:10:00"),
    ]
    return TechnicalRankingView().rank(competitors)


@pytest.fixture
def performance_result():
    competitors = [
        make_performance("Eve", {"control": 5, "style": 4.5}, submitted_at="2025-03-01T11:00:00"),
        make_performance("Gus", {"control": 3}, submitted_at="2025-03-01T11:05:00"),
    ]
    return PerformanceRankingView().submission_order(competitors)


@pytest.fixture
def final_rankings():
    return calculate_final_rankings([
        JudgeAssignment("Ben", tech1=10, tech2=10, tech3=10, perf1=20, perf2=22),
        JudgeAssignment("Ana", tech1=20, tech2=25, tech3=15, perf1=26, perf2=24),
        JudgeAssignment("Cy", tech1=30, tech2=30, tech3=30, perf1=30, perf2=30,
                        is_disqualified=True),
    ])
