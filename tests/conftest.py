"""Shared test helpers."""

from typing import Sequence

from diabolo.models import PerformanceScores, SavedCompetitor, ScoreRecord
from diabolo.selection import (
    Selection,
    select_trick,
    set_execution_grade,
    toggle_deduction,
    toggle_feature,
    toggle_level,
)


def make_selection(
    trick: str | None = None,
    tier: str = "2D",
    level: int | None = None,
    features: Sequence[str] = (),
    grade: int = 0,
    deductions: Sequence[str] = (),
) -> Selection:
    """Build a Selection by replaying selection events in order.

    Args:
        trick: Trick name, or None for a deduction-only selection
        tier: Difficulty tier of the trick
        level: Level to toggle on
        features: Feature names, toggled in order
        grade: Execution grade
        deductions: Deduction names, toggled in order (after the trick)
    """
    selection = Selection()
    if trick is not None:
        selection = select_trick(selection, trick, tier)
    if level is not None:
        selection = toggle_level(selection, level)
    for name in features:
        selection = toggle_feature(selection, name)
    if grade:
        selection = set_execution_grade(selection, grade)
    for name in deductions:
        selection = toggle_deduction(selection, name)
    return selection


def make_record(final_score: float, record_id: str = "r1") -> ScoreRecord:
    """A ScoreRecord whose only meaningful field is its final score."""
    return ScoreRecord(
        id=record_id,
        trick="Toss/High",
        difficulty="2D",
        base_score=1,
        features=(),
        execution_grade=0,
        level=None,
        final_score=final_score,
        description="T(2D)",
        identifier="2T",
    )


def make_technical(
    name: str,
    total: float,
    disqualified: bool = False,
    submitted_at: str = "2025-03-01T10:00:00",
    judge: str = "Judge A",
) -> SavedCompetitor:
    """A technical competitor whose records add up to total."""
    return SavedCompetitor(
        id=f"tech-{name}",
        name=name,
        judge_name=judge,
        judge_category="technical",
        submitted_at=submitted_at,
        scores=[make_record(total, f"{name}-1")],
        is_disqualified=disqualified,
    )


def make_performance(
    name: str,
    scores: dict[str, float],
    disqualified: bool = False,
    submitted_at: str = "2025-03-01T10:00:00",
    judge: str = "Judge P",
) -> SavedCompetitor:
    return SavedCompetitor(
        id=f"perf-{name}",
        name=name,
        judge_name=judge,
        judge_category="performance",
        submitted_at=submitted_at,
        performance_scores=PerformanceScores(**scores),
        is_disqualified=disqualified,
    )


def standing_names(result) -> list[str]:
    """Competitor names of a RankingResult in listing order."""
    return [s.name for s in result.standings]
