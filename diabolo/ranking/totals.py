"""Aggregation and normalization formulas shared by every ranking view."""

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, Iterable, Protocol, Sequence, TypeVar

from diabolo.models import PerformanceScores, SavedCompetitor, ScoreRecord

TECHNICAL_CEILING = 70.0
PERFORMANCE_CEILING = 30.0
PERFORMANCE_JUDGES = 2


class Rankable(Protocol):
    is_disqualified: bool


T = TypeVar("T", bound=Rankable)


@dataclass(frozen=True)
class FinalScore:
    """Blend of normalized technical and averaged performance scores (max 100)."""
    normalized_technical: float
    average_performance: float
    final_score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "normalized_technical": self.normalized_technical,
            "average_performance": self.average_performance,
            "final_score": self.final_score,
        }


def aggregate_technical_total(records: Iterable[ScoreRecord]) -> float:
    return sum((r.final_score for r in records), 0.0)


def performance_total(scores: PerformanceScores) -> float:
    return scores.total


def reported_total(competitor: SavedCompetitor) -> float:
    """Competitor total with disqualification applied."""
    return competitor.reported_total


def highest_technical_total(competitors: Iterable[SavedCompetitor]) -> float:
    """Highest technical total among non-disqualified technical competitors (0 if none)."""
    totals = [
        c.raw_total for c in competitors
        if c.judge_category == "technical" and not c.is_disqualified
    ]
    return max(totals, default=0.0)


def adjusted_score(total: float, highest: float) -> float:
    """Rescale a technical total onto the 70-point ceiling.

    Defined as 0 when there is no highest total to divide by.
    """
    if highest == 0:
        return 0.0
    return total / highest * TECHNICAL_CEILING


def combined_technical_total(tech1: float, tech2: float, tech3: float) -> float:
    return tech1 + tech2 + tech3


def highest_combined_technical_total(assignments: Iterable[Any]) -> float:
    """Highest sum of the three technical judges' totals; disqualified entrants count as 0."""
    return max(
        (
            0.0 if a.is_disqualified else combined_technical_total(a.tech1, a.tech2, a.tech3)
            for a in assignments
        ),
        default=0.0,
    )


def final_ranking_score(
    tech1: float,
    tech2: float,
    tech3: float,
    perf1: float,
    perf2: float,
    highest_combined_technical: float,
    is_disqualified: bool,
) -> FinalScore:
    """Combine three technical and two performance judges into a final score.

    normalized technical = (tech1 + tech2 + tech3) / highest combined total * 70
    average performance  = (perf1 + perf2) / 2
    final score          = normalized technical + average performance
    """
    if is_disqualified:
        return FinalScore(0.0, 0.0, 0.0)

    normalized = adjusted_score(
        combined_technical_total(tech1, tech2, tech3), highest_combined_technical
    )
    average = (perf1 + perf2) / PERFORMANCE_JUDGES
    return FinalScore(normalized, average, normalized + average)


def ranking_comparator(a: Rankable, b: Rankable, score_selector: Callable[[Any], float]) -> int:
    """Order disqualified entrants last, otherwise by score descending.

    Two disqualified entrants compare equal. There is no secondary tiebreak.
    """
    if a.is_disqualified and not b.is_disqualified:
        return 1
    if not a.is_disqualified and b.is_disqualified:
        return -1
    if a.is_disqualified and b.is_disqualified:
        return 0
    score_a, score_b = score_selector(a), score_selector(b)
    if score_a > score_b:
        return -1
    if score_a < score_b:
        return 1
    return 0


def rank_entries(entries: Sequence[T], score_selector: Callable[[T], float]) -> list[T]:
    """Stable-sort entries with ranking_comparator."""
    return sorted(
        entries,
        key=cmp_to_key(lambda a, b: ranking_comparator(a, b, score_selector)),
    )
