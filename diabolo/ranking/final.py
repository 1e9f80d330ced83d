"""Multi-judge final rankings: three technical and two performance judges per entrant."""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Self

from diabolo.ranking.totals import (
    PERFORMANCE_CEILING,
    TECHNICAL_CEILING,
    final_ranking_score,
    highest_combined_technical_total,
    rank_entries,
)

logger = logging.getLogger(__name__)

SCORE_FIELDS = ("tech1", "tech2", "tech3", "perf1", "perf2")


@dataclass(frozen=True)
class JudgeAssignment:
    """Totals entered for one entrant from each of the five judges."""
    competitor_name: str
    tech1: float = 0.0
    tech2: float = 0.0
    tech3: float = 0.0
    perf1: float = 0.0
    perf2: float = 0.0
    is_disqualified: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "competitor_name": self.competitor_name,
            **{name: getattr(self, name) for name in SCORE_FIELDS},
            "is_disqualified": self.is_disqualified,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            competitor_name=data["competitor_name"],
            **{name: float(data.get(name, 0.0)) for name in SCORE_FIELDS},
            is_disqualified=bool(data.get("is_disqualified", False)),
        )


@dataclass
class FinalStanding:
    """An entrant's final score breakdown.

    Disqualified entrants have every score forced to 0.
    """
    name: str
    technical_scores: tuple[float, float, float]
    performance_scores: tuple[float, float]
    normalized_technical: float
    average_performance: float
    final_score: float
    is_disqualified: bool

    @property
    def technical_total(self) -> float:
        return sum(self.technical_scores)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "technical_scores": list(self.technical_scores),
            "performance_scores": list(self.performance_scores),
            "technical_total": self.technical_total,
            "normalized_technical": self.normalized_technical,
            "average_performance": self.average_performance,
            "final_score": self.final_score,
            "is_disqualified": self.is_disqualified,
        }


@dataclass
class FinalRankings:
    """Final standings in input order, with the normalization denominator used."""
    standings: list[FinalStanding]
    highest_technical_total: float
    details: dict[str, Any] = field(default_factory=dict)

    def sorted(self, view: str = "final") -> list[FinalStanding]:
        return sort_final_standings(self.standings, view)

    def to_dict(self, view: str = "final") -> dict[str, Any]:
        return {
            "view": view,
            "title": VIEW_TITLES[view],
            "highest_technical_total": self.highest_technical_total,
            "standings": [s.to_dict() for s in self.sorted(view)],
        }


VIEW_TITLES: dict[str, str] = {
    "final": "Final Rankings",
    "technical": "Technical Rankings (Combined)",
    "performance": "Performance Rankings (Average)",
    "tech1": "Technical Judge 1 Rankings",
    "tech2": "Technical Judge 2 Rankings",
    "tech3": "Technical Judge 3 Rankings",
    "perf1": "Performance Judge 1 Rankings",
    "perf2": "Performance Judge 2 Rankings",
}

VIEW_SCORES: dict[str, Callable[[FinalStanding], float]] = {
    "final": lambda s: s.final_score,
    "technical": lambda s: s.normalized_technical,
    "performance": lambda s: s.average_performance,
    "tech1": lambda s: s.technical_scores[0],
    "tech2": lambda s: s.technical_scores[1],
    "tech3": lambda s: s.technical_scores[2],
    "perf1": lambda s: s.performance_scores[0],
    "perf2": lambda s: s.performance_scores[1],
}

MAX_FINAL_SCORE = TECHNICAL_CEILING + PERFORMANCE_CEILING


def calculate_final_rankings(assignments: list[JudgeAssignment]) -> FinalRankings:
    """Compute every entrant's final score, keeping input order.

    The technical component is normalized against the highest combined
    technical total among non-disqualified entrants.
    """
    highest = highest_combined_technical_total(assignments)
    standings = []
    for a in assignments:
        result = final_ranking_score(
            a.tech1, a.tech2, a.tech3, a.perf1, a.perf2, highest, a.is_disqualified
        )
        if a.is_disqualified:
            technical, performance = (0.0, 0.0, 0.0), (0.0, 0.0)
        else:
            technical, performance = (a.tech1, a.tech2, a.tech3), (a.perf1, a.perf2)
        standings.append(FinalStanding(
            name=a.competitor_name,
            technical_scores=technical,
            performance_scores=performance,
            normalized_technical=result.normalized_technical,
            average_performance=result.average_performance,
            final_score=result.final_score,
            is_disqualified=a.is_disqualified,
        ))

    return FinalRankings(
        standings=standings,
        highest_technical_total=highest,
        details={
            "technical_ceiling": TECHNICAL_CEILING,
            "performance_ceiling": PERFORMANCE_CEILING,
            "max_score": MAX_FINAL_SCORE,
        },
    )


def sort_final_standings(standings: list[FinalStanding], view: str = "final") -> list[FinalStanding]:
    """Sort standings for a view; disqualified entrants always come last."""
    try:
        selector = VIEW_SCORES[view]
    except KeyError:
        raise ValueError(f"Unknown final ranking view: {view!r}") from None
    return rank_entries(standings, selector)


# --- Assignment list operations ---


def add_assignment(assignments: list[JudgeAssignment], competitor_name: str) -> list[JudgeAssignment]:
    """Add an entrant with all scores at 0. Blank or duplicate names are ignored."""
    name = competitor_name.strip()
    if not name:
        logger.debug("Ignoring blank competitor name")
        return list(assignments)
    if any(a.competitor_name == name for a in assignments):
        logger.info("Competitor %r is already in the final rankings", name)
        return list(assignments)
    return [*assignments, JudgeAssignment(competitor_name=name)]


def update_assignment(
    assignments: list[JudgeAssignment], competitor_name: str, **changes: Any
) -> list[JudgeAssignment]:
    """Update score fields or the disqualification flag of one entrant."""
    unknown = set(changes) - set(SCORE_FIELDS) - {"is_disqualified"}
    if unknown:
        raise ValueError(f"Unknown assignment fields: {sorted(unknown)}")
    if not any(a.competitor_name == competitor_name for a in assignments):
        raise ValueError(f"No final ranking entry for {competitor_name!r}")
    return [
        replace(a, **changes) if a.competitor_name == competitor_name else a
        for a in assignments
    ]


def remove_assignment(assignments: list[JudgeAssignment], competitor_name: str) -> list[JudgeAssignment]:
    return [a for a in assignments if a.competitor_name != competitor_name]


def clear_assignment_scores(assignments: list[JudgeAssignment]) -> list[JudgeAssignment]:
    """Reset every score and disqualification flag, keeping the entrants."""
    return [JudgeAssignment(competitor_name=a.competitor_name) for a in assignments]
