"""Core data models for rule tables, scored attempts and competitor records."""

from dataclasses import dataclass, field, replace
from typing import Any, Literal, Self

JudgeCategory = Literal["technical", "performance"]

DEDUCTION_DIFFICULTY = "DEDUCTION"


def format_score(value: float) -> str:
    """Format a score for display: 3 decimal places, trailing zeros trimmed.

    >>> format_score(6.840000000000001)
    '6.84'
    >>> format_score(96.0)
    '96'
    """
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


@dataclass(frozen=True)
class TrickDefinition:
    """A trick from the catalog.

    Attributes:
        name: Full trick name, e.g. "Toss/High"
        abbrev: One-letter (or symbol) abbreviation used in identifiers
        scores: Mapping of difficulty tier ("1D".."4D", "VD") -> base score.
            A base score of 0 means the trick is not offered at that tier.
    """
    name: str
    abbrev: str
    scores: dict[str, float]


@dataclass(frozen=True)
class FeatureDefinition:
    """A stylistic modifier: either multiplicative (factor) or additive (points)."""
    name: str
    abbrev: str
    kind: str
    factor: float | None = None
    points: float | None = None

    def __post_init__(self):
        if (self.factor is None) == (self.points is None):
            raise ValueError(
                f"Feature {self.name!r} must define exactly one of factor or points"
            )

    @property
    def is_turn(self) -> bool:
        return self.kind == "turn"

    @property
    def is_multiplicative(self) -> bool:
        return self.factor is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "abbrev": self.abbrev, "kind": self.kind}
        if self.factor is not None:
            data["factor"] = self.factor
        else:
            data["points"] = self.points
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            name=data["name"],
            abbrev=data["abbrev"],
            kind=data["kind"],
            factor=data.get("factor"),
            points=data.get("points"),
        )


@dataclass(frozen=True)
class DeductionDefinition:
    """A fixed negative point penalty."""
    name: str
    abbrev: str
    points: float

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "abbrev": self.abbrev, "points": self.points}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(name=data["name"], abbrev=data["abbrev"], points=data["points"])


@dataclass(frozen=True)
class ScoreRecord:
    """A finalized attempt.

    Attributes:
        id: Unique identifier of the record
        trick: Trick name, or the joined deduction names for deduction-only attempts
        difficulty: Difficulty tier, or "DEDUCTION" for deduction-only attempts
        base_score: Base score of the trick (sum of deductions when deduction-only)
        features: Snapshot of applied features, in selection order
        execution_grade: Applied execution grade (-3..+3)
        level: Applied level, or None
        final_score: Computed final score (unrounded)
        description: Human-readable breakdown, e.g. "T(2D) ×L2 ×T1 ×E+1 +Drop"
        identifier: Compact code, e.g. "2TL2T1E+1Drop"
        deductions: Snapshot of applied deductions, in selection order
    """
    id: str
    trick: str
    difficulty: str
    base_score: float
    features: tuple[FeatureDefinition, ...]
    execution_grade: int
    level: int | None
    final_score: float
    description: str
    identifier: str
    deductions: tuple[DeductionDefinition, ...] = ()

    @property
    def is_deduction_only(self) -> bool:
        return self.difficulty == DEDUCTION_DIFFICULTY

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "trick": self.trick,
            "difficulty": self.difficulty,
            "base_score": self.base_score,
            "features": [f.to_dict() for f in self.features],
            "execution_grade": self.execution_grade,
            "level": self.level,
            "final_score": self.final_score,
            "description": self.description,
            "identifier": self.identifier,
            "deductions": [d.to_dict() for d in self.deductions],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=str(data["id"]),
            trick=data["trick"],
            difficulty=data["difficulty"],
            base_score=data["base_score"],
            features=tuple(FeatureDefinition.from_dict(f) for f in data.get("features", [])),
            execution_grade=data.get("execution_grade", 0),
            level=data.get("level"),
            final_score=data["final_score"],
            description=data.get("description", ""),
            identifier=data.get("identifier", ""),
            deductions=tuple(DeductionDefinition.from_dict(d) for d in data.get("deductions", [])),
        )


PERFORMANCE_CATEGORIES: tuple[str, ...] = (
    "control", "style", "space_usage", "choreography", "construction", "showmanship",
)

PERFORMANCE_CATEGORY_MAX = 5.0
PERFORMANCE_STEP = 0.5


@dataclass(frozen=True)
class PerformanceScores:
    """Scores from a performance judge, one per category, each 0..5 in 0.5 steps."""
    control: float = 0.0
    style: float = 0.0
    space_usage: float = 0.0
    choreography: float = 0.0
    construction: float = 0.0
    showmanship: float = 0.0

    @property
    def total(self) -> float:
        return sum(getattr(self, category) for category in PERFORMANCE_CATEGORIES)

    def with_score(self, category: str, value: float) -> Self:
        """Return a copy with one category set, validating the value."""
        if category not in PERFORMANCE_CATEGORIES:
            raise ValueError(f"Unknown performance category: {category!r}")
        if not 0 <= value <= PERFORMANCE_CATEGORY_MAX:
            raise ValueError(
                f"{category} score must be between 0 and {PERFORMANCE_CATEGORY_MAX:g}, got {value}"
            )
        if (value / PERFORMANCE_STEP) != int(value / PERFORMANCE_STEP):
            raise ValueError(f"{category} score must be a multiple of {PERFORMANCE_STEP}, got {value}")
        return replace(self, **{category: float(value)})

    def to_dict(self) -> dict[str, float]:
        return {category: getattr(self, category) for category in PERFORMANCE_CATEGORIES}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        scores = cls()
        for category in PERFORMANCE_CATEGORIES:
            if category in data:
                scores = scores.with_score(category, data[category])
        return scores


@dataclass
class SavedCompetitor:
    """A finalized competitor result submitted by one judge.

    A record belongs to exactly one judging category: technical records carry
    ScoreRecords, performance records carry PerformanceScores. Disqualification
    forces the reported total to 0 but keeps the underlying scores.
    """
    id: str
    name: str
    judge_name: str
    judge_category: JudgeCategory
    submitted_at: str
    scores: list[ScoreRecord] = field(default_factory=list)
    performance_scores: PerformanceScores | None = None
    is_disqualified: bool = False

    @property
    def raw_total(self) -> float:
        """Total before disqualification is applied."""
        if self.judge_category == "performance":
            return self.performance_scores.total if self.performance_scores else 0.0
        return sum(s.final_score for s in self.scores)

    @property
    def reported_total(self) -> float:
        return 0.0 if self.is_disqualified else self.raw_total

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "judge_name": self.judge_name,
            "judge_category": self.judge_category,
            "submitted_at": self.submitted_at,
            "scores": [s.to_dict() for s in self.scores],
            "performance_scores": (
                self.performance_scores.to_dict() if self.performance_scores else None
            ),
            "total_score": self.reported_total,
            "is_disqualified": self.is_disqualified,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        category = data.get("judge_category", "technical")
        if category not in ("technical", "performance"):
            raise ValueError(f"Unknown judge category: {category!r}")
        performance = data.get("performance_scores")
        return cls(
            id=str(data["id"]),
            name=data["name"],
            judge_name=data.get("judge_name", ""),
            judge_category=category,
            submitted_at=data["submitted_at"],
            scores=[ScoreRecord.from_dict(s) for s in data.get("scores", [])],
            performance_scores=PerformanceScores.from_dict(performance) if performance else None,
            is_disqualified=bool(data.get("is_disqualified", False)),
        )


@dataclass
class Standing:
    """A competitor's position in a ranking view.

    Attributes:
        name: Competitor name
        judge_name: Judge who submitted the record
        score: Score the view ranks by (0 when disqualified)
        rank: 1-indexed rank in the ranked view, or None for disqualified competitors
        position: 1-indexed position in the listing (rank or submission order)
        is_disqualified: Whether the competitor is disqualified
        submitted_at: ISO timestamp of submission
    """
    name: str
    judge_name: str
    score: float
    rank: int | None
    position: int
    is_disqualified: bool
    submitted_at: str = ""

    @property
    def rank_label(self) -> str:
        return "DQ" if self.rank is None else str(self.rank)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "judge_name": self.judge_name,
            "score": self.score,
            "rank": self.rank,
            "position": self.position,
            "is_disqualified": self.is_disqualified,
            "submitted_at": self.submitted_at,
        }


@dataclass
class RankingResult:
    """Result from a ranking view.

    Attributes:
        view_name: Human-readable name of the ranking view
        category: Judging category the view covers
        standings: Standings in listing order (ranked: disqualified competitors last)
        details: View-specific details (e.g. the normalization denominator)
        ordered_by: "rank" or "submission"
    """
    view_name: str
    category: JudgeCategory
    standings: list[Standing]
    details: dict[str, Any] = field(default_factory=dict)
    ordered_by: str = "rank"

    def get_rank(self, competitor: str) -> int | None:
        """Get the 1-indexed rank of a competitor, or None if absent or disqualified."""
        for s in self.standings:
            if s.name == competitor:
                return s.rank
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "view_name": self.view_name,
            "category": self.category,
            "ordered_by": self.ordered_by,
            "standings": [s.to_dict() for s in self.standings],
            "details": self.details,
        }
