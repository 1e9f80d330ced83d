"""Selection state for one in-progress attempt and the toggle operations on it.

Every operation is a pure transition: it takes the current Selection and a
selection event and returns a new Selection. Unknown tricks, tiers, levels,
features, grades or deductions raise UnknownSelectionError.
"""

from dataclasses import dataclass, replace
from typing import Any, Self

from diabolo.models import DeductionDefinition, FeatureDefinition
from diabolo import rules
from diabolo.rules import TIME_VIOLATION


@dataclass(frozen=True)
class TrickChoice:
    """The trick and tier chosen for an attempt, with its base score."""
    name: str
    tier: str
    base_score: float


@dataclass(frozen=True)
class TrickAttempt:
    trick: TrickChoice
    level: int | None
    features: tuple[FeatureDefinition, ...]
    grade: int
    deductions: tuple[DeductionDefinition, ...]


@dataclass(frozen=True)
class DeductionOnlyAttempt:
    deductions: tuple[DeductionDefinition, ...]


Attempt = TrickAttempt | DeductionOnlyAttempt


@dataclass(frozen=True)
class Selection:
    """A judge's current choices for one attempt.

    Attributes:
        trick: Chosen trick and tier, or None
        level: Active level (1-5), or None
        features: Selected features in selection order
        grade: Execution grade (-3..+3), 0 means no adjustment
        deductions: Selected deductions in selection order
    """
    trick: TrickChoice | None = None
    level: int | None = None
    features: tuple[FeatureDefinition, ...] = ()
    grade: int = 0
    deductions: tuple[DeductionDefinition, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.trick is None and not self.deductions

    def has_deduction(self, name: str) -> bool:
        return any(d.name == name for d in self.deductions)

    def has_feature(self, name: str) -> bool:
        return any(f.name == name for f in self.features)

    def attempt(self) -> Attempt | None:
        """Return the attempt this selection describes, or None if it is empty.

        Without a trick, level, features and grade have no effect, so they are
        not carried into a DeductionOnlyAttempt.
        """
        if self.trick is not None:
            return TrickAttempt(
                trick=self.trick,
                level=self.level,
                features=self.features,
                grade=self.grade,
                deductions=self.deductions,
            )
        if self.deductions:
            return DeductionOnlyAttempt(deductions=self.deductions)
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build a Selection by replaying events from a plain dictionary.

        Expected keys (all optional): "trick", "tier", "level", "features",
        "grade", "deductions". Features and deductions are replayed in order,
        so the same exclusivity rules apply as for interactive selection.

        Raises:
            UnknownSelectionError: If any value is not in the rules, including
                a level or grade that is not an integer
        """
        selection = cls()
        for name in data.get("deductions", []):
            selection = toggle_deduction(selection, name)
        if data.get("trick") is not None:
            selection = select_trick(selection, data["trick"], data.get("tier", ""))
        if data.get("level") is not None:
            selection = toggle_level(selection, _as_int("level", data["level"]))
        for name in data.get("features", []):
            selection = toggle_feature(selection, name)
        if data.get("grade"):
            selection = set_execution_grade(selection, _as_int("execution grade", data["grade"]))
        return selection


def _as_int(label: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise rules.UnknownSelectionError(f"Unknown {label}: {value!r}") from None


def select_trick(selection: Selection, trick_name: str, tier: str) -> Selection:
    """Select a trick at a tier, or clear it if the same trick and tier are selected.

    A pending Time Violation deduction is left in place. The exclusivity is
    one-way: only toggle_deduction clears the trick.
    """
    if (
        selection.trick is not None
        and selection.trick.name == trick_name
        and selection.trick.tier == tier
    ):
        return replace(selection, trick=None)

    choice = TrickChoice(trick_name, tier, rules.base_score(trick_name, tier))
    return replace(selection, trick=choice)


toggle_trick = select_trick


def toggle_deduction(selection: Selection, deduction_name: str) -> Selection:
    """Add or remove a deduction.

    Adding Time Violation while a trick is selected first clears the trick,
    level, features and execution grade.
    """
    deduction = rules.get_deduction(deduction_name)
    if selection.has_deduction(deduction.name):
        return replace(
            selection,
            deductions=tuple(d for d in selection.deductions if d.name != deduction.name),
        )

    if deduction.name == TIME_VIOLATION and selection.trick is not None:
        selection = replace(selection, trick=None, level=None, features=(), grade=0)
    return replace(selection, deductions=selection.deductions + (deduction,))


def toggle_feature(selection: Selection, feature_name: str) -> Selection:
    """Toggle a feature. At most one turn feature can be selected at a time."""
    feature = rules.get_feature(feature_name)
    if feature.is_turn:
        others = tuple(f for f in selection.features if not f.is_turn)
        if selection.has_feature(feature.name):
            return replace(selection, features=others)
        return replace(selection, features=others + (feature,))

    if selection.has_feature(feature.name):
        return replace(
            selection,
            features=tuple(f for f in selection.features if f.name != feature.name),
        )
    return replace(selection, features=selection.features + (feature,))


def toggle_level(selection: Selection, level: int) -> Selection:
    rules.level_factor(level)
    if selection.level == level:
        return replace(selection, level=None)
    return replace(selection, level=level)


def set_execution_grade(selection: Selection, grade: int) -> Selection:
    rules.execution_factor(grade)
    return replace(selection, grade=grade)
