"""Competition rule tables: tricks, levels, features, execution grades, deductions."""

from diabolo.models import DeductionDefinition, FeatureDefinition, TrickDefinition


class UnknownSelectionError(ValueError):
    """Raised when a trick, tier, level, feature, grade or deduction is not in the rules."""
    pass


TIERS: tuple[str, ...] = ("1D", "2D", "3D", "4D", "VD")

TRICKS: tuple[TrickDefinition, ...] = (
    TrickDefinition("Shuffle", "#", {"1D": 0, "2D": 0.7, "3D": 6, "4D": 15, "VD": 0}),
    TrickDefinition("Toss/High", "T", {"1D": 0.1, "2D": 1, "3D": 6, "4D": 12, "VD": 0.2}),
    TrickDefinition("Orbit", "O", {"1D": 0.2, "2D": 1.2, "3D": 4, "4D": 8, "VD": 0.5}),
    TrickDefinition("Feed the sun", "F", {"1D": 0, "2D": 1.5, "3D": 5, "4D": 10, "VD": 0}),
    TrickDefinition("Swing/Sun", "S", {"1D": 0.1, "2D": 1, "3D": 6, "4D": 12, "VD": 0.2}),
    TrickDefinition("Whip", "W", {"1D": 0.2, "2D": 0, "3D": 0, "4D": 0, "VD": 0.4}),
    TrickDefinition("Stick Release/Gen", "R", {"1D": 0.4, "2D": 1.2, "3D": 6, "4D": 12, "VD": 1}),
)

LEVEL_FACTORS: dict[int, float] = {1: 2, 2: 4, 3: 6, 4: 8, 5: 10}

FEATURES: tuple[FeatureDefinition, ...] = (
    FeatureDefinition("Turn 360", "T1", "turn", factor=1.7),
    FeatureDefinition("Turn 720", "T2", "turn", factor=3.0),
    FeatureDefinition("Turn 1080", "T3", "turn", factor=5.0),
    FeatureDefinition("Acro", "A", "acro", points=0.2),
)

EXECUTION_FACTORS: dict[int, float] = {
    -3: 0.7,
    -2: 0.8,
    -1: 0.9,
    0: 1.0,
    1: 1.05,
    2: 1.1,
    3: 1.15,
}

TIME_VIOLATION = "Time Violation"

DEDUCTIONS: tuple[DeductionDefinition, ...] = (
    DeductionDefinition("Unintentional Drop", "Drop", -0.3),
    DeductionDefinition("Tangle", "Tang", -0.5),
    DeductionDefinition(TIME_VIOLATION, "Time", -2),
    DeductionDefinition("Other Rule Violations", "Other", -2),
)

PERFORMANCE_CATEGORY_LABELS: dict[str, str] = {
    "control": "Control",
    "style": "Style",
    "space_usage": "Space Usage",
    "choreography": "Choreography",
    "construction": "Construction",
    "showmanship": "Showmanship",
}

_TRICKS_BY_NAME = {t.name: t for t in TRICKS}
_FEATURES_BY_NAME = {f.name: f for f in FEATURES}
_DEDUCTIONS_BY_NAME = {d.name: d for d in DEDUCTIONS}


def get_trick(name: str) -> TrickDefinition:
    try:
        return _TRICKS_BY_NAME[name]
    except KeyError:
        raise UnknownSelectionError(f"Unknown trick: {name!r}") from None


def get_feature(name: str) -> FeatureDefinition:
    try:
        return _FEATURES_BY_NAME[name]
    except KeyError:
        raise UnknownSelectionError(f"Unknown feature: {name!r}") from None


def get_deduction(name: str) -> DeductionDefinition:
    try:
        return _DEDUCTIONS_BY_NAME[name]
    except KeyError:
        raise UnknownSelectionError(f"Unknown deduction: {name!r}") from None


def base_score(trick_name: str, tier: str) -> float:
    """Look up the base score of a trick at a tier.

    A zero entry marks a tier at which the trick is not offered, so it is
    rejected the same way as an unknown tier.
    """
    trick = get_trick(trick_name)
    if tier not in TIERS:
        raise UnknownSelectionError(f"Unknown difficulty tier: {tier!r}")
    score = trick.scores.get(tier, 0)
    if score == 0:
        raise UnknownSelectionError(f"{trick_name} is not offered at {tier}")
    return score


def offered_tiers(trick_name: str) -> list[str]:
    """Return the tiers at which a trick can be selected, in tier order."""
    trick = get_trick(trick_name)
    return [tier for tier in TIERS if trick.scores.get(tier, 0) != 0]


def level_factor(level: int) -> float:
    try:
        return LEVEL_FACTORS[level]
    except KeyError:
        raise UnknownSelectionError(f"Unknown level: {level!r}") from None


def execution_factor(grade: int) -> float:
    try:
        return EXECUTION_FACTORS[grade]
    except KeyError:
        raise UnknownSelectionError(f"Unknown execution grade: {grade!r}") from None
