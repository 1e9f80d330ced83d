"""Score engine: final score, identifier and description for an attempt.

Every step is applied in a fixed order:

    trick -> level -> features (in selection order) -> execution -> deductions

Deductions are additive and come last, so they are never scaled by a later
multiplicative step. No rounding happens here; see models.format_score for
display formatting.
"""

import re
import uuid

from diabolo import rules
from diabolo.models import DEDUCTION_DIFFICULTY, ScoreRecord, format_score
from diabolo.selection import DeductionOnlyAttempt, Selection, TrickAttempt

MULTIPLY = "×"

_LEADING_DIGITS = re.compile(r"^\d*")


class EmptySubmissionError(ValueError):
    """Raised when submitting a selection with no trick and no deductions."""
    pass


def compute_final_score(selection: Selection) -> float:
    """Compute the final score of an attempt. An empty selection scores 0."""
    attempt = selection.attempt()
    if attempt is None:
        return 0.0
    if isinstance(attempt, DeductionOnlyAttempt):
        return float(sum(d.points for d in attempt.deductions))
    return _score_trick_attempt(attempt)


def _score_trick_attempt(attempt: TrickAttempt) -> float:
    score = float(attempt.trick.base_score)
    if attempt.level is not None:
        score *= rules.level_factor(attempt.level)
    for feature in attempt.features:
        if feature.is_multiplicative:
            score *= feature.factor
        else:
            score += feature.points
    score *= rules.execution_factor(attempt.grade)
    for deduction in attempt.deductions:
        score += deduction.points
    return score


def tier_prefix(tier: str) -> str:
    """Return the numeric part of a tier label ("3D" -> "3", "VD" -> "")."""
    return _LEADING_DIGITS.match(tier).group(0)


def _signed(grade: int) -> str:
    return f"+{grade}" if grade >= 0 else str(grade)


def build_identifier(selection: Selection) -> str:
    """Build the compact identifier, e.g. "2TL2T1E+1Drop".

    Deduction-only attempts join deduction abbreviations with "+".
    """
    attempt = selection.attempt()
    if attempt is None:
        return ""
    if isinstance(attempt, DeductionOnlyAttempt):
        return "+".join(d.abbrev for d in attempt.deductions)

    trick = rules.get_trick(attempt.trick.name)
    parts = [tier_prefix(attempt.trick.tier), trick.abbrev]
    if attempt.level is not None:
        parts.append(f"L{attempt.level}")
    parts.extend(f.abbrev for f in attempt.features)
    if attempt.grade != 0:
        parts.append(f"E{_signed(attempt.grade)}")
    parts.extend(d.abbrev for d in attempt.deductions)
    return "".join(parts)


def build_description(selection: Selection) -> str:
    """Build the human-readable breakdown, e.g. "T(2D) ×L2 ×T1 ×E+1 +Drop".

    Multiplicative steps are prefixed with "×", additive steps with "+".
    Deduction-only attempts list each deduction with its point value.
    """
    attempt = selection.attempt()
    if attempt is None:
        return ""
    if isinstance(attempt, DeductionOnlyAttempt):
        return "+".join(f"{d.name}({format_score(d.points)})" for d in attempt.deductions)

    trick = rules.get_trick(attempt.trick.name)
    terms = [f"{trick.abbrev}({attempt.trick.tier})"]
    if attempt.level is not None:
        terms.append(f"{MULTIPLY}L{attempt.level}")
    for feature in attempt.features:
        operator = MULTIPLY if feature.is_multiplicative else "+"
        terms.append(f"{operator}{feature.abbrev}")
    if attempt.grade != 0:
        terms.append(f"{MULTIPLY}E{_signed(attempt.grade)}")
    terms.extend(f"+{d.abbrev}" for d in attempt.deductions)
    return " ".join(terms)


def submit(selection: Selection) -> tuple[ScoreRecord, Selection]:
    """Turn a selection into an immutable ScoreRecord and reset the selection.

    Raises:
        EmptySubmissionError: If neither a trick nor a deduction is selected
    """
    attempt = selection.attempt()
    if attempt is None:
        raise EmptySubmissionError("Select a trick or deduction first")

    final_score = compute_final_score(selection)
    record_id = uuid.uuid4().hex

    if isinstance(attempt, DeductionOnlyAttempt):
        record = ScoreRecord(
            id=record_id,
            trick=" + ".join(d.name for d in attempt.deductions),
            difficulty=DEDUCTION_DIFFICULTY,
            base_score=final_score,
            features=(),
            execution_grade=0,
            level=None,
            final_score=final_score,
            description=build_description(selection),
            identifier=build_identifier(selection),
            deductions=attempt.deductions,
        )
    else:
        record = ScoreRecord(
            id=record_id,
            trick=attempt.trick.name,
            difficulty=attempt.trick.tier,
            base_score=attempt.trick.base_score,
            features=attempt.features,
            execution_grade=attempt.grade,
            level=attempt.level,
            final_score=final_score,
            description=build_description(selection),
            identifier=build_identifier(selection),
            deductions=attempt.deductions,
        )

    return record, Selection()
