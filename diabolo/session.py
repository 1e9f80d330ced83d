"""Judging session: one judge's in-progress state for one competitor.

The session owns the current Selection and the list of submitted attempts. It
applies the pure selection and engine functions, and only touches storage when
finalize() or delete_competitor() is called with a repository.
"""

import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from diabolo import engine, selection as sel
from diabolo.models import JudgeCategory, PerformanceScores, SavedCompetitor, ScoreRecord
from diabolo.ranking.totals import aggregate_technical_total
from diabolo.selection import Selection
from diabolo.store import CompetitorRepository

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Error raised when a session action is not allowed in its current state."""
    pass


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class JudgingSession:
    """In-progress scoring for one competitor by one judge."""
    competitor_name: str = ""
    judge_name: str = ""
    judge_category: JudgeCategory = "technical"
    selection: Selection = field(default_factory=Selection)
    scores: list[ScoreRecord] = field(default_factory=list)
    performance_scores: PerformanceScores = field(default_factory=PerformanceScores)
    is_disqualified: bool = False
    editing: SavedCompetitor | None = None

    # --- Selection events ---

    def select_trick(self, trick_name: str, tier: str) -> None:
        self.selection = sel.select_trick(self.selection, trick_name, tier)

    def toggle_deduction(self, deduction_name: str) -> None:
        self.selection = sel.toggle_deduction(self.selection, deduction_name)

    def toggle_feature(self, feature_name: str) -> None:
        self.selection = sel.toggle_feature(self.selection, feature_name)

    def toggle_level(self, level: int) -> None:
        self.selection = sel.toggle_level(self.selection, level)

    def set_execution_grade(self, grade: int) -> None:
        self.selection = sel.set_execution_grade(self.selection, grade)

    def preview_score(self) -> float:
        return engine.compute_final_score(self.selection)

    # --- Attempts ---

    def submit_attempt(self) -> ScoreRecord:
        """Score the current selection, append it and start a fresh selection."""
        try:
            record, self.selection = engine.submit(self.selection)
        except engine.EmptySubmissionError as e:
            raise SessionError(str(e)) from e
        self.scores.append(record)
        logger.debug("Submitted %s = %r", record.identifier, record.final_score)
        return record

    def remove_score(self, score_id: str) -> ScoreRecord:
        for i, record in enumerate(self.scores):
            if record.id == score_id:
                return self.scores.pop(i)
        raise SessionError(f"No score with id {score_id!r}")

    @property
    def total_score(self) -> float:
        return aggregate_technical_total(self.scores)

    def set_performance_score(self, category: str, value: float) -> None:
        if self.is_disqualified:
            raise SessionError("Cannot change performance scores of a disqualified competitor")
        self.performance_scores = self.performance_scores.with_score(category, value)

    def reset(self) -> None:
        """Clear attempts, performance scores and the current selection."""
        self.scores = []
        self.selection = Selection()
        self.performance_scores = PerformanceScores()

    # --- Saved competitors ---

    def _validate(self) -> None:
        if not self.competitor_name.strip():
            raise SessionError("Enter a competitor name to save")
        if self.judge_category == "technical" and not self.scores:
            raise SessionError("No scores to save")
        if self.judge_category == "performance" and not self.judge_name.strip():
            raise SessionError("Enter a judge name to save")

    def to_saved_competitor(self, submitted_at: str | None = None) -> SavedCompetitor:
        self._validate()
        is_performance = self.judge_category == "performance"
        return SavedCompetitor(
            id=self.editing.id if self.editing else uuid.uuid4().hex,
            name=self.competitor_name.strip(),
            judge_name=self.judge_name.strip(),
            judge_category=self.judge_category,
            submitted_at=submitted_at or _now(),
            scores=[] if is_performance else list(self.scores),
            performance_scores=self.performance_scores if is_performance else None,
            is_disqualified=self.is_disqualified,
        )

    def finalize(self, repository: CompetitorRepository, submitted_at: str | None = None) -> SavedCompetitor:
        """Save the competitor (replacing the record being edited) and clear the session.

        The judge name and category are kept for the next competitor.
        """
        competitor = self.to_saved_competitor(submitted_at)
        competitors = repository.load_competitors()
        if self.editing is not None:
            competitors = [competitor if c.id == competitor.id else c for c in competitors]
            logger.info("Updated competitor %s (%s)", competitor.name, competitor.id)
        else:
            competitors.append(competitor)
            logger.info("Saved competitor %s (%s)", competitor.name, competitor.id)
        repository.save_competitors(competitors)

        self._clear_competitor()
        return competitor

    def load_for_editing(self, competitor: SavedCompetitor) -> None:
        """Load a saved competitor's record into the session for editing."""
        self.editing = competitor
        self.competitor_name = competitor.name
        self.judge_name = competitor.judge_name
        self.judge_category = competitor.judge_category
        self.scores = list(competitor.scores)
        self.performance_scores = competitor.performance_scores or PerformanceScores()
        self.is_disqualified = competitor.is_disqualified
        self.selection = Selection()

    def cancel_edit(self) -> None:
        """Drop unsaved edits. The saved record is left untouched."""
        if self.editing is None:
            raise SessionError("Not editing a competitor")
        self._clear_competitor()

    def _clear_competitor(self) -> None:
        self.competitor_name = ""
        self.is_disqualified = False
        self.editing = None
        self.reset()


def delete_competitor(repository: CompetitorRepository, competitor_id: str) -> SavedCompetitor:
    competitors = repository.load_competitors()
    for competitor in competitors:
        if competitor.id == competitor_id:
            repository.save_competitors([c for c in competitors if c.id != competitor_id])
            logger.info("Deleted competitor %s (%s)", competitor.name, competitor_id)
            return competitor
    raise SessionError(f"No saved competitor with id {competitor_id!r}")


def set_disqualified(
    repository: CompetitorRepository, competitor_id: str, is_disqualified: bool
) -> SavedCompetitor:
    """Set or clear the disqualification flag of a saved competitor."""
    competitors = repository.load_competitors()
    for i, competitor in enumerate(competitors):
        if competitor.id == competitor_id:
            competitors[i] = replace(competitor, is_disqualified=is_disqualified)
            repository.save_competitors(competitors)
            return competitors[i]
    raise SessionError(f"No saved competitor with id {competitor_id!r}")
