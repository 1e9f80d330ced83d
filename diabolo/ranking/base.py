"""Abstract base class for ranking views."""

from abc import ABC, abstractmethod

from diabolo.models import JudgeCategory, RankingResult, SavedCompetitor, Standing
from diabolo.ranking.totals import rank_entries


class RankingView(ABC):
    """Abstract base class for ranking views.

    Each view ranks the saved competitors of one judging category by its own
    score. Disqualified competitors always come last. Views are registered via
    the @register_ranking_view decorator in diabolo/ranking/__init__.py.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this ranking view."""
        pass

    @property
    @abstractmethod
    def category(self) -> JudgeCategory:
        """Judging category this view ranks."""
        pass

    @property
    def description(self) -> str:
        """Optional description of how this view scores competitors."""
        return ""

    def details(self, competitors: list[SavedCompetitor]) -> dict:
        """View-specific details to report alongside the standings."""
        return {}

    @abstractmethod
    def score(self, competitor: SavedCompetitor, competitors: list[SavedCompetitor]) -> float:
        """Score a single competitor in the context of all saved competitors.

        Args:
            competitor: The competitor to score
            competitors: Every saved competitor, across both categories

        Returns:
            The score to rank by (0 when disqualified)
        """
        pass

    def entries(self, competitors: list[SavedCompetitor]) -> list[SavedCompetitor]:
        return [c for c in competitors if c.judge_category == self.category]

    def score_entries(
        self, entries: list[SavedCompetitor], competitors: list[SavedCompetitor]
    ) -> list[float]:
        """Score every entry. Views override this to share work across entries."""
        return [self.score(c, competitors) for c in entries]

    def rank(self, competitors: list[SavedCompetitor]) -> RankingResult:
        """Rank this view's competitors from 1st to last."""
        return self._result(competitors, ordered_by="rank")

    def submission_order(self, competitors: list[SavedCompetitor]) -> RankingResult:
        """List this view's competitors in the order they were submitted.

        Each standing keeps the rank it has in the ranked view.
        """
        return self._result(competitors, ordered_by="submission")

    def _result(self, competitors: list[SavedCompetitor], ordered_by: str) -> RankingResult:
        entries = self.entries(competitors)
        scores = dict(zip(map(id, entries), self.score_entries(entries, competitors)))

        ranked = rank_entries(entries, lambda c: scores[id(c)])
        ranks = {
            id(c): (None if c.is_disqualified else position)
            for position, c in enumerate(ranked, start=1)
        }

        if ordered_by == "submission":
            ordered = sorted(entries, key=lambda c: c.submitted_at)
        else:
            ordered = ranked

        standings = [
            Standing(
                name=c.name,
                judge_name=c.judge_name,
                score=scores[id(c)],
                rank=ranks[id(c)],
                position=position,
                is_disqualified=c.is_disqualified,
                submitted_at=c.submitted_at,
            )
            for position, c in enumerate(ordered, start=1)
        ]
        return RankingResult(
            view_name=self.name,
            category=self.category,
            standings=standings,
            details=self.details(competitors),
            ordered_by=ordered_by,
        )
