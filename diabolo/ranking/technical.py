"""Technical ranking view: totals rescaled against the best technical total."""

from diabolo.models import JudgeCategory, SavedCompetitor
from diabolo.ranking import register_ranking_view
from diabolo.ranking.base import RankingView
from diabolo.ranking.totals import TECHNICAL_CEILING, adjusted_score, highest_technical_total


@register_ranking_view
class TechnicalRankingView(RankingView):
    """Ranks technical competitors by adjusted technical score.

    Each competitor's technical total is divided by the highest technical
    total among non-disqualified technical competitors and multiplied by 70,
    so the best competitor always gets 70 points. Disqualified competitors
    score 0 and are ranked last.
    """

    @property
    def name(self) -> str:
        return "Technical Rankings"

    @property
    def category(self) -> JudgeCategory:
        return "technical"

    @property
    def description(self) -> str:
        return f"Ranked by adjusted technical scores (out of {TECHNICAL_CEILING:g} points)"

    def score(self, competitor: SavedCompetitor, competitors: list[SavedCompetitor]) -> float:
        return self._adjusted(competitor, highest_technical_total(competitors))

    def score_entries(
        self, entries: list[SavedCompetitor], competitors: list[SavedCompetitor]
    ) -> list[float]:
        highest = highest_technical_total(competitors)
        return [self._adjusted(c, highest) for c in entries]

    @staticmethod
    def _adjusted(competitor: SavedCompetitor, highest: float) -> float:
        if competitor.is_disqualified:
            return 0.0
        return adjusted_score(competitor.raw_total, highest)

    def details(self, competitors: list[SavedCompetitor]) -> dict:
        return {
            "highest_total": highest_technical_total(competitors),
            "ceiling": TECHNICAL_CEILING,
        }
