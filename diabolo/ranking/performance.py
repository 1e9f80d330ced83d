"""Performance ranking view."""

from diabolo.models import JudgeCategory, SavedCompetitor
from diabolo.ranking import register_ranking_view
from diabolo.ranking.base import RankingView
from diabolo.ranking.totals import PERFORMANCE_CEILING


@register_ranking_view
class PerformanceRankingView(RankingView):
    """Ranks performance competitors by the sum of their six category scores."""

    @property
    def name(self) -> str:
        return "Performance Rankings"

    @property
    def category(self) -> JudgeCategory:
        return "performance"

    @property
    def description(self) -> str:
        return f"Ranked by performance scores (out of {PERFORMANCE_CEILING:g} points)"

    def score(self, competitor: SavedCompetitor, competitors: list[SavedCompetitor]) -> float:
        return competitor.reported_total

    def details(self, competitors: list[SavedCompetitor]) -> dict:
        return {"ceiling": PERFORMANCE_CEILING}
