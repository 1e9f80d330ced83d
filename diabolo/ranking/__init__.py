"""Ranking views for saved competitor results."""

from .base import RankingView

# Ranking view registry - import views here to register them
_ranking_views: list[type[RankingView]] = []


def register_ranking_view(view_class: type[RankingView]) -> type[RankingView]:
    """Decorator to register a ranking view class."""
    _ranking_views.append(view_class)
    return view_class


def get_all_ranking_views() -> list[RankingView]:
    """Return instances of all registered ranking views."""
    return [view_class() for view_class in _ranking_views]


def get_ranking_view(category: str) -> RankingView:
    """Return the registered ranking view for a judging category."""
    for view_class in _ranking_views:
        view = view_class()
        if view.category == category:
            return view
    raise ValueError(f"No ranking view registered for category: {category!r}")
