"""Abstract base class for report exporters, and the report tables they render."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime

from diabolo.models import RankingResult, ScoreRecord, format_score
from diabolo.ranking.final import VIEW_TITLES, FinalRankings, FinalStanding
from diabolo.ranking.totals import PERFORMANCE_CEILING, TECHNICAL_CEILING, aggregate_technical_total


@dataclass
class ReportTable:
    """Format-independent content of a report.

    Attributes:
        title_lines: Lines printed above the table
        headers: Column headers
        rows: Table rows, already formatted as strings
        footer: Rows printed after the table (e.g. totals)
        right_aligned: Indexes of numeric columns
    """
    title_lines: list[str]
    headers: list[str]
    rows: list[list[str]]
    footer: list[list[str]] = field(default_factory=list)
    right_aligned: set[int] = field(default_factory=set)


class ReportExporter(ABC):
    """Abstract base class for report exporters.

    Subclasses only decide how a ReportTable is written out; which columns a
    report has is shared by every format. Exporters are registered via the
    @register_exporter decorator in diabolo/exporters/__init__.py.
    """

    @property
    @abstractmethod
    def format(self) -> str:
        """File extension of this format, e.g. "csv"."""
        pass

    @property
    @abstractmethod
    def mime_type(self) -> str:
        pass

    @abstractmethod
    def render(self, table: ReportTable) -> str:
        """Render a report table as text in this format."""
        pass

    def competitor_sheet(self, competitor_name: str, judge_name: str, records: list[ScoreRecord]) -> str:
        return self.render(competitor_sheet_table(competitor_name, judge_name, records))

    def ranking_report(self, result: RankingResult, generated_at: datetime) -> str:
        return self.render(ranking_table(result, generated_at))

    def final_ranking_report(
        self,
        rankings: FinalRankings,
        view: str,
        generated_at: datetime,
        input_order: bool = False,
    ) -> str:
        return self.render(final_ranking_table(rankings, view, generated_at, input_order))


def report_filename(title: str, format: str, suffix: str = "") -> str:
    """Build a file name from a report title, e.g. "final_rankings_ranked.csv"."""
    slug = re.sub(r"\s+", "_", title.strip().lower())
    slug = re.sub(r"[^\w.-]", "", slug) or "scores"
    return f"{slug}{suffix}.{format}"


def format_timestamp(value: datetime | str) -> str:
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    return value.strftime("%Y-%m-%d %H:%M")


def _signed(grade: int) -> str:
    return f"+{grade}" if grade >= 0 else str(grade)


# --- Competitor score sheet ---


def competitor_sheet_table(competitor_name: str, judge_name: str, records: list[ScoreRecord]) -> ReportTable:
    total = aggregate_technical_total(records)
    rows = []
    for i, r in enumerate(records, start=1):
        rows.append([
            str(i),
            r.identifier,
            r.trick,
            r.difficulty,
            format_score(r.base_score),
            ", ".join(f.abbrev for f in r.features),
            "" if r.is_deduction_only else _signed(r.execution_grade),
            "" if r.level is None else str(r.level),
            format_score(r.final_score),
        ])
    headers = ["#", "Identifier", "Trick", "Difficulty", "Base", "Features", "Execution", "Level", "Final"]
    return ReportTable(
        title_lines=[
            f"Competitor: {competitor_name}",
            f"Judge: {judge_name}",
            f"Total: {format_score(total)}",
        ],
        headers=headers,
        rows=rows,
        footer=[["Total"] + [""] * (len(headers) - 2) + [format_score(total)]],
        right_aligned={0, 4, 8},
    )


# --- Single-category rankings ---


def ranking_table(result: RankingResult, generated_at: datetime) -> ReportTable:
    by_rank = result.ordered_by == "rank"
    rows = []
    for s in result.standings:
        if s.is_disqualified:
            score = "DQ"
        elif result.category == "performance":
            score = f"{format_score(s.score)}/{PERFORMANCE_CEILING:.1f}"
        else:
            score = format_score(s.score)
        rows.append([
            s.rank_label if by_rank else str(s.position),
            s.name,
            s.judge_name,
            score,
            "Disqualified" if s.is_disqualified else "Qualified",
            format_timestamp(s.submitted_at) if s.submitted_at else "",
        ])
    return ReportTable(
        title_lines=[
            result.view_name,
            "Ordered by Rank (1st to Last)" if by_rank else "Ordered by Submission Time",
            f"Generated: {format_timestamp(generated_at)}",
        ],
        headers=["Rank" if by_rank else "Submission Order", "Competitor", "Judge", "Score", "Status", "Submitted At"],
        rows=rows,
        right_aligned={0, 3},
    )


# --- Multi-judge final rankings ---


def _formula_lines(view: str, highest: float) -> list[str]:
    highest_text = format_score(highest)
    if view == "final":
        return [
            f"Scoring Formula: ((Tech1 + Tech2 + Tech3) / Highest Tech Total) × {TECHNICAL_CEILING:g}"
            " + (Perf1 + Perf2) ÷ 2",
            f"Technical Max: {TECHNICAL_CEILING:g} points (normalized from highest total: {highest_text})",
            f"Performance Max: {PERFORMANCE_CEILING:g} points (average of two judges)",
            f"Final Score Max: {TECHNICAL_CEILING + PERFORMANCE_CEILING:g} points",
            "Disqualified competitors: 0 points, ranked last",
        ]
    if view == "technical":
        return [
            f"Formula: ((Tech1 + Tech2 + Tech3) / Highest Tech Total) × {TECHNICAL_CEILING:g}",
            f"Highest Technical Total: {highest_text}",
            f"Max Technical Score: {TECHNICAL_CEILING:g} points (normalized)",
        ]
    if view == "performance":
        return [
            "Formula: (Perf1 + Perf2) ÷ 2",
            f"Max Performance Score: {PERFORMANCE_CEILING:g} points (average of two judges)",
        ]
    return ["Individual Judge Rankings"]


FINAL_HEADERS: dict[str, list[str]] = {
    "final": ["Tech1", "Tech2", "Tech3", "TechTotal", "TechNorm", "Perf1", "Perf2", "PerfAvg", "Final"],
    "technical": ["Tech1", "Tech2", "Tech3", "TechTotal", "TechNorm"],
    "performance": ["Perf1", "Perf2", "PerfAvg"],
    "tech1": ["Score"],
    "tech2": ["Score"],
    "tech3": ["Score"],
    "perf1": ["Score"],
    "perf2": ["Score"],
}


def _final_values(view: str, s: FinalStanding) -> list[str]:
    technical = [format_score(v) for v in s.technical_scores]
    performance = [format_score(v) for v in s.performance_scores]
    technical_part = technical + [format_score(s.technical_total), format_score(s.normalized_technical)]
    performance_part = performance + [format_score(s.average_performance)]
    if view == "final":
        return technical_part + performance_part + [format_score(s.final_score)]
    if view == "technical":
        return technical_part
    if view == "performance":
        return performance_part
    judge_scores = dict(zip(("tech1", "tech2", "tech3"), technical))
    judge_scores.update(zip(("perf1", "perf2"), performance))
    return [judge_scores[view]]


def final_ranking_table(
    rankings: FinalRankings, view: str, generated_at: datetime, input_order: bool = False
) -> ReportTable:
    if view not in VIEW_TITLES:
        raise ValueError(f"Unknown final ranking view: {view!r}")
    standings = rankings.standings if input_order else rankings.sorted(view)

    headers = ["Pos" if input_order else "Rank", "Competitor", *FINAL_HEADERS[view], "Status"]
    rows = [
        ["DQ" if s.is_disqualified else str(position), s.name]
        + _final_values(view, s)
        + ["DQ" if s.is_disqualified else "OK"]
        for position, s in enumerate(standings, start=1)
    ]

    order_label = "Input Order" if input_order else "Ranked Order"
    return ReportTable(
        title_lines=[
            f"{VIEW_TITLES[view]} - {order_label}",
            f"Generated: {format_timestamp(generated_at)}",
            *_formula_lines(view, rankings.highest_technical_total),
        ],
        headers=headers,
        rows=rows,
        right_aligned=set(range(2, len(headers) - 1)),
    )
