"""Tests for the format-independent report tables."""

from datetime import datetime

import pytest

from diabolo.exporters import get_all_exporters, get_exporter
from diabolo.exporters.base import (
    competitor_sheet_table,
    final_ranking_table,
    format_timestamp,
    ranking_table,
    report_filename,
)
from diabolo.exporters.csv_report import CsvExporter
from diabolo.exporters.txt_report import TxtExporter


class TestHelpers:
    def test_report_filename(self):
        assert report_filename("Final Rankings", "csv") == "final_rankings.csv"
        assert report_filename("Technical Rankings (Combined)", "txt", "_ranked") == (
            "technical_rankings_combined_ranked.txt"
        )

    def test_report_filename_blank_title(self):
        assert report_filename("  ", "csv") == "scores.csv"

    def test_format_timestamp(self):
        assert format_timestamp(datetime(2025, 3, 1, 9, 5, 30)) == "2025-03-01 09:05"
        assert format_timestamp("2025-03-01T10:05:00+00:00") == "2025-03-01 10:05"

    def test_format_timestamp_keeps_unparseable_text(self):
        assert format_timestamp("yesterday") == "yesterday"


class TestRegistry:
    def test_exporters_registered(self):
        formats = {cls().format for cls in get_all_exporters()}
        assert {"csv", "txt"} <= formats

    def test_lookup(self):
        assert isinstance(get_exporter("CSV"), CsvExporter)
        assert isinstance(get_exporter("txt"), TxtExporter)

    def test_unsupported(self):
        with pytest.raises(ValueError, match="Unsupported export format"):
            get_exporter("pdf")


class TestCompetitorSheetTable:
    def test_rows(self, records):
        table = competitor_sheet_table("Alice", "Judge A", records)
        assert table.rows[0] == [
            "1", "2TL2T1E+1Drop", "Toss/High", "2D", "1", "T1", "+1", "2", "6.84",
        ]
        assert table.rows[1] == [
            "2", "Drop+Tang", "Unintentional Drop + Tangle", "DEDUCTION", "-0.8", "", "", "", "-0.8",
        ]

    def test_title_and_footer(self, records):
        table = competitor_sheet_table("Alice", "Judge A", records)
        assert table.title_lines == ["Competitor: Alice", "Judge: Judge A", "Total: 6.04"]
        assert table.footer == [["Total", "", "", "", "", "", "", "", "6.04"]]


class TestRankingTable:
    def test_ranked(self, technical_result, generated_at):
        table = ranking_table(technical_result, generated_at)
        assert table.title_lines == [
            "Technical Rankings",
            "Ordered by Rank (1st to Last)",
            "Generated: 2025-03-01 12:30",
        ]
        assert table.headers[0] == "Rank"
        assert table.rows == [
            ["1", "Bob", "Judge A", "70", "Qualified", "2025-03-01 10:05"],
            ["2", "Alice", "Judge A", "54.444", "Qualified", "2025-03-01 10:00"],
            ["DQ", "Cara", "Judge A", "DQ", "Disqualified", "2025-03-01 10:10"],
        ]

    def test_submission_order(self, performance_result, generated_at):
        table = ranking_table(performance_result, generated_at)
        assert table.headers[0] == "Submission Order"
        assert table.title_lines[1] == "Ordered by Submission Time"
        assert [row[:4] for row in table.rows] == [
            ["1", "Eve", "Judge P", "9.5/30.0"],
            ["2", "Gus", "Judge P", "3/30.0"],
        ]


class TestFinalRankingTable:
    def test_final_view(self, final_rankings, generated_at):
        table = final_ranking_table(final_rankings, "final", generated_at)
        assert table.headers == [
            "Rank", "Competitor", "Tech1", "Tech2", "Tech3", "TechTotal", "TechNorm",
            "Perf1", "Perf2", "PerfAvg", "Final", "Status",
        ]
        assert table.rows == [
            ["1", "Ana", "20", "25", "15", "60", "70", "26", "24", "25", "95", "OK"],
            ["2", "Ben", "10", "10", "10", "30", "35", "20", "22", "21", "56", "OK"],
            ["DQ", "Cy", "0", "0", "0", "0", "0", "0", "0", "0", "0", "DQ"],
        ]
        assert table.title_lines[0] == "Final Rankings - Ranked Order"
        assert "normalized from highest total: 60" in table.title_lines[3]

    def test_input_order(self, final_rankings, generated_at):
        table = final_ranking_table(final_rankings, "final", generated_at, input_order=True)
        assert table.headers[0] == "Pos"
        assert [row[1] for row in table.rows] == ["Ben", "Ana", "Cy"]
        assert table.title_lines[0] == "Final Rankings - Input Order"

    def test_single_judge_view(self, final_rankings, generated_at):
        table = final_ranking_table(final_rankings, "perf1", generated_at)
        assert table.headers == ["Rank", "Competitor", "Score", "Status"]
        assert table.rows[0] == ["1", "Ana", "26", "OK"]
        assert table.title_lines[2] == "Individual Judge Rankings"

    def test_performance_view(self, final_rankings, generated_at):
        table = final_ranking_table(final_rankings, "performance", generated_at)
        assert table.headers == ["Rank", "Competitor", "Perf1", "Perf2", "PerfAvg", "Status"]
        assert table.rows[1] == ["2", "Ben", "20", "22", "21", "OK"]

    def test_unknown_view(self, final_rankings, generated_at):
        with pytest.raises(ValueError):
            final_ranking_table(final_rankings, "overall", generated_at)
