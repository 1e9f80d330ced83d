"""Write ranking reports from the saved competitors in a data directory.

Writes the technical and performance rankings (ranked and submission order)
and, when final-ranking assignments are saved, every final ranking view.

Usage:
    python scripts/export_rankings.py
    python scripts/export_rankings.py --data-dir .diabolo -o reports --format txt
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

# Import ranking views and exporters to register them
from diabolo.ranking import technical  # noqa: F401
from diabolo.ranking import performance  # noqa: F401
from diabolo.exporters import csv_report  # noqa: F401
from diabolo.exporters import txt_report  # noqa: F401

from diabolo.config import configure_logging, load_settings
from diabolo.exporters import get_exporter
from diabolo.exporters.base import report_filename
from diabolo.ranking import get_all_ranking_views
from diabolo.ranking.final import VIEW_TITLES, calculate_final_rankings
from diabolo.store import CompetitorRepository, JsonFileStore


def export_reports(repository: CompetitorRepository, output_dir: Path, format: str) -> list[Path]:
    """Write every report for the saved data and return the written paths."""
    exporter = get_exporter(format)
    generated_at = datetime.now()
    written = []

    competitors = repository.load_competitors()
    for view in get_all_ranking_views():
        for suffix, result in (
            ("_ranked", view.rank(competitors)),
            ("_submission_order", view.submission_order(competitors)),
        ):
            path = output_dir / report_filename(view.name, exporter.format, suffix)
            path.write_text(exporter.ranking_report(result, generated_at), encoding="utf-8")
            written.append(path)

    assignments = repository.load_assignments()
    if assignments:
        rankings = calculate_final_rankings(assignments)
        for view, title in VIEW_TITLES.items():
            path = output_dir / report_filename(title, exporter.format, "_ranked")
            path.write_text(
                exporter.final_ranking_report(rankings, view, generated_at),
                encoding="utf-8",
            )
            written.append(path)

    return written


def main():
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Export diabolo ranking reports")
    parser.add_argument("--data-dir", default=str(settings.data_dir),
                        help=f"Directory with saved data (default: {settings.data_dir})")
    parser.add_argument("-o", "--output", default="reports",
                        help="Directory to write reports to (default: reports)")
    parser.add_argument("--format", default="csv", choices=["csv", "txt"],
                        help="Report format (default: csv)")
    args = parser.parse_args()

    configure_logging(settings.log_level)

    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    repository = CompetitorRepository(JsonFileStore(args.data_dir))
    written = export_reports(repository, output_dir, args.format)
    for path in written:
        print(f"Written to {path}")


if __name__ == "__main__":
    main()
