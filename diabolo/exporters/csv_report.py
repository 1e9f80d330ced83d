"""CSV exporter (opens directly in spreadsheet applications)."""

import csv
import io

from diabolo.exporters import register_exporter
from diabolo.exporters.base import ReportExporter, ReportTable


@register_exporter
class CsvExporter(ReportExporter):
    """Writes title lines as single-cell rows, then the table, then the footer."""

    @property
    def format(self) -> str:
        return "csv"

    @property
    def mime_type(self) -> str:
        return "text/csv;charset=utf-8"

    def render(self, table: ReportTable) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        for line in table.title_lines:
            writer.writerow([line])
        writer.writerow([])
        writer.writerow(table.headers)
        writer.writerows(table.rows)
        if table.footer:
            writer.writerow([])
            writer.writerows(table.footer)
        return buffer.getvalue()
