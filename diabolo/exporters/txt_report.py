"""Plain-text exporter with fixed-width columns."""

from diabolo.exporters import register_exporter
from diabolo.exporters.base import ReportExporter, ReportTable

COLUMN_SEPARATOR = " | "


@register_exporter
class TxtExporter(ReportExporter):
    """Pads every column to its widest cell; numeric columns are right-aligned."""

    @property
    def format(self) -> str:
        return "txt"

    @property
    def mime_type(self) -> str:
        return "text/plain;charset=utf-8"

    def render(self, table: ReportTable) -> str:
        all_rows = [table.headers, *table.rows, *table.footer]
        widths = [
            max(len(row[i]) for row in all_rows if i < len(row))
            for i in range(len(table.headers))
        ]

        lines = list(table.title_lines)
        lines.append("")
        lines.append(self._line(table.headers, widths, set()))
        lines.append("-" * (sum(widths) + len(COLUMN_SEPARATOR) * (len(widths) - 1)))
        lines.extend(self._line(row, widths, table.right_aligned) for row in table.rows)
        if table.footer:
            lines.append("")
            lines.extend(self._line(row, widths, table.right_aligned) for row in table.footer)
        return "\n".join(lines) + "\n"

    @staticmethod
    def _line(row: list[str], widths: list[int], right_aligned: set[int]) -> str:
        cells = [
            cell.rjust(width) if i in right_aligned else cell.ljust(width)
            for i, (cell, width) in enumerate(zip(row, widths))
        ]
        return COLUMN_SEPARATOR.join(cells).rstrip()
