"""Report exporters for competitor score sheets and rankings."""

from .base import ReportExporter

# Exporter registry - import exporters here to register them
_exporters: list[type[ReportExporter]] = []


def register_exporter(exporter_class: type[ReportExporter]) -> type[ReportExporter]:
    """Decorator to register an exporter class."""
    _exporters.append(exporter_class)
    return exporter_class


def get_all_exporters() -> list[type[ReportExporter]]:
    """Return all registered exporter classes."""
    return _exporters.copy()


def get_exporter(format: str) -> ReportExporter:
    """Return an exporter instance for a file format such as "csv" or "txt"."""
    for exporter_class in _exporters:
        exporter = exporter_class()
        if exporter.format == format.lower():
            return exporter
    supported = ", ".join(e().format for e in _exporters) or "none"
    raise ValueError(f"Unsupported export format: {format!r} (supported: {supported})")
