"""Console rendering of embedding reports for the maintenance scripts."""

from __future__ import annotations

from worklog_chat.models.schemas import EmbeddingReport, EmbeddingStatus


def format_report(report: EmbeddingReport) -> list[str]:
    marker = "OK" if report.success else "FAILED"
    lines = [f"[{marker}] {report.message}"]
    if report.success:
        lines.append(f"  Files processed:    {report.files_processed}")
        lines.append(f"  Documents created:  {report.documents_processed}")
    lines.extend(f"  - {error}" for error in report.errors)
    return lines


def format_status(status: EmbeddingStatus) -> list[str]:
    lines = [
        f"  Index available:  {status.is_available}",
        f"  Index exists:     {status.collection_exists}",
    ]
    if status.document_count is not None:
        lines.append(f"  Chunks:           {status.document_count}")
        lines.append(f"  Sources:          {status.source_count}")
    if status.last_update is not None:
        lines.append(f"  Last update:      {status.last_update.isoformat()}")
    return lines


def print_report(report: EmbeddingReport) -> None:
    print("\n".join(format_report(report)))


def print_status(status: EmbeddingStatus) -> None:
    print("\n".join(format_status(status)))
