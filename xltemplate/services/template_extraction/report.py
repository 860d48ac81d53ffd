"""Reporting utilities for template extraction."""

from __future__ import annotations

from pathlib import Path

from xltemplate.core.session import ERROR, SUCCESS, WARNING, Session

from .models import ExtractedRecord

_SECTIONS = (
    (ERROR, "Fatal"),
    (WARNING, "Warnings"),
    (SUCCESS, "Checks passed"),
)


def render_report(session: Session, source: str, record: ExtractedRecord | None = None) -> str:
    """Render session events (and extracted shapes when available) as Markdown."""

    lines = ["# Template Extraction Report", ""]
    lines.append(f"- Workbook: `{source}`")
    lines.append(f"- Status: {'failed' if session.errors else 'ok'}")
    lines.append(f"- Warnings: {len(session.warnings)}")
    lines.append("")

    for level, title in _SECTIONS:
        events = [event for event in session.events if event.level == level]
        if not events:
            continue
        lines.append(f"## {title}")
        for event in events:
            lines.append(f"- **{event.code}**: {event.message}")
        lines.append("")

    if record:
        lines.append("## Variables")
        lines.append("| name | rows | cols | missing |")
        lines.append("|---|---|---|---|")
        for name, grid in record.items():
            rows, cols = grid.shape
            lines.append(f"| {name} | {rows} | {cols} | {int(grid.isna().sum().sum())} |")
        lines.append("")

    return "\n".join(lines)


def write_report(
    output_path: Path,
    session: Session,
    source: str,
    record: ExtractedRecord | None = None,
) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_report(session, source, record), encoding="utf-8")
    return output_path


__all__ = ["render_report", "write_report"]
