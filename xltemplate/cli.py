"""Typer based command line entry points for xltemplate."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from xltemplate.config import load_template
from xltemplate.core.errors import XLTemplateError
from xltemplate.core.logger import get_logger
from xltemplate.core.session import Session
from xltemplate.services.template_extraction import (
    check,
    export_record,
    extract,
    record_to_json,
    write_report,
)

app = typer.Typer(help="Validate filled-in Excel templates and extract their variables.")


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    logger = get_logger()

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")

    logger.setLevel(level_value)


def _fail(session: Session, exc: XLTemplateError, report: Optional[Path], workbook: Path) -> None:
    if report is not None:
        write_report(report, session, str(workbook))
    typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
    for violation in getattr(exc, "violations", ()):
        typer.secho(f"  - {violation}", err=True)
    raise typer.Exit(code=1)


@app.command("extract")
def cli_extract(
    workbook: Path = typer.Argument(..., help="Filled-in workbook to validate", resolve_path=True),
    template: Path = typer.Option(
        ..., "--template", "-t", help="Template definition YAML", exists=True, readable=True, resolve_path=True
    ),
    json_out: Optional[Path] = typer.Option(None, "--json", help="Write extracted variables as JSON"),
    xlsx_out: Optional[Path] = typer.Option(None, "--xlsx", help="Write extracted variables to a workbook"),
    report: Optional[Path] = typer.Option(None, "--report", help="Write a Markdown report of the run"),
) -> None:
    """Check template integrity and extract the declared variables."""

    session = Session()
    try:
        definition = load_template(template)
        record = extract(workbook, definition, session=session)
    except XLTemplateError as exc:
        _fail(session, exc, report, workbook)
        return

    payload = record_to_json(record)
    if json_out is not None:
        json_out.parent.mkdir(parents=True, exist_ok=True)
        json_out.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        typer.echo(f"JSON: {json_out}")
    if xlsx_out is not None:
        export_record(record, xlsx_out)
        typer.echo(f"Workbook: {xlsx_out}")
    if report is not None:
        write_report(report, session, str(workbook), record)
        typer.echo(f"Report: {report}")
    if json_out is None and xlsx_out is None:
        typer.echo(json.dumps(payload, ensure_ascii=False))

    typer.echo(f"Extracted variables: {len(record)}")
    if session.warnings:
        typer.echo(f"Warnings: {len(session.warnings)}")


@app.command("check")
def cli_check(
    workbook: Path = typer.Argument(..., help="Filled-in workbook to validate", resolve_path=True),
    template: Path = typer.Option(
        ..., "--template", "-t", help="Template definition YAML", exists=True, readable=True, resolve_path=True
    ),
    report: Optional[Path] = typer.Option(None, "--report", help="Write a Markdown report of the run"),
) -> None:
    """Only verify that the fixed parts of the template are intact."""

    session = Session()
    try:
        definition = load_template(template)
        sheets = check(workbook, definition, session=session)
    except XLTemplateError as exc:
        _fail(session, exc, report, workbook)
        return

    if report is not None:
        write_report(report, session, str(workbook))
    typer.echo(f"Template intact ({len(sheets)} sheet(s) checked)")


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
