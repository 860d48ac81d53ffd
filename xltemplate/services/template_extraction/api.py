"""Public API for the template extraction service."""

from __future__ import annotations

import logging
from pathlib import Path

from xltemplate.core.session import Session

from .cache import COMPONENT
from .extractor import retrieve_variables
from .integrity import check_template_integrity
from .models import ExtractedRecord, TemplateDefinition
from .reader import SheetReader

LOGGER = logging.getLogger(__name__)


def extract(
    file: str | Path,
    template: TemplateDefinition,
    session: Session | None = None,
    reader: SheetReader | None = None,
) -> ExtractedRecord:
    """Validate ``file`` against ``template`` and return its typed variables.

    Args:
        file: Filled-in workbook produced from the template's blank file.
        template: Template definition naming variables and fixed ranges.
        session: Event collector; a fresh one is used when omitted.
        reader: Sheet reader override, mainly for tests.

    Returns:
        Mapping of variable name to its value grid.

    Raises:
        TemplateExtractionError: Any fatal condition; the subclass names it.
    """

    session = session if session is not None else Session()
    path = Path(file)
    if not path.exists():
        session.error(COMPONENT, "MissingFile", "Could not find Excel file %s", path)
    session.succeed(COMPONENT, "FoundFile", "Found excel file %s", path)

    _, cache = check_template_integrity(path, template, session, reader=reader)
    record = retrieve_variables(template, cache, session)
    LOGGER.info("Extracted %d variable(s) from %s", len(record), path.name)
    return record


def check(
    file: str | Path,
    template: TemplateDefinition,
    session: Session | None = None,
    reader: SheetReader | None = None,
) -> list[str]:
    """Run only the integrity check; returns the sheets that were verified."""

    session = session if session is not None else Session()
    path = Path(file)
    if not path.exists():
        session.error(COMPONENT, "MissingFile", "Could not find Excel file %s", path)
    session.succeed(COMPONENT, "FoundFile", "Found excel file %s", path)
    sheets, _ = check_template_integrity(path, template, session, reader=reader)
    return sheets


__all__ = ["check", "extract"]
