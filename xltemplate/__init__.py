"""`xltemplate` validates filled-in Excel templates and extracts their typed variables."""

from __future__ import annotations

from .config import load_template
from .core.errors import (
    ConfigError,
    TemplateConfigError,
    TemplateExtractionError,
    WorkbookReadError,
    XLTemplateError,
)
from .core.session import Session, SessionEvent
from .services.template_extraction import ExtractedRecord, TemplateDefinition, check, extract

__all__ = [
    "ConfigError",
    "ExtractedRecord",
    "Session",
    "SessionEvent",
    "TemplateConfigError",
    "TemplateDefinition",
    "TemplateExtractionError",
    "WorkbookReadError",
    "XLTemplateError",
    "check",
    "extract",
    "load_template",
]

__version__ = "0.1.0"
