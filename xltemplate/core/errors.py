"""Custom exceptions used across xltemplate."""

from __future__ import annotations

from typing import Sequence


class XLTemplateError(Exception):
    """Base error for the application."""


class ConfigError(XLTemplateError):
    """Configuration related error."""


class WorkbookReadError(XLTemplateError):
    """Raised when a workbook or one of its sheets cannot be opened."""


class TemplateExtractionError(XLTemplateError):
    """Fatal outcome of a template check or extraction.

    Carries the reporting ``component``/``code`` pair and, for aggregated
    failures, the warning messages collected before the fatal report.
    """

    code = "TemplateExtraction"

    def __init__(
        self,
        message: str,
        *,
        component: str = "TemplateExtraction",
        violations: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.component = component
        self.violations = tuple(violations)


class TemplateConfigError(TemplateExtractionError):
    """The template definition or its blank asset is unusable."""


class MissingFileError(TemplateExtractionError):
    code = "MissingFile"


class MissingSheetsError(TemplateExtractionError):
    code = "MissingSheets"

    def __init__(self, message: str, *, sheets: Sequence[str] = (), **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.sheets = tuple(sheets)


class ModifiedTemplateError(TemplateExtractionError):
    code = "ModifiedTemplate"


class FailedExtractionError(TemplateExtractionError):
    code = "FailedExtraction"


class MissingTemplateFileError(TemplateConfigError):
    code = "MissingTemplateFile"


class MissingTemplateSheetError(TemplateConfigError):
    code = "MissingTemplateSheet"


class BadRangeError(TemplateConfigError):
    code = "BadRange"


class BadRangeTypeError(TemplateConfigError):
    code = "BadRangeType"


ERRORS_BY_CODE: dict[str, type[TemplateExtractionError]] = {
    cls.code: cls
    for cls in (
        MissingFileError,
        MissingSheetsError,
        ModifiedTemplateError,
        FailedExtractionError,
        MissingTemplateFileError,
        MissingTemplateSheetError,
        BadRangeError,
        BadRangeTypeError,
    )
}
