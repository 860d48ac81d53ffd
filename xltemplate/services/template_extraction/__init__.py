"""Template extraction service package."""

from .api import check, extract
from .cache import SheetCache, SheetCacheError
from .coords import Coordinate, column_letters, coord_to_point, range_size, range_to_points
from .exporter import export_record, record_to_json
from .extractor import NO_VALUE_SENTINELS, retrieve_variables
from .integrity import check_template_integrity, ranges_equal
from .models import MISSING, ExtractedRecord, FixedSpec, TemplateDefinition, VariableSpec
from .reader import read_sheet
from .report import render_report, write_report

__all__ = [
    "MISSING",
    "NO_VALUE_SENTINELS",
    "Coordinate",
    "ExtractedRecord",
    "FixedSpec",
    "SheetCache",
    "SheetCacheError",
    "TemplateDefinition",
    "VariableSpec",
    "check",
    "check_template_integrity",
    "column_letters",
    "coord_to_point",
    "export_record",
    "extract",
    "range_size",
    "range_to_points",
    "ranges_equal",
    "read_sheet",
    "record_to_json",
    "render_report",
    "retrieve_variables",
    "write_report",
]
