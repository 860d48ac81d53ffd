"""Typed variable extraction from a validated workbook."""

from __future__ import annotations

import logging
from typing import List

import pandas as pd

from xltemplate.core.errors import BadRangeError, TemplateConfigError
from xltemplate.core.session import Session

from .cache import COMPONENT, SheetCache
from .coords import range_size
from .models import MISSING, NUMBER, STRING, ExtractedRecord, TemplateDefinition, VariableSpec, is_missing, is_number

LOGGER = logging.getLogger(__name__)

# Text a numeric cell may hold instead of a number; each reads as missing.
NO_VALUE_SENTINELS = ("---", "#VALUE!", "#DIV/0!", "Overflow")


def _is_blank(value: object) -> bool:
    if is_missing(value):
        return True
    return isinstance(value, str) and value.strip() == ""


def _resize(raw: pd.DataFrame, rows: int, cols: int) -> pd.DataFrame:
    """Pad missing trailing rows, then missing trailing columns, with ``MISSING``."""

    df = raw
    if df.shape[0] < rows:
        df = df.reindex(index=range(rows), fill_value=MISSING)
    if df.shape[1] < cols:
        df = df.reindex(columns=range(cols), fill_value=MISSING)
    return df.iloc[:rows, :cols]


def _stringify(value: object) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class _VariableFailed(Exception):
    """Marks a variable whose cells could not all be converted."""


def _to_numbers(var: VariableSpec, raw: pd.DataFrame, session: Session) -> pd.DataFrame:
    converted = pd.DataFrame(MISSING, index=raw.index, columns=raw.columns, dtype=float)
    failed = False
    for row in range(raw.shape[0]):
        for col in range(raw.shape[1]):
            value = raw.iat[row, col]
            if is_number(value):
                converted.iat[row, col] = float(value)
                continue
            if _is_blank(value) or value in NO_VALUE_SENTINELS:
                continue
            session.warn(
                COMPONENT,
                "NonNumericValue",
                "Numeric variable %s from sheet '%s' range %s contains non-numeric value '%s' "
                "(permitted non-numeric values are: %s)",
                var.name,
                var.sheet,
                var.range,
                value,
                ", ".join(NO_VALUE_SENTINELS),
            )
            failed = True
    if failed:
        raise _VariableFailed(var.name)
    return converted


def _to_strings(raw: pd.DataFrame) -> pd.DataFrame:
    return raw.map(lambda value: _stringify(value) if is_number(value) and not is_missing(value) else value)


def _extract_one(var: VariableSpec, cache: SheetCache, session: Session) -> pd.DataFrame:
    raw = cache.read_range(var.sheet, var.range)
    rows, cols = range_size(var.range)
    raw = _resize(raw, rows, cols)
    raw = raw.map(lambda value: MISSING if is_missing(value) else value)

    if var.type == NUMBER:
        return _to_numbers(var, raw, session)
    if var.type == STRING:
        return _to_strings(raw)
    session.error(
        COMPONENT,
        "BadRangeType",
        "Variable %s from sheet '%s' range %s has unknown type '%s'",
        var.name,
        var.sheet,
        var.range,
        var.type,
    )


def retrieve_variables(
    template: TemplateDefinition,
    cache: SheetCache,
    session: Session,
) -> ExtractedRecord:
    """Read and convert every variable; report all failures before giving up."""

    extracted: ExtractedRecord = {}
    failures: List[str] = []
    for var in template.variables:
        try:
            extracted[var.name] = _extract_one(var, cache, session)
        except BadRangeError as exc:
            session.error(COMPONENT, "BadRange", "%s", exc)
        except TemplateConfigError:
            raise
        except _VariableFailed:
            failures.append(
                f"Numeric variable {var.name} from sheet '{var.sheet}' range {var.range} "
                "contains non-numeric values"
            )
        except Exception as exc:  # noqa: BLE001
            LOGGER.debug("Range read failed for %s", var.name, exc_info=exc)
            message = (
                f"Unable to read {var.type} variable {var.name} from sheet '{var.sheet}' "
                f"range {var.range}"
            )
            session.warn(COMPONENT, "FailedRangeRead", message)
            failures.append(message)

    if failures:
        session.error(
            COMPONENT,
            "FailedExtraction",
            "Could not extract all variables - %d variable(s) failed",
            len(failures),
            violations=failures,
        )
    session.succeed(COMPONENT, "Extraction", "All variables were extracted")
    return extracted


__all__ = ["NO_VALUE_SENTINELS", "retrieve_variables"]
