"""Heuristic classification of regression tables.

Tables carry no explicit metadata: the specification, outcome, UI measure and
per-column control configuration are inferred from the dependent-variable label
and from which regressors have coefficients. Every function here is total;
unrecognised input maps to a default category instead of raising.
"""

from __future__ import annotations

import logging

from regtables.models import (
    COLUMN_KEYS,
    ControlType,
    DependentCategory,
    IndexedRecord,
    Spec,
    TableRecord,
    UiMeasure,
)

logger = logging.getLogger(__name__)

# Substring -> category; log variants must precede their non-log prefixes
_DEPENDENT_PATTERNS: tuple[tuple[str, DependentCategory], ...] = (
    ("wealth_at_end", DependentCategory.WEALTH),
    ("6_months_log", DependentCategory.SIX_MONTH_LOG),
    ("6_months", DependentCategory.SIX_MONTH),
    ("3_months_log", DependentCategory.THREE_MONTH_LOG),
    ("3_months", DependentCategory.THREE_MONTH),
)

# In priority order: the first measure present wins
_UI_VARIABLES: tuple[tuple[UiMeasure, str], ...] = (
    (UiMeasure.AVG_LINEAR, "Average_monthly_UI_before"),
    (UiMeasure.AVG_LOG, "Average_monthly_UI_before_log"),
    (UiMeasure.MEDIAN, "median_daily_ui"),
    (UiMeasure.MEDIAN_LOG, "median_daily_ui_log"),
)

SECOND_STAGE_VARIABLE = "wealth_at_end(fit)"

# (age, age2, age:sex2) presence -> control configuration
_CONTROL_TYPES: dict[tuple[bool, bool, bool], ControlType] = {
    (False, False, False): ControlType.EXCLUDE,
    (True, False, False): ControlType.INCLUDE,
    (True, False, True): ControlType.INTERACTION,
    (True, True, False): ControlType.AGE2_CONTROL,
    (True, True, True): ControlType.AGE2_INTERACTION,
}


def classify_dependent(name: str | None) -> DependentCategory:
    """Classify a dependent-variable label.

    Args:
        name: Free-text outcome label (None is treated as empty)

    Returns:
        Matching category, or OTHER when no pattern applies

    Examples:
        >>> classify_dependent("salary_change_3_months_log")
        <DependentCategory.THREE_MONTH_LOG: '3m_log'>
        >>> classify_dependent("employment")
        <DependentCategory.OTHER: 'other'>

    """
    label = str(name or "").lower()
    for pattern, category in _DEPENDENT_PATTERNS:
        if pattern in label:
            return category
    return DependentCategory.OTHER


def is_iv_second_stage(table: TableRecord) -> bool:
    """Check for the fitted instrumented regressor among the rows."""
    return any(row.name.lower() == SECOND_STAGE_VARIABLE for row in table.data)


def classify_spec(table: TableRecord) -> Spec:
    """Classify a table as baseline or instrumented.

    A wealth outcome is the IV first stage; a fitted wealth regressor marks
    the second stage. Anything else is a baseline regression.
    """
    if classify_dependent(table.dependent_variable) is DependentCategory.WEALTH:
        return Spec.IV
    if is_iv_second_stage(table):
        return Spec.IV
    return Spec.BASELINE


def detect_ui_size(table: TableRecord) -> UiMeasure:
    """Detect which UI size measure a table varies.

    A measure is present when its row has a coefficient in any column. If
    several are present the fixed priority order decides.

    Args:
        table: Table to inspect

    Returns:
        The UI measure, or UiMeasure.NONE

    """
    present: set[UiMeasure] = set()
    for row in table.data:
        for measure, variable in _UI_VARIABLES:
            if row.name == variable and row.has_any_value():
                present.add(measure)

    for measure, _ in _UI_VARIABLES:
        if measure in present:
            return measure
    return UiMeasure.NONE


def get_columns_in_table(table: TableRecord) -> list[str]:
    """List the column keys that have content in at least one row."""
    return [key for key in COLUMN_KEYS if any(row.has_value(key) for row in table.data)]


def get_column_control_type(table: TableRecord, column_key: str) -> ControlType:
    """Determine the age-control configuration of one column.

    Args:
        table: Table to inspect
        column_key: Column to inspect, e.g. "(2)"

    Returns:
        Control configuration; unexpected combinations fall back to INCLUDE

    """
    age = age2 = age_sex = False
    for row in table.data:
        if not row.has_value(column_key):
            continue
        name = row.name
        if name == "Age":
            age = True
        lowered = name.lower()
        if lowered == "age2":
            age2 = True
        if lowered == "age:sex2":
            age_sex = True

    presence = (age, age2, age_sex)
    control = _CONTROL_TYPES.get(presence)
    if control is None:
        logger.warning(
            "Unexpected age controls in column %s of %r "
            "(Age=%s, Age2=%s, Age:sex2=%s), treating as %s",
            column_key,
            table.dependent_variable,
            age,
            age2,
            age_sex,
            ControlType.INCLUDE.value,
        )
        return ControlType.INCLUDE
    return control


def classify(table: TableRecord, record_id: int = 1) -> IndexedRecord:
    """Derive all categories for a table.

    Args:
        table: Source table
        record_id: 1-based position of the table in its collection

    Returns:
        IndexedRecord wrapping the table

    """
    column_meta = {key: get_column_control_type(table, key) for key in get_columns_in_table(table)}
    return IndexedRecord(
        id=record_id,
        spec=classify_spec(table),
        dep=classify_dependent(table.dependent_variable),
        ui=detect_ui_size(table),
        column_meta=column_meta,
        table=table,
    )
