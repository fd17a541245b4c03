"""Assembly of the comparison matrix from selected columns.

Merges the variable universe of every chosen table, reads each coefficient
with its standard error, and colours coefficients by sign and significance.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from regtables.config import INSIGNIFICANT_INTENSITY, SIGNIFICANCE_MARKER, SIGNIFICANT_INTENSITY
from regtables.index import TableIndex
from regtables.labels import (
    HEADER_SEPARATOR,
    column_title,
    control_label,
    dependent_label,
    spec_title,
    ui_label,
)
from regtables.models import (
    SELECTABLE_DEPENDENTS,
    Cell,
    CellColor,
    Column,
    DetailTable,
    FilterRequest,
    Hue,
    Matrix,
    MatrixRow,
    Spec,
    SummaryRow,
)
from regtables.selector import choose_record_for, select_columns
from regtables.variables import normalize_var_name, sort_variables

logger = logging.getLogger(__name__)

__all__ = [
    "SUMMARY_LABELS",
    "assemble",
    "build_matrix",
    "coefficient_color",
    "detail_tables",
    "parse_leading_float",
]

SUMMARY_LABELS = ("Observations", "R^2", "Adjusted R^2")

# Leading numeric prefix, e.g. "-1.23" in "-1.23***"
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))")


def parse_leading_float(text: str) -> float | None:
    """Parse the numeric prefix of a coefficient string.

    Args:
        text: Coefficient as printed, possibly with significance stars

    Returns:
        The number, or None when the text does not start with one

    """
    match = _LEADING_FLOAT.match(text or "")
    return float(match.group(1)) if match else None


def coefficient_color(coefficient: str) -> CellColor | None:
    """Colour a coefficient by sign and significance.

    Significant coefficients (marked with an asterisk) get full intensity,
    others a reduced one. Zero counts as non-negative: the tables never
    contain a true zero, only values that round to "0.00000".

    Args:
        coefficient: Coefficient text

    Returns:
        CellColor, or None for empty or non-numeric text

    Examples:
        >>> coefficient_color("-1.23***")
        CellColor(hue=<Hue.NEGATIVE: 'negative'>, intensity=1.0)

    """
    if not coefficient:
        return None
    number = parse_leading_float(coefficient)
    if number is None:
        return None
    significant = SIGNIFICANCE_MARKER in coefficient
    intensity = SIGNIFICANT_INTENSITY if significant else INSIGNIFICANT_INTENSITY
    hue = Hue.NON_NEGATIVE if number >= 0 else Hue.NEGATIVE
    return CellColor(hue=hue, intensity=intensity)


def _cell(column: Column, variable: str) -> Cell:
    if column.record is None or column.column_key is None:
        return Cell()
    row = column.record.table.row(variable)
    if row is None:
        return Cell()
    coefficient = row.value(column.column_key)
    if not coefficient:
        return Cell()
    return Cell(
        coefficient=coefficient,
        standard_error=row.standard_errors.get(column.column_key, ""),
        color=coefficient_color(coefficient),
    )


def assemble(columns: Sequence[Column], spec: Spec) -> Matrix:
    """Build the comparison matrix for selected columns.

    Args:
        columns: Display columns from select_columns()
        spec: Specification being displayed, which decides variable order

    Returns:
        Matrix with one row per variable and three summary rows

    """
    universe: dict[str, None] = {}
    for column in columns:
        if column.record is not None:
            universe.update(dict.fromkeys(column.record.table.variables()))
    variables = sort_variables(universe, is_iv=spec is Spec.IV)

    rows = [MatrixRow(variable=v, cells=[_cell(c, v) for c in columns]) for v in variables]
    observations, r_squared, adj_r_squared = SUMMARY_LABELS
    summary_rows = [
        SummaryRow(label=observations, values=[c.observations for c in columns]),
        SummaryRow(label=r_squared, values=[c.r_squared for c in columns]),
        SummaryRow(label=adj_r_squared, values=[c.adj_r_squared for c in columns]),
    ]
    return Matrix(
        title=spec_title(spec),
        header=["Variable", *(column_title(c) for c in columns)],
        rows=rows,
        summary_rows=summary_rows,
    )


def build_matrix(request: FilterRequest, index: TableIndex) -> Matrix:
    """Select and assemble the matrix for a filter request.

    A baseline request without any dependent variable yields an empty matrix
    (no rows and no summary rows).
    """
    selected = any(d in request.dependents for d in SELECTABLE_DEPENDENTS)
    if request.spec is Spec.BASELINE and not selected:
        logger.debug("No dependent variable selected; returning empty matrix")
        return Matrix(title=spec_title(request.spec))
    return assemble(select_columns(request, index), request.spec)


def detail_tables(request: FilterRequest, index: TableIndex) -> list[DetailTable]:
    """Show the source table of each additional dependent variable.

    Every selected outcome after the first gets its own table, restricted to
    the columns whose control configuration was requested (all columns when
    none match).
    """
    dependents = [d for d in SELECTABLE_DEPENDENTS if d in request.dependents]
    tables: list[DetailTable] = []
    for dep in dependents[1:]:
        record = choose_record_for(request, index, dep)
        if record is None:
            continue
        keys = list(record.column_meta)
        wanted = [
            k for k in keys if not request.controls or record.column_meta[k] in request.controls
        ]
        keys = wanted or keys

        title_parts = [spec_title(record.spec), dependent_label(record.dep)]
        if ui_label(record.ui):
            title_parts.append(ui_label(record.ui))
        tables.append(
            DetailTable(
                title=HEADER_SEPARATOR.join(title_parts),
                header=["Variable", *(control_label(record.column_meta[k]) for k in keys)],
                rows=[
                    [normalize_var_name(row.variable), *(row.value(k) for k in keys)]
                    for row in record.table.data
                ],
            )
        )
    return tables
