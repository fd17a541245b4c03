"""regtables - Regression results explorer.

This package classifies regression result tables (specification, outcome,
UI measure and age controls), selects the columns matching a filter, and
assembles them into a single comparison matrix.
"""

__version__ = "0.1.0"

from regtables.assemble import assemble, build_matrix, coefficient_color, detail_tables
from regtables.classify import (
    classify,
    classify_dependent,
    classify_spec,
    detect_ui_size,
    get_column_control_type,
    get_columns_in_table,
)
from regtables.index import TableIndex, build_index
from regtables.loader import TableLoadError, load_tables
from regtables.models import (
    Column,
    ControlType,
    DependentCategory,
    FilterRequest,
    IndexedRecord,
    IvSample,
    IvStage,
    Matrix,
    Spec,
    TableRecord,
    UiMeasure,
)
from regtables.selector import select_columns
from regtables.variables import sort_variables

__all__ = [
    "Column",
    "ControlType",
    "DependentCategory",
    "FilterRequest",
    "IndexedRecord",
    "IvSample",
    "IvStage",
    "Matrix",
    "Spec",
    "TableIndex",
    "TableLoadError",
    "TableRecord",
    "UiMeasure",
    "assemble",
    "build_index",
    "build_matrix",
    "classify",
    "classify_dependent",
    "classify_spec",
    "coefficient_color",
    "detail_tables",
    "detect_ui_size",
    "get_column_control_type",
    "get_columns_in_table",
    "load_tables",
    "select_columns",
    "sort_variables",
]
