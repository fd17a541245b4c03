"""Pydantic models for regression tables, their classification and display.

Defines data structures for:
- Raw table records (rows of coefficients plus summary metrics)
- Indexed records carrying the derived categories
- Filter requests and the display columns selected for them
- The assembled comparison matrix handed to renderers
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from regtables.config import config
from regtables.variables import normalize_var_name

# Column keys a table may carry, in display order
COLUMN_KEYS = ("(1)", "(2)", "(3)")

_STANDARD_ERROR = re.compile(r"\(.*\)")


def as_text(value: Any) -> str:
    """Coerce a raw cell to text; None becomes the empty string."""
    if value is None:
        return ""
    return str(value)


def has_value(cell: Any) -> bool:
    """Check whether a cell carries any non-whitespace content."""
    return cell is not None and str(cell).strip() != ""


# -----------------------------------------------------------------------------
# Categories
# -----------------------------------------------------------------------------


class Spec(str, Enum):
    """Model specification of a table."""

    BASELINE = "baseline"
    IV = "iv"


class DependentCategory(str, Enum):
    """Outcome variable category.

    Member order is the canonical display order; OTHER is never selectable.
    """

    THREE_MONTH = "3m"
    THREE_MONTH_LOG = "3m_log"
    SIX_MONTH = "6m"
    SIX_MONTH_LOG = "6m_log"
    WEALTH = "wealth"
    OTHER = "other"


class UiMeasure(str, Enum):
    """Unemployment-insurance size measure used as a regressor."""

    AVG_LINEAR = "avg_ui_linear"
    AVG_LOG = "avg_ui_log"
    MEDIAN = "median_ui"
    MEDIAN_LOG = "median_ui_log"
    NONE = "none"


class ControlType(str, Enum):
    """Age-related control configuration of a single column."""

    EXCLUDE = "exclude"
    INCLUDE = "include"
    INTERACTION = "interaction"
    AGE2_CONTROL = "age2_control"
    AGE2_INTERACTION = "age2_interaction"


class IvStage(str, Enum):
    """Stage of a two-stage (IV) regression."""

    FIRST = "first"
    SECOND = "second"


class IvSample(str, Enum):
    """Estimation sample of an IV regression, recovered from its N."""

    WHOLE = "whole"
    LOTTERY_SCP = "lottery_scp"
    LOTTERY_ONLY = "lottery_only"
    UNKNOWN = "unknown"


class Hue(str, Enum):
    """Sign-based colour of a coefficient."""

    NON_NEGATIVE = "non_negative"
    NEGATIVE = "negative"


SELECTABLE_DEPENDENTS = tuple(d for d in DependentCategory if d is not DependentCategory.OTHER)
SELECTABLE_UI_MEASURES = tuple(u for u in UiMeasure if u is not UiMeasure.NONE)


# -----------------------------------------------------------------------------
# Table records
# -----------------------------------------------------------------------------


class TableRow(BaseModel):
    """One row of a regression table.

    Rows with an empty variable name hold standard errors for the closest
    named row above them; those are paired up by TableRecord on ingestion.
    """

    variable: str = ""
    cells: dict[str, str] = Field(default_factory=dict)
    standard_errors: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_cells(cls, data: Any) -> Any:
        """Fold the flat "(1)"/"(2)"/"(3)" keys of a raw row into cells."""
        if not isinstance(data, dict) or "cells" in data:
            return data
        return {
            "variable": as_text(data.get("variable")),
            "cells": {key: as_text(data.get(key)) for key in COLUMN_KEYS if key in data},
        }

    @property
    def name(self) -> str:
        """Normalized variable name."""
        return normalize_var_name(self.variable)

    def value(self, column_key: str) -> str:
        """Get the raw cell text for a column ("" when absent)."""
        return self.cells.get(column_key, "")

    def has_value(self, column_key: str) -> bool:
        """Check whether the row has content in a column."""
        return has_value(self.cells.get(column_key))

    def has_any_value(self) -> bool:
        """Check whether the row has content in any known column."""
        return any(self.has_value(key) for key in COLUMN_KEYS)


class SummaryMetric(BaseModel):
    """A summary statistic row; values align with columns (1), (2), (3)."""

    metric: str = ""
    value: str = ""
    value2: str = ""
    value3: str = ""

    @field_validator("metric", "value", "value2", "value3", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> str:
        return as_text(v)

    def value_for(self, column_key: str | None) -> str:
        """Get the value for a column, falling back to the first value.

        Args:
            column_key: "(1)", "(2)", "(3)" or None when unresolved

        Returns:
            Metric text for the column

        """
        if column_key == "(3)" and self.value3:
            return self.value3
        if column_key == "(2)" and self.value2:
            return self.value2
        return self.value

    def values(self) -> list[str]:
        """All three positional values."""
        return [self.value, self.value2, self.value3]


class TableRecord(BaseModel):
    """A regression result table as supplied by the data source."""

    model_config = ConfigDict(populate_by_name=True)

    dependent_variable: str = Field(default="", alias="dependentVariable")
    data: list[TableRow] = Field(default_factory=list)
    summary: list[SummaryMetric] = Field(default_factory=list)

    _rows_by_name: dict[str, TableRow] = PrivateAttr(default_factory=dict)

    @field_validator("dependent_variable", mode="before")
    @classmethod
    def _coerce_label(cls, v: Any) -> str:
        return as_text(v)

    @field_validator("data", "summary", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def model_post_init(self, context: Any, /) -> None:
        """Index named rows and attach each standard error to its coefficient row."""
        owner: TableRow | None = None
        for row in self.data:
            name = row.name
            if name:
                owner = row
                self._rows_by_name.setdefault(name, row)
                continue
            if owner is None:
                continue
            for key, cell in row.cells.items():
                if key not in owner.standard_errors and _STANDARD_ERROR.search(cell):
                    owner.standard_errors[key] = cell

    def row(self, name: str) -> TableRow | None:
        """Get the first row whose normalized name equals name."""
        return self._rows_by_name.get(name)

    def variables(self) -> list[str]:
        """Normalized names of all named rows, first occurrence order."""
        return list(self._rows_by_name)

    def find_metric(self, *, contains: str = "", startswith: str = "") -> SummaryMetric | None:
        """Find the first summary metric whose lower-cased label matches.

        Args:
            contains: Substring the label must contain
            startswith: Prefix the label must start with

        Returns:
            Matching metric or None

        """
        for metric in self.summary:
            label = metric.metric.lower()
            if not label:
                continue
            if contains and contains not in label:
                continue
            if startswith and not label.startswith(startswith):
                continue
            return metric
        return None


class IndexedRecord(BaseModel):
    """A table record tagged with its derived categories."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="1-based position in the source sequence")
    spec: Spec
    dep: DependentCategory
    ui: UiMeasure = UiMeasure.NONE
    column_meta: dict[str, ControlType] = Field(default_factory=dict)
    table: TableRecord


# -----------------------------------------------------------------------------
# Selection
# -----------------------------------------------------------------------------


class FilterRequest(BaseModel):
    """What the user asked to see, captured for a single render."""

    model_config = ConfigDict(frozen=True)

    spec: Spec = Spec.BASELINE
    dependents: frozenset[DependentCategory] = frozenset()
    ui_measures: frozenset[UiMeasure] = frozenset()
    controls: frozenset[ControlType] = frozenset()
    stages: frozenset[IvStage] = frozenset({IvStage.SECOND})
    samples: frozenset[IvSample] = frozenset({IvSample.WHOLE})

    @classmethod
    def document_benchmark(cls) -> FilterRequest:
        """The published benchmark: 3-month outcome, average UI, age included."""
        return cls(
            spec=Spec.BASELINE,
            dependents=frozenset({DependentCategory.THREE_MONTH}),
            ui_measures=frozenset({UiMeasure.AVG_LINEAR}),
            controls=frozenset({ControlType.INCLUDE}),
        )

    def with_minimum_selection(self) -> FilterRequest:
        """Return a copy where every empty axis holds its default choice."""
        return self.model_copy(
            update={
                "dependents": self.dependents or frozenset({DependentCategory.THREE_MONTH}),
                "ui_measures": self.ui_measures or frozenset({UiMeasure.AVG_LINEAR}),
                "controls": self.controls or frozenset({ControlType.INCLUDE}),
                "stages": self.stages or frozenset({IvStage.SECOND}),
                "samples": self.samples or frozenset({IvSample.WHOLE}),
            }
        )


class Column(BaseModel):
    """One display column, optionally bound to a source table column."""

    dep: DependentCategory
    ui: UiMeasure = UiMeasure.NONE
    control: ControlType
    record: IndexedRecord | None = None
    column_key: str | None = None
    observations: str = ""
    r_squared: str = ""
    adj_r_squared: str = ""

    @property
    def is_bound(self) -> bool:
        """Whether coefficients can be read for this column."""
        return self.record is not None and self.column_key is not None


# -----------------------------------------------------------------------------
# Assembled output
# -----------------------------------------------------------------------------


class CellColor(BaseModel):
    """Display colour of a coefficient."""

    model_config = ConfigDict(frozen=True)

    hue: Hue
    intensity: float

    def css(self) -> str:
        """Render as a CSS rgba() colour."""
        r, g, b = config.non_negative_rgb if self.hue is Hue.NON_NEGATIVE else config.negative_rgb
        return f"rgba({r}, {g}, {b}, {self.intensity:g})"


class Cell(BaseModel):
    """A coefficient with its standard error; empty when nothing to show."""

    coefficient: str = ""
    standard_error: str = ""
    color: CellColor | None = None

    @property
    def is_empty(self) -> bool:
        return not self.coefficient


class MatrixRow(BaseModel):
    """A variable and its cell in every display column."""

    variable: str
    cells: list[Cell] = Field(default_factory=list)


class SummaryRow(BaseModel):
    """A summary statistic across all display columns."""

    label: str
    values: list[str] = Field(default_factory=list)


class Matrix(BaseModel):
    """The assembled comparison table."""

    title: str = ""
    header: list[str] = Field(default_factory=lambda: ["Variable"])
    rows: list[MatrixRow] = Field(default_factory=list)
    summary_rows: list[SummaryRow] = Field(default_factory=list)

    @property
    def column_count(self) -> int:
        """Number of display columns (excluding the variable column)."""
        return len(self.header) - 1

    def to_frame(self) -> pd.DataFrame:
        """Export coefficient and summary text as a DataFrame indexed by label."""
        labels = [row.variable for row in self.rows] + [s.label for s in self.summary_rows]
        values = [[cell.coefficient for cell in row.cells] for row in self.rows]
        values += [list(s.values) for s in self.summary_rows]
        index = pd.Index(labels, name="Variable")
        return pd.DataFrame(values, index=index, columns=self.header[1:])


class DetailTable(BaseModel):
    """A single source table shown as-is under selected columns."""

    title: str
    header: list[str] = Field(default_factory=lambda: ["Variable"])
    rows: list[list[str]] = Field(default_factory=list)
