"""Human-readable labels for categories, column headers and titles."""

from __future__ import annotations

from regtables.models import (
    Column,
    ControlType,
    DependentCategory,
    IvSample,
    IvStage,
    Spec,
    UiMeasure,
)

HEADER_SEPARATOR = " • "

DEPENDENT_LABELS: dict[DependentCategory, str] = {
    DependentCategory.THREE_MONTH: "3-Month Salary Change Rate",
    DependentCategory.THREE_MONTH_LOG: "3-Month Salary Change Rate (Log)",
    DependentCategory.SIX_MONTH: "6-Month Salary Change Rate",
    DependentCategory.SIX_MONTH_LOG: "6-Month Salary Change Rate (Log)",
    DependentCategory.WEALTH: "Wealth at end (First Stage)",
}

UI_LABELS: dict[UiMeasure, str] = {
    UiMeasure.AVG_LINEAR: "Average Monthly UI",
    UiMeasure.AVG_LOG: "Average Monthly UI (Log)",
    UiMeasure.MEDIAN: "Median Daily UI",
    UiMeasure.MEDIAN_LOG: "Median Daily UI (Log)",
}

CONTROL_LABELS: dict[ControlType, str] = {
    ControlType.EXCLUDE: "Exclude Age",
    ControlType.INCLUDE: "Include Age",
    ControlType.INTERACTION: "Age × Gender Interaction",
    ControlType.AGE2_CONTROL: "Higher-order Age Control",
    ControlType.AGE2_INTERACTION: "Higher-order Age Control + Gender Interaction",
}

STAGE_LABELS: dict[IvStage, str] = {
    IvStage.FIRST: "First Stage",
    IvStage.SECOND: "Second Stage",
}

SAMPLE_LABELS: dict[IvSample, str] = {
    IvSample.WHOLE: "Whole Sample",
    IvSample.LOTTERY_SCP: "Lottery + SCP",
    IvSample.LOTTERY_ONLY: "Lottery Only",
}


def dependent_label(dep: DependentCategory) -> str:
    """Label for an outcome category; unknown categories show their key."""
    return DEPENDENT_LABELS.get(dep, dep.value)


def ui_label(ui: UiMeasure | None) -> str:
    """Label for a UI measure; empty when the table has none."""
    if ui is None:
        return ""
    return UI_LABELS.get(ui, "")


def control_label(control: ControlType) -> str:
    return CONTROL_LABELS.get(control, control.value)


def spec_title(spec: Spec) -> str:
    """Title of the comparison matrix."""
    return "IV Results" if spec is Spec.IV else "Baseline Results"


def column_title(column: Column) -> str:
    """Header text for a display column: outcome, UI measure and controls."""
    parts = [dependent_label(column.dep), ui_label(column.ui), control_label(column.control)]
    return HEADER_SEPARATOR.join(p for p in parts if p)
