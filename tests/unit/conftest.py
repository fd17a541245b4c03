"""Shared fixtures for regtables unit tests."""

from typing import Any, Callable

import pytest

from regtables.index import TableIndex
from regtables.models import TableRecord


def _summary(observations: list[str], r2: list[str], adj_r2: list[str]) -> list[dict[str, str]]:
    def metric(label: str, values: list[str]) -> dict[str, str]:
        padded = values + [""] * (3 - len(values))
        return {"metric": label, "value": padded[0], "value2": padded[1], "value3": padded[2]}

    return [
        metric("Observations", observations),
        metric("R^2", r2),
        metric("Adjusted R^2", adj_r2),
    ]


@pytest.fixture
def make_table() -> Callable[..., TableRecord]:
    """Factory building a TableRecord from raw rows."""

    def _make(
        dependent: str,
        rows: list[dict[str, Any]],
        observations: list[str] | None = None,
        r2: list[str] | None = None,
        adj_r2: list[str] | None = None,
    ) -> TableRecord:
        return TableRecord.model_validate(
            {
                "dependentVariable": dependent,
                "data": rows,
                "summary": _summary(observations or [], r2 or [], adj_r2 or []),
            }
        )

    return _make


@pytest.fixture
def baseline_avg_table(make_table) -> TableRecord:
    """Baseline, 3-month outcome, average UI; columns exclude/include/interaction."""
    return make_table(
        "salary_change_3_months",
        [
            {
                "variable": "`Average_monthly_UI_before`",
                "(1)": "0.120***",
                "(2)": "0.118***",
                "(3)": "0.117***",
            },
            {"variable": "", "(1)": "(0.010)", "(2)": "(0.011)", "(3)": "(0.012)"},
            {"variable": "Age", "(2)": "-0.004", "(3)": "-0.005*"},
            {"variable": "", "(2)": "(0.003)", "(3)": "(0.002)"},
            {"variable": "Age:sex2", "(3)": "0.002"},
            {"variable": "", "(3)": "(0.001)"},
            {"variable": "run_mean_lagged_salary", "(1)": "0.5", "(2)": "0.5", "(3)": "0.5"},
        ],
        observations=["63,413", "63,413", "63,413"],
        r2=["0.10", "0.11", "0.12"],
        adj_r2=["0.09", "0.10", "0.11"],
    )


@pytest.fixture
def baseline_median_table(make_table) -> TableRecord:
    """Baseline, 3-month outcome, median UI; columns age2_control/age2_interaction."""
    return make_table(
        "salary_change_3_months",
        [
            {"variable": "median_daily_ui", "(1)": "0.03", "(2)": "0.04"},
            {"variable": "", "(1)": "(0.01)", "(2)": "(0.01)"},
            {"variable": "Age", "(1)": "0.01", "(2)": "0.01"},
            {"variable": "Age2", "(1)": "-0.001", "(2)": "-0.001"},
            {"variable": "Age:sex2", "(2)": "0.003"},
        ],
        observations=["63,413", "63,413"],
        r2=["0.20", "0.21"],
        adj_r2=["0.19", "0.20"],
    )


@pytest.fixture
def iv_first_stage_table(make_table) -> TableRecord:
    """IV first stage (wealth outcome) on the whole and lottery+SCP samples."""
    return make_table(
        "Wealth_at_end",
        [
            {"variable": "amount_scp", "(1)": "0.80***", "(2)": "0.75***"},
            {"variable": "", "(1)": "(0.05)", "(2)": "(0.06)"},
            {"variable": "amount_lottery_in", "(1)": "0.60***", "(2)": "0.55***"},
            {"variable": "Age", "(1)": "0.2", "(2)": "0.3"},
        ],
        observations=["63413", "17553"],
        r2=["0.40", "0.35"],
        adj_r2=["0.39", "0.34"],
    )


@pytest.fixture
def iv_second_stage_table(make_table) -> TableRecord:
    """IV second stage on the whole and lottery-only samples."""
    return make_table(
        "salary_change_3_months",
        [
            {"variable": "Wealth_at_end(fit)", "(1)": "-0.02**", "(2)": "-0.03"},
            {"variable": "", "(1)": "(0.01)", "(2)": "(0.02)"},
            {"variable": "Age", "(1)": "0.01", "(2)": "0.01"},
        ],
        observations=["63,413", "6,289"],
        r2=["0.05", "0.06"],
        adj_r2=["0.04", "0.05"],
    )


@pytest.fixture
def unknown_outcome_table(make_table) -> TableRecord:
    """Table with an outcome no category recognises."""
    return make_table(
        "employment_status",
        [{"variable": "Age", "(1)": "0.01"}],
        observations=["100"],
    )


@pytest.fixture
def tables(
    baseline_avg_table,
    baseline_median_table,
    iv_first_stage_table,
    iv_second_stage_table,
    unknown_outcome_table,
) -> list[TableRecord]:
    """A small corpus covering every specification path."""
    return [
        baseline_avg_table,
        baseline_median_table,
        iv_first_stage_table,
        iv_second_stage_table,
        unknown_outcome_table,
    ]


@pytest.fixture
def index(tables) -> TableIndex:
    """Index over the sample corpus."""
    return TableIndex(tables)
