"""Tests for heuristic table classification."""

import itertools
import logging

import pytest

from regtables.classify import (
    classify,
    classify_dependent,
    classify_spec,
    detect_ui_size,
    get_column_control_type,
    get_columns_in_table,
)
from regtables.models import ControlType, DependentCategory, Spec, UiMeasure


class TestClassifyDependent:
    """Tests for classify_dependent()."""

    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("salary_change_3_months", DependentCategory.THREE_MONTH),
            ("Salary_Change_3_Months_Log", DependentCategory.THREE_MONTH_LOG),
            ("salary_change_6_months", DependentCategory.SIX_MONTH),
            ("salary_change_6_months_log", DependentCategory.SIX_MONTH_LOG),
            ("Wealth_at_end", DependentCategory.WEALTH),
            ("employment_status", DependentCategory.OTHER),
            ("", DependentCategory.OTHER),
        ],
    )
    def test_categories(self, label: str, expected: DependentCategory) -> None:
        assert classify_dependent(label) is expected

    def test_none_is_other(self) -> None:
        assert classify_dependent(None) is DependentCategory.OTHER

    def test_log_variant_wins_over_prefix(self) -> None:
        """The non-log substring is a prefix of the log one."""
        assert classify_dependent("x_3_months_log") is DependentCategory.THREE_MONTH_LOG
        assert classify_dependent("x_6_months_log") is DependentCategory.SIX_MONTH_LOG

    def test_wealth_wins_over_horizon(self) -> None:
        assert classify_dependent("wealth_at_end_3_months") is DependentCategory.WEALTH

    def test_idempotent(self) -> None:
        labels = ["salary_change_3_months", "foo", "WEALTH_AT_END", "6_months_log"]
        for label in labels:
            assert classify_dependent(label) is classify_dependent(label)
            assert classify_dependent(label) in set(DependentCategory)


class TestClassifySpec:
    """Tests for classify_spec()."""

    def test_wealth_outcome_is_iv(self, make_table) -> None:
        table = make_table("wealth_at_end", [{"variable": "Average_monthly_UI_before", "(1)": "1"}])
        assert classify_spec(table) is Spec.IV

    def test_fitted_wealth_is_iv(self, make_table) -> None:
        table = make_table("3_months", [{"variable": "`WEALTH_AT_END(FIT)`", "(1)": "1"}])
        assert classify_spec(table) is Spec.IV

    def test_fitted_wealth_must_match_exactly(self, make_table) -> None:
        table = make_table("3_months", [{"variable": "lag_wealth_at_end(fit)", "(1)": "1"}])
        assert classify_spec(table) is Spec.BASELINE

    def test_baseline(self, baseline_avg_table) -> None:
        assert classify_spec(baseline_avg_table) is Spec.BASELINE


class TestDetectUiSize:
    """Tests for detect_ui_size()."""

    def test_average_linear(self, baseline_avg_table) -> None:
        assert detect_ui_size(baseline_avg_table) is UiMeasure.AVG_LINEAR

    def test_median(self, baseline_median_table) -> None:
        assert detect_ui_size(baseline_median_table) is UiMeasure.MEDIAN

    def test_none(self, iv_first_stage_table) -> None:
        assert detect_ui_size(iv_first_stage_table) is UiMeasure.NONE

    def test_row_without_values_is_ignored(self, make_table) -> None:
        table = make_table(
            "3_months",
            [
                {"variable": "Average_monthly_UI_before", "(1)": " ", "(2)": None},
                {"variable": "median_daily_ui_log", "(3)": "0.2"},
            ],
        )
        assert detect_ui_size(table) is UiMeasure.MEDIAN_LOG

    def test_priority_order(self, make_table) -> None:
        table = make_table(
            "3_months",
            [
                {"variable": "median_daily_ui", "(1)": "0.1"},
                {"variable": "Average_monthly_UI_before_log", "(2)": "0.2"},
            ],
        )
        assert detect_ui_size(table) is UiMeasure.AVG_LOG


class TestColumns:
    """Tests for get_columns_in_table()."""

    def test_present_columns(self, baseline_median_table) -> None:
        assert get_columns_in_table(baseline_median_table) == ["(1)", "(2)"]

    def test_column_only_in_standard_error_row(self, make_table) -> None:
        table = make_table("3_months", [{"variable": "", "(3)": "(0.1)"}])
        assert get_columns_in_table(table) == ["(3)"]

    def test_empty_table(self, make_table) -> None:
        assert get_columns_in_table(make_table("3_months", [])) == []


class TestColumnControlType:
    """Tests for get_column_control_type() over every presence combination."""

    EXPECTED = {
        (False, False, False): ControlType.EXCLUDE,
        (True, False, False): ControlType.INCLUDE,
        (True, False, True): ControlType.INTERACTION,
        (True, True, False): ControlType.AGE2_CONTROL,
        (True, True, True): ControlType.AGE2_INTERACTION,
        (False, True, False): ControlType.INCLUDE,
        (False, False, True): ControlType.INCLUDE,
        (False, True, True): ControlType.INCLUDE,
    }

    @pytest.mark.parametrize("presence", list(itertools.product([False, True], repeat=3)))
    def test_all_combinations(self, make_table, presence: tuple[bool, bool, bool]) -> None:
        age, age2, age_sex = presence
        rows = [{"variable": "Sex2", "(1)": "0.1"}]
        if age:
            rows.append({"variable": "Age", "(1)": "0.01"})
        if age2:
            rows.append({"variable": "AGE2", "(1)": "0.001"})
        if age_sex:
            rows.append({"variable": "age:SEX2", "(1)": "0.002"})
        table = make_table("3_months", rows)

        assert get_column_control_type(table, "(1)") is self.EXPECTED[presence]

    def test_age2_without_age_warns(self, make_table, caplog: pytest.LogCaptureFixture) -> None:
        table = make_table("3_months", [{"variable": "Age2", "(1)": "0.001"}])

        with caplog.at_level(logging.WARNING, logger="regtables.classify"):
            control = get_column_control_type(table, "(1)")

        assert control is ControlType.INCLUDE
        assert any("Unexpected age controls" in r.message for r in caplog.records)

    def test_bare_age_is_case_sensitive(self, make_table) -> None:
        table = make_table("3_months", [{"variable": "age", "(1)": "0.01"}])
        assert get_column_control_type(table, "(1)") is ControlType.EXCLUDE

    def test_only_named_column_counts(self, baseline_avg_table) -> None:
        assert get_column_control_type(baseline_avg_table, "(1)") is ControlType.EXCLUDE
        assert get_column_control_type(baseline_avg_table, "(2)") is ControlType.INCLUDE
        assert get_column_control_type(baseline_avg_table, "(3)") is ControlType.INTERACTION


class TestClassify:
    """Tests for classify()."""

    def test_indexed_record(self, baseline_median_table) -> None:
        record = classify(baseline_median_table, record_id=7)

        assert record.id == 7
        assert record.spec is Spec.BASELINE
        assert record.dep is DependentCategory.THREE_MONTH
        assert record.ui is UiMeasure.MEDIAN
        assert record.column_meta == {
            "(1)": ControlType.AGE2_CONTROL,
            "(2)": ControlType.AGE2_INTERACTION,
        }
        assert record.table is baseline_median_table

    def test_malformed_table_does_not_raise(self, make_table) -> None:
        table = make_table(None, [{"variable": None, "(1)": None}, {}])
        record = classify(table)

        assert record.spec is Spec.BASELINE
        assert record.dep is DependentCategory.OTHER
        assert record.ui is UiMeasure.NONE
        assert record.column_meta == {}
