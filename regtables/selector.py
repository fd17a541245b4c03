"""Selection of display columns for a filter request.

Two strategies, chosen by the requested specification:

- Baseline: every (dependent, UI measure, control) combination asked for gets
  exactly one column, bound to the first matching table or left blank.
- IV: every column of every IV table is a candidate; only those whose stage
  and estimation sample are both selected are emitted, so the result may be
  empty.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from regtables.config import IV_SAMPLE_OBSERVATIONS
from regtables.models import (
    SELECTABLE_DEPENDENTS,
    Column,
    ControlType,
    DependentCategory,
    FilterRequest,
    IndexedRecord,
    IvSample,
    IvStage,
    Spec,
    UiMeasure,
)

logger = logging.getLogger(__name__)

__all__ = [
    "choose_record_for",
    "column_summary",
    "iv_sample_from_observations",
    "iv_stage",
    "parse_observation_count",
    "select_columns",
]

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


def parse_observation_count(text: str) -> int | None:
    """Parse an observation count such as "63,413".

    Thousands separators are dropped and the leading integer is read, so
    trailing decorations are ignored.

    Args:
        text: Observation count as printed in the table

    Returns:
        Parsed count, or None when the text has no leading integer

    """
    match = _LEADING_INTEGER.match(str(text or "").replace(",", ""))
    return int(match.group(1)) if match else None


def iv_sample_from_observations(text: str) -> IvSample:
    """Identify the IV estimation sample from a column's observation count."""
    count = parse_observation_count(text)
    if count is None:
        if text and text.strip():
            logger.warning("Unparsable observation count %r", text)
        return IvSample.UNKNOWN
    for sample, expected in IV_SAMPLE_OBSERVATIONS.items():
        if count == expected:
            return IvSample(sample)
    return IvSample.UNKNOWN


def iv_stage(dep: DependentCategory) -> IvStage:
    """First stage predicts wealth; every other IV outcome is second stage."""
    return IvStage.FIRST if dep is DependentCategory.WEALTH else IvStage.SECOND


def column_summary(record: IndexedRecord, column_key: str | None) -> tuple[str, str, str]:
    """Read observations, R^2 and adjusted R^2 for one column of a table.

    Args:
        record: Source record
        column_key: Column to read; None reads the first value

    Returns:
        Tuple of (observations, r_squared, adj_r_squared) text

    """
    table = record.table
    observations = table.find_metric(contains="observations")
    r_squared = table.find_metric(startswith="r^2")
    adj_r_squared = table.find_metric(contains="adjusted r^2")
    return (
        observations.value_for(column_key) if observations else "",
        r_squared.value_for(column_key) if r_squared else "",
        adj_r_squared.value_for(column_key) if adj_r_squared else "",
    )


def _make_column(
    dep: DependentCategory,
    ui: UiMeasure,
    control: ControlType,
    record: IndexedRecord | None,
    column_key: str | None,
) -> Column:
    observations = r_squared = adj_r_squared = ""
    if record is not None:
        observations, r_squared, adj_r_squared = column_summary(record, column_key)
    return Column(
        dep=dep,
        ui=ui,
        control=control,
        record=record,
        column_key=column_key,
        observations=observations,
        r_squared=r_squared,
        adj_r_squared=adj_r_squared,
    )


def _select_baseline(request: FilterRequest, records: Sequence[IndexedRecord]) -> list[Column]:
    controls = [c for c in ControlType if c in request.controls] or [ControlType.INCLUDE]
    ui_measures: list[UiMeasure | None] = [u for u in UiMeasure if u in request.ui_measures]

    columns: list[Column] = []
    for dep in SELECTABLE_DEPENDENTS:
        if dep not in request.dependents:
            continue
        # UI measures do not apply to the first-stage outcome
        ui_choices = [None] if dep is DependentCategory.WEALTH or not ui_measures else ui_measures
        for ui_choice in ui_choices:
            candidates = [
                r
                for r in records
                if r.spec is request.spec
                and r.dep is dep
                and (dep is DependentCategory.WEALTH or ui_choice is None or r.ui is ui_choice)
            ]
            for control in controls:
                chosen: IndexedRecord | None = None
                column_key: str | None = None
                for candidate in candidates:
                    key = next((k for k, c in candidate.column_meta.items() if c is control), None)
                    if key is not None:
                        chosen, column_key = candidate, key
                        break
                if chosen is None and candidates:
                    chosen = candidates[0]
                    logger.debug(
                        "No %s column for dep=%s ui=%s; falling back to table %d",
                        control.value,
                        dep.value,
                        ui_choice.value if ui_choice else None,
                        chosen.id,
                    )
                ui = ui_choice or (chosen.ui if chosen else UiMeasure.NONE)
                columns.append(_make_column(dep, ui, control, chosen, column_key))
    return columns


def _select_iv(request: FilterRequest, records: Sequence[IndexedRecord]) -> list[Column]:
    columns: list[Column] = []
    for record in records:
        if record.spec is not Spec.IV:
            continue
        stage = iv_stage(record.dep)
        for column_key, control in record.column_meta.items():
            column = _make_column(record.dep, record.ui, control, record, column_key)
            sample = iv_sample_from_observations(column.observations)
            if sample is IvSample.UNKNOWN:
                continue
            if stage in request.stages and sample in request.samples:
                columns.append(column)
    return columns


def select_columns(request: FilterRequest, records: Iterable[IndexedRecord]) -> list[Column]:
    """Choose the display columns for a filter request.

    Args:
        request: What to show
        records: Indexed records (a TableIndex or any iterable of records)

    Returns:
        Columns in display order

    """
    records = list(records)
    if request.spec is Spec.IV:
        columns = _select_iv(request, records)
    else:
        columns = _select_baseline(request, records)
    logger.debug(
        "Selected %d columns (%d bound) for spec=%s",
        len(columns),
        sum(1 for c in columns if c.is_bound),
        request.spec.value,
    )
    return columns


def choose_record_for(
    request: FilterRequest, records: Iterable[IndexedRecord], dep: DependentCategory
) -> IndexedRecord | None:
    """Pick a single table for a dependent category.

    Prefers a table whose UI measure was requested, unless the outcome is
    wealth; otherwise the first table with the requested spec and outcome.
    """
    candidates = [r for r in records if r.spec is request.spec and r.dep is dep]
    if request.ui_measures and dep is not DependentCategory.WEALTH:
        strict = [
            r for r in candidates if r.ui is not UiMeasure.NONE and r.ui in request.ui_measures
        ]
        if strict:
            candidates = strict
    return candidates[0] if candidates else None
