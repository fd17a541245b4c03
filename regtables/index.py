"""Build-once index of classified tables.

The index is a pure function of the table collection, so it is computed a
single time and shared read-only by every render.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sequence

from regtables.classify import classify
from regtables.config import FULL_SAMPLE_THRESHOLD
from regtables.models import DependentCategory, IndexedRecord, Spec, TableRecord

logger = logging.getLogger(__name__)

__all__ = ["TableIndex", "build_index", "coarse_sample"]


class TableIndex:
    """Classified view over an immutable table collection."""

    def __init__(self, tables: Sequence[TableRecord]) -> None:
        """Classify every table.

        Args:
            tables: Source tables, in their original order

        """
        self._tables = tuple(tables)
        self._records = tuple(classify(t, record_id=i) for i, t in enumerate(self._tables, 1))

        for record in self.unreachable():
            logger.warning(
                "Table %d (%r) has an unrecognised dependent variable and cannot be selected",
                record.id,
                record.table.dependent_variable,
            )
        logger.debug("Indexed %d tables", len(self._records))

    @property
    def records(self) -> tuple[IndexedRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[IndexedRecord]:
        return iter(self._records)

    def by_spec(self, spec: Spec) -> list[IndexedRecord]:
        """Records tagged with a specification, in source order."""
        return [r for r in self._records if r.spec is spec]

    def unreachable(self) -> list[IndexedRecord]:
        """Records whose outcome no filter category can select."""
        return [r for r in self._records if r.dep is DependentCategory.OTHER]


def build_index(tables: Sequence[TableRecord]) -> TableIndex:
    """Classify a table collection."""
    return TableIndex(tables)


def coarse_sample(record: IndexedRecord) -> str:
    """Label a record "full" or "lottery" by its largest observation count."""
    metric = record.table.find_metric(contains="observations")
    digits = [] if metric is None else [re.sub(r"\D", "", v) for v in metric.values()]
    largest = max((int(d) for d in digits if d), default=0)
    return "full" if largest >= FULL_SAMPLE_THRESHOLD else "lottery"
