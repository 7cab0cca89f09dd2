from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from ..index.merger import IndexMerger
from ..index.model import DashboardIndex
from .adapter import BuildSuccess

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregationResult:
    index: DashboardIndex
    records: tuple[dict[str, Any], ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)


class SessionAggregationService:
    """Builds the index from scratch by folding sessions in caller order.

    The first session with a given id wins; later ones are dropped together
    with their records.
    """

    def __init__(self, merger: IndexMerger | None = None):
        self._merger = merger or IndexMerger()

    def aggregate(self, parsed: Iterable[BuildSuccess]) -> AggregationResult:
        index = DashboardIndex.empty()
        records: list[dict[str, Any]] = []
        warnings: list[str] = []

        for item in parsed:
            result = self._merger.merge(index, item.contribution)
            if result.is_duplicate:
                warnings.extend(result.warnings)
                log.warning("Skipped %s: %s", item.source_name, "; ".join(result.warnings))
            else:
                records.append(item.record)
            index = result.index

        log.info("Aggregated %d session(s), %d duplicate(s) rejected", len(records), len(warnings))
        return AggregationResult(index=index, records=tuple(records), warnings=tuple(warnings))
