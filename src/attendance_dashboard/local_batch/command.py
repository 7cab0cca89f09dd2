from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from ..core.constants import AGGREGATION_FILE_PATH, SESSIONS_DIRNAME
from ..core.exceptions import InputDiscoveryError
from .adapter import BuildSuccess, RecordBuilder
from .aggregation import SessionAggregationService
from .consistency_validator import ConsistencyValidator
from .contract_validator import DataContractValidator
from .discovery import InputDiscovery
from .issues import Issue, error, has_errors, warning
from .publisher import AtomicPublicDataWriter
from .reporter import ConversionReport, ConversionReporter

log = logging.getLogger(__name__)


def _record_path(record) -> str:
    rid = record.get("id") if isinstance(record, Mapping) else None
    return f"{SESSIONS_DIRNAME}/{rid}.json"


@dataclass(frozen=True)
class ConvertOptions:
    input_dir: str
    output_dir: str


class LocalConvertCommand:
    """Runs the local conversion: discover -> build -> aggregate -> validate -> publish -> report.

    Any error-severity contract or consistency issue blocks the publish step;
    the public dataset is then left untouched. Files that fail to convert are
    reported and left out of the batch.
    """

    def __init__(
        self,
        *,
        discovery: InputDiscovery | None = None,
        builder: RecordBuilder | None = None,
        aggregator: SessionAggregationService | None = None,
        contract_validator: DataContractValidator | None = None,
        consistency_validator: ConsistencyValidator | None = None,
        writer: AtomicPublicDataWriter | None = None,
        reporter: ConversionReporter | None = None,
    ):
        self._discovery = discovery or InputDiscovery()
        self._builder = builder or RecordBuilder()
        self._aggregator = aggregator or SessionAggregationService()
        self._contract = contract_validator or DataContractValidator()
        self._consistency = consistency_validator or ConsistencyValidator()
        self._writer = writer or AtomicPublicDataWriter()
        self._reporter = reporter or ConversionReporter()

    def execute(self, options: ConvertOptions) -> ConversionReport:
        issues: list[Issue] = []

        # 1. Discover
        try:
            discovered = self._discovery.list_inputs(options.input_dir)
        except InputDiscoveryError as e:
            log.error("%s", e)
            issues += [warning(e.path, w) for w in e.warnings]
            issues.append(error(e.path, str(e)))
            return self._reporter.build_report(input_count=0, generated_count=0, issues=issues)

        issues += [warning(options.input_dir, w) for w in discovered.warnings]
        input_count = len(discovered.files)

        # 2. Build, one file at a time in discovery order
        parsed: list[BuildSuccess] = []
        for file in discovered.files:
            result = self._builder.build(file)
            if result.ok:
                parsed.append(result)
                issues += [warning(file.name, w) for w in result.warnings]
            else:
                log.warning("Could not convert %s", file.name)
                issues += [error(file.name, e) for e in result.errors]

        if not parsed:
            return self._reporter.build_report(input_count=input_count, generated_count=0, issues=issues)

        # 3. Aggregate
        aggregation = self._aggregator.aggregate(parsed)
        issues += [warning(AGGREGATION_FILE_PATH, w) for w in aggregation.warnings]
        generated_count = len(aggregation.records)

        # 4. Validate. Only contract and consistency errors gate the publish;
        # transform errors stay local to their file.
        index_doc = aggregation.index.to_dict()
        validation: list[Issue] = self._contract.validate_index(index_doc)
        for record in aggregation.records:
            validation += self._contract.validate_record(_record_path(record), record)
        validation += self._consistency.validate(index_doc, aggregation.records)
        issues += validation

        if has_errors(validation):
            log.error("Validation failed; publish skipped")
            return self._reporter.build_report(input_count=input_count, generated_count=generated_count, issues=issues)

        # 5. Publish
        published = self._writer.publish(options.output_dir, index_doc, aggregation.records)

        # 6. Report
        return self._reporter.build_report(
            input_count=input_count,
            generated_count=generated_count,
            file_results=published.results,
            issues=issues,
        )
