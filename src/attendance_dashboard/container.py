from __future__ import annotations

from dataclasses import dataclass

from .core.constants import INPUT_EXTENSION
from .dashboard.service import DashboardService
from .index.merger import IndexMerger
from .local_batch.adapter import RecordBuilder
from .local_batch.aggregation import SessionAggregationService
from .local_batch.command import LocalConvertCommand
from .local_batch.discovery import InputDiscovery
from .local_batch.publisher import AtomicPublicDataWriter
from .local_batch.reporter import ConversionReporter
from .local_batch.verification import LocalVerificationRunner
from .storage.dataset_repository import DatasetRepository
from .storage.filesystem import LocalFileSystem


@dataclass(frozen=True)
class Container:
    fs: LocalFileSystem
    dataset_repo: DatasetRepository

    convert_command: LocalConvertCommand
    reporter: ConversionReporter
    verification_runner: LocalVerificationRunner
    dashboard_service: DashboardService


def build_container(*, output_dir: str, input_extension: str = INPUT_EXTENSION) -> Container:
    fs = LocalFileSystem()
    dataset_repo = DatasetRepository(output_dir, fs)
    reporter = ConversionReporter(fs)

    convert_command = LocalConvertCommand(
        discovery=InputDiscovery(fs, extension=input_extension),
        builder=RecordBuilder(fs),
        aggregator=SessionAggregationService(IndexMerger()),
        writer=AtomicPublicDataWriter(fs),
        reporter=reporter,
    )

    return Container(
        fs=fs,
        dataset_repo=dataset_repo,
        convert_command=convert_command,
        reporter=reporter,
        verification_runner=LocalVerificationRunner(dataset_repo),
        dashboard_service=DashboardService(dataset_repo),
    )
