"""Convert data/sample reports and replace public/data.

Same as `attendance-dashboard convert`, using the configured directories.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(REPO_ROOT / "src"))

from attendance_dashboard.common.logger import setup_logger
from attendance_dashboard.container import build_container
from attendance_dashboard.core.enums import ReportStatus
from attendance_dashboard.local_batch.command import ConvertOptions
from attendance_dashboard.main import load_settings


def main() -> None:
    settings = load_settings()
    setup_logger(level=settings.LOG_LEVEL)

    input_dir = str(REPO_ROOT / settings.INPUT_DIR)
    output_dir = str(REPO_ROOT / settings.OUTPUT_DIR)

    container = build_container(output_dir=output_dir, input_extension=settings.INPUT_EXTENSION)
    report = container.convert_command.execute(ConvertOptions(input_dir=input_dir, output_dir=output_dir))
    print(container.reporter.format(report))

    if settings.REPORT_PATH:
        container.reporter.save_to_file(report, str(REPO_ROOT / settings.REPORT_PATH))

    if report.status == ReportStatus.FAILURE:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
