"""Command line entry point: convert, verify and serve the dashboard data."""

from __future__ import annotations

import json
import logging

import click

from . import __version__
from .common.logger import setup_logger
from .container import build_container
from .core.enums import ReportStatus
from .local_batch.command import ConvertOptions
from .main import create_app, load_settings

log = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="attendance-dashboard")
@click.pass_context
def cli(ctx):
    """Attendance dashboard tooling."""
    settings = load_settings()
    setup_logger(level=getattr(settings, "LOG_LEVEL", "INFO"))
    ctx.obj = settings


@cli.command()
@click.option("--input-dir", type=click.Path(file_okay=False), help="Directory holding the attendance report CSVs.")
@click.option("--output-dir", type=click.Path(file_okay=False), help="Public dataset directory to replace.")
@click.option("--report", "report_path", type=click.Path(dir_okay=False), help="Also save the report as JSON here.")
@click.pass_obj
def convert(settings, input_dir, output_dir, report_path):
    """Convert every report in INPUT_DIR and replace the public dataset."""
    input_dir = input_dir or settings.INPUT_DIR
    output_dir = output_dir or settings.OUTPUT_DIR
    report_path = report_path or getattr(settings, "REPORT_PATH", "")

    click.echo("=== Local data conversion ===")
    click.echo(f"Input:  {input_dir}")
    click.echo(f"Output: {output_dir}")
    click.echo("")

    container = build_container(output_dir=output_dir, input_extension=getattr(settings, "INPUT_EXTENSION", ".csv"))
    report = container.convert_command.execute(ConvertOptions(input_dir=input_dir, output_dir=output_dir))
    click.echo(container.reporter.format(report))

    if report_path:
        try:
            container.reporter.save_to_file(report, report_path)
        except OSError as e:
            log.error("Could not save report to %s: %s", report_path, e)
            raise click.ClickException(f"Could not save report: {e}")

    if report.status == ReportStatus.FAILURE:
        raise SystemExit(1)


@cli.command()
@click.option("--output-dir", type=click.Path(file_okay=False), help="Published dataset directory to check.")
@click.pass_obj
def verify(settings, output_dir):
    """Read the published dataset back the way the dashboard does."""
    container = build_container(output_dir=output_dir or settings.OUTPUT_DIR)
    result = container.verification_runner.run_all()
    click.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    if not result.ok:
        raise SystemExit(1)


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=5000, show_default=True, type=int)
@click.option("--output-dir", type=click.Path(file_okay=False), help="Published dataset directory to serve.")
def serve(host, port, output_dir):
    """Serve the read-only dashboard API."""
    app = create_app(output_dir=output_dir)
    app.run(host=host, port=port, debug=app.config["DEBUG"])


if __name__ == "__main__":
    cli()
