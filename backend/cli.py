#!/usr/bin/env python3
"""
CLI for Broker CSV Ingestion

Commands:
    parse       - Parse a broker file and show the review summary
    clean       - Run the pre-clean pass and write/print the cleaned file
    export      - Write the configuration preview table to CSV
    properties  - Print storage-ready property records as JSON

Usage:
    python cli.py parse data/broker_sheet.csv
    python cli.py parse data/broker_sheet.tsv --json
    python cli.py clean data/broker_sheet.csv --output data/broker_sheet.clean.csv
    python cli.py export data/broker_sheet.csv preview.csv
    python cli.py properties data/broker_sheet.csv --select 0,2,5

Examples:
    # Review what the automatic fixes would do, then parse the cleaned text
    python cli.py parse data/broker_sheet.csv --clean --verbose
"""

import json
import logging
import sys

import click

from config import Config
from services.csv_ingest import (
    IngestionError,
    clean_csv_text,
    configurations_frame,
    map_to_property_records,
    parse,
    reconciliation_check,
    select_for_import,
    summarize,
)
from utils.normalize import to_list, ValidationError

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else Config.LOG_LEVEL,
        format=Config.LOG_FORMAT,
        datefmt=Config.LOG_DATE_FORMAT,
    )


def read_text(file_path: str) -> str:
    """Whole file contents; undecodable bytes are a run-level IngestionError."""
    try:
        with open(file_path, 'r', encoding=Config.FILE_ENCODING, newline='') as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise IngestionError(
            f"Cannot decode {file_path} as {Config.FILE_ENCODING}: {e.reason} at byte {e.start}",
            field='file',
            received_value=file_path,
        )


def parse_file(file_path: str, clean: bool = False):
    """Read and parse a file, exiting with status 1 on a run-level failure."""
    try:
        text = read_text(file_path)
        if clean:
            cleaned = clean_csv_text(text)
            for change in cleaned.changes:
                logger.info(change)
            text = cleaned.cleaned_text
        return parse(text)
    except IngestionError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


def parse_selection(select: str, result):
    """Indices from --select, or every configuration when omitted."""
    if not select:
        return list(range(len(result.configurations)))
    try:
        return to_list(select, item_type=int, field='select')
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint='--select')


@click.group()
@click.version_option(version="1.0.0", prog_name="ingest")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def cli(verbose):
    """Broker CSV ingestion - parse, clean and export broker spreadsheets."""
    configure_logging(verbose)


@cli.command("parse")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "output_json", is_flag=True, help="Output the full result as JSON")
@click.option("--clean", is_flag=True, help="Run the pre-clean pass first")
def parse_command(file_path, output_json, clean):
    """
    Parse FILE_PATH and show projects, configurations and row errors.
    """
    result = parse_file(file_path, clean=clean)

    if output_json:
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return

    click.echo(summarize(result.stats))
    ok, _, message = reconciliation_check(result.stats)
    if not ok:
        click.secho(message, fg="yellow")

    if result.unmapped_headers:
        click.echo(f"Ignored columns: {', '.join(result.unmapped_headers)}")

    if result.configurations:
        click.echo()
        frame = configurations_frame(result).head(Config.PREVIEW_ROWS)
        click.echo(frame.to_string(index=False))

    if result.errors:
        click.echo()
        click.secho(f"{len(result.errors)} row errors:", fg="red")
        for error in result.errors[:Config.MAX_ERRORS_SHOWN]:
            click.echo(f"  - {error}")
        if len(result.errors) > Config.MAX_ERRORS_SHOWN:
            click.echo(f"  ... and {len(result.errors) - Config.MAX_ERRORS_SHOWN} more")


@cli.command("clean")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write cleaned text here")
def clean_command(file_path, output):
    """
    Run the pre-clean pass over FILE_PATH and report issues and changes.
    """
    try:
        cleaned = clean_csv_text(read_text(file_path))
    except IngestionError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    click.echo(f"Rows: {cleaned.original_rows - 1} -> {cleaned.cleaned_rows}")
    for issue in cleaned.issues:
        click.echo(f"  issue:  {issue}")
    for change in cleaned.changes:
        click.echo(f"  change: {change}")

    if output:
        with open(output, 'w', encoding='utf-8', newline='') as f:
            f.write(cleaned.cleaned_text + '\n')
        click.secho(f"Cleaned file written to {output}", fg="green")
    else:
        click.echo()
        click.echo(cleaned.cleaned_text)


@cli.command("export")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--clean", is_flag=True, help="Run the pre-clean pass first")
def export_command(file_path, output, clean):
    """
    Write the configuration preview of FILE_PATH to OUTPUT as CSV.
    """
    result = parse_file(file_path, clean=clean)
    frame = configurations_frame(result)
    frame.to_csv(output, index=False)
    click.secho(f"Wrote {len(frame)} configurations to {output}", fg="green")


@cli.command("properties")
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--select", "-s", default="", help="Comma-separated configuration indices")
@click.option("--clean", is_flag=True, help="Run the pre-clean pass first")
def properties_command(file_path, select, clean):
    """
    Print the property records that would be stored for FILE_PATH.
    """
    result = parse_file(file_path, clean=clean)
    indices = parse_selection(select, result)
    try:
        projects, configurations = select_for_import(result, indices)
    except IngestionError as e:
        raise click.BadParameter(str(e), param_hint='--select')

    records = map_to_property_records(projects, configurations)
    click.echo(json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
