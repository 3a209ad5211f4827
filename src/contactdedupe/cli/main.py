"""Command-line interface for contactdedupe.

Provides CLI commands for pair discovery and grouping over contact files.
"""

import importlib.metadata
import sys
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("contactdedupe")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development

FIELD_CHOICES = ("all", "name", "phone", "email")


@click.group()
@click.version_option(version=__version__, prog_name="contactdedupe")
def cli() -> None:
    """Explainable duplicate detection for contact records.

    Use 'contactdedupe COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output JSONL file path (default: stdout)",
)
@click.option(
    "--field",
    "-f",
    type=click.Choice(FIELD_CHOICES),
    default="all",
    show_default=True,
    help="Compare all fields, or audit a single field",
)
@click.option(
    "--threshold",
    "-t",
    type=click.FloatRange(0.0, 1.0),
    default=None,
    help="Match threshold (default: 0.6 for all fields, 0.8 name/phone, 0.9 email)",
)
def find(
    input_path: str,
    output: str | None,
    field: str,
    threshold: float | None,
) -> None:
    """Find likely duplicate pairs in INPUT_PATH.

    INPUT_PATH is a JSON array of contacts, an API response with a
    'contacts' list, or a JSONL file with one contact per line.

    Examples
    --------
        contactdedupe find contacts.json
        contactdedupe find contacts.jsonl --field phone -o phone_dupes.jsonl
    """
    import json

    from contactdedupe import (
        find_duplicates,
        find_duplicates_by_email,
        find_duplicates_by_name,
        find_duplicates_by_phone,
        load_contacts,
        write_jsonl,
    )

    try:
        contacts = load_contacts(input_path)

        if field == "name":
            matches = find_duplicates_by_name(contacts, threshold)
        elif field == "phone":
            matches = find_duplicates_by_phone(contacts, threshold)
        elif field == "email":
            matches = find_duplicates_by_email(contacts, threshold)
        else:
            matches = find_duplicates(contacts, threshold=threshold)

        if output:
            write_jsonl(matches, output)
            click.secho(f"✓ Wrote {len(matches)} matches to {output}", fg="green", err=True)
        else:
            for match in matches:
                click.echo(json.dumps(match.to_dict(), ensure_ascii=False, sort_keys=True))

    except Exception as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False),
    default=None,
    help="Output directory for results (default: out)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON configuration file",
)
@click.option(
    "--strategy",
    type=click.Choice(["seed", "transitive"]),
    default=None,
    help="Grouping strategy (default: seed)",
)
@click.option(
    "--threshold",
    "-t",
    type=click.FloatRange(0.0, 1.0),
    default=None,
    help="Pair similarity threshold (default: 0.6)",
)
@click.option(
    "--workers",
    "-w",
    type=click.IntRange(min=1),
    default=None,
    help="Worker processes for pair scoring (default: 1)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def group(
    input_path: str,
    output_dir: str | None,
    config_path: str | None,
    strategy: str | None,
    threshold: float | None,
    workers: int | None,
    verbose: bool,
) -> None:
    """Group duplicate contacts in INPUT_PATH and propose a primary for each.

    Writes matches.jsonl, groups.jsonl, reports/summary.json and an audit
    log (reports/events.jsonl) to OUTPUT_DIR. Options given on the command
    line override the configuration file.

    Examples
    --------
        contactdedupe group contacts.json
        contactdedupe group contacts.jsonl -o results --strategy transitive
        contactdedupe group contacts.json --config dedupe.json --workers 4
    """
    import time
    from dataclasses import replace

    from contactdedupe.audit import AuditLogger, generate_run_id
    from contactdedupe.engine import DedupeConfig, load_config, run_dedupe

    try:
        config = load_config(config_path) if config_path else DedupeConfig()

        overrides = {
            key: value
            for key, value in (
                ("strategy", strategy),
                ("pair_threshold", threshold),
                ("workers", workers),
            )
            if value is not None
        }
        if overrides:
            config.grouping = replace(config.grouping, **overrides)
        if output_dir is not None:
            config.output_dir = Path(output_dir)

        if verbose:
            click.echo("Starting contact deduplication...", err=True)
            click.echo(f"  Input: {input_path}", err=True)
            click.echo(f"  Output: {config.output_dir}", err=True)
            click.echo(f"  Strategy: {config.grouping.strategy.value}", err=True)
            click.echo(f"  Pair threshold: {config.grouping.pair_threshold}", err=True)
            click.echo(f"  Workers: {config.grouping.workers}", err=True)

        log_path = config.output_dir / "reports" / "events.jsonl"
        start = time.perf_counter()
        with AuditLogger(run_id=generate_run_id(), log_path=log_path) as logger:
            logger.run_started(command=sys.argv, parameters=config.to_dict())
            result = run_dedupe(input_path=Path(input_path), config=config, logger=logger)
            logger.run_finished(
                status="success" if result.success else "failed",
                duration_seconds=time.perf_counter() - start,
                contacts_processed=result.total_contacts,
            )

        if not result.success:
            click.secho(f"✗ Deduplication failed: {result.error_message}", fg="red", err=True)
            sys.exit(1)

        if verbose:
            click.echo("\nResults:", err=True)
            click.echo(f"  Contacts: {result.total_contacts}", err=True)
            click.echo(f"  Matching pairs: {result.total_matches}", err=True)
            click.echo(f"  Duplicate groups: {result.total_groups}", err=True)
            click.echo("\nOutputs:", err=True)
            for name, path in result.output_files.items():
                click.echo(f"  {name}: {path}", err=True)
            click.echo(f"  events: {log_path}", err=True)

        click.secho(
            f"✓ Found {result.total_groups} duplicate groups in {result.total_contacts} "
            f"contacts ({result.total_duplicates} duplicates)",
            fg="green",
        )

    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        if verbose:
            import traceback

            click.echo(traceback.format_exc(), err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
