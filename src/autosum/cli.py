"""Click CLI for list-autosum.

Commands:
    totals    — Print the total of every reportable list in a document
    annotate  — Print the total annotations of a document as JSON
    parse     — Parse one line of text and show the value found
    report    — Print or save a run report for a document
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from autosum.aggregator import format_list_total
from autosum.config import Config
from autosum.exceptions import AutosumError
from autosum.numeric import format_with_unit, parse_numeric_value
from autosum.pipeline import Autosum


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to a YAML configuration file.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Totals for numeric values in document lists."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = Config.load(config_path)
    except AutosumError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)
    if verbose:
        config.verbose = True

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["autosum"] = Autosum(config)


@main.command()
@click.argument("document_json", type=click.Path(exists=True, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output the totals as JSON.")
@click.pass_context
def totals(ctx: click.Context, document_json: Path, as_json: bool) -> None:
    """Print the total of every list with at least two numeric items."""
    autosum: Autosum = ctx.obj["autosum"]

    try:
        document = autosum.load(document_json)
    except AutosumError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)

    results = autosum.totals(document) if autosum.config.enabled else []
    if as_json:
        click.echo(json.dumps([t.model_dump(mode="json") for t in results], indent=2))
        return

    for total in results:
        click.echo(f"{total.position}: {format_list_total(total)}")


@main.command()
@click.argument("document_json", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def annotate(ctx: click.Context, document_json: Path) -> None:
    """Print the annotations for a document as JSON."""
    autosum: Autosum = ctx.obj["autosum"]

    try:
        document = autosum.load(document_json)
    except AutosumError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)

    payload = [
        {**annotation.model_dump(mode="json"), "text": annotation.text}
        for annotation in autosum.annotate(document)
    ]
    click.echo(json.dumps(payload, indent=2))


@main.command()
@click.argument("text")
def parse(text: str) -> None:
    """Parse TEXT and show the first numeric value in it."""
    parsed = parse_numeric_value(text)
    if parsed is None:
        click.echo("no value")
        raise SystemExit(1)

    click.echo(
        f"value={format_with_unit(parsed.value, '')} "
        f"unit={parsed.unit.value or '-'} "
        f"matched={parsed.original_text!r}"
    )


@main.command()
@click.argument("document_json", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the report JSON to this file instead of stdout.",
)
@click.pass_context
def report(ctx: click.Context, document_json: Path, output_path: Path | None) -> None:
    """Build a report of the lists and totals in a document."""
    autosum: Autosum = ctx.obj["autosum"]

    try:
        rpt = autosum.run(document_json)
    except AutosumError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)

    if output_path is None:
        click.echo(rpt.to_json())
        return

    output_path.write_text(rpt.to_json(), encoding="utf-8")
    click.echo(
        f"Report: {rpt.list_count} lists, {rpt.reportable_count} totals, "
        f"{rpt.numeric_item_count} numeric items"
    )
    click.echo(f"Saved: {output_path}")
