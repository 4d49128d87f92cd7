"""Command line interface for the card catalog.

Examples:
  dominion-cards build
  dominion-cards info --json
  dominion-cards query --columns name,cost --where "expansion = ?" --arg Alchemy --order name
  dominion-cards verify
"""

from __future__ import annotations

from typing import Optional

import click

from dominion_picker.cli.common import exit_with_message, format_rows, write_json_outputs
from dominion_picker.cli.handlers import (
    handle_build,
    handle_info,
    handle_query,
    handle_verify,
)
from dominion_picker.config.settings import CatalogSettings
from dominion_picker.core.logging import setup_logging


def _fail(result) -> None:
    raise click.ClickException(result["error"] or "unknown error")


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False),
    help="Directory holding cards.db (overrides DP_DATA_DIR).",
)
@click.option(
    "--resources-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with manifest.json and card files (defaults to packaged data).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Console log level (overrides DP_LOG_LEVEL).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    data_dir: Optional[str],
    resources_dir: Optional[str],
    log_level: Optional[str],
) -> None:
    """Dominion card catalog tools."""
    overrides = {
        "data_dir": data_dir,
        "resources_dir": resources_dir,
        "log_level": log_level,
    }
    config = CatalogSettings(**{k: v for k, v in overrides.items() if v is not None})
    setup_logging(config)
    ctx.obj = config


@cli.command()
@click.option("--force", is_flag=True, help="Rebuild even if the store is current.")
@click.pass_obj
def build(config: CatalogSettings, force: bool) -> None:
    """Build the card store (only when missing or stale unless --force)."""
    result = handle_build(config, force=force)
    if not result["ok"]:
        _fail(result)
    value = result["value"]
    click.echo(f"Card store {value['path']}: {value['rows']} cards (v{value['version']})")


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Emit JSON.")
@click.pass_obj
def info(config: CatalogSettings, as_json: bool) -> None:
    """Show card store statistics."""
    result = handle_info(config)
    if not result["ok"]:
        _fail(result)
    summary = result["value"]
    if as_json:
        write_json_outputs(payload=summary, emit_stdout=True)
        return
    click.echo(f"- path: {summary['path']}")
    click.echo(f"- exists: {'yes' if summary['exists'] else 'no'}")
    click.echo(
        f"- schema_version: {summary['recorded_version']} "
        f"declared={summary['declared_version']}"
    )
    click.echo(f"- cards: {summary['rows']}")
    click.echo(f"- built_at: {summary['built_at'] or '-'}")
    for expansion, count in summary["expansions"].items():
        click.echo(f"  {expansion}: {count}")


@cli.command()
@click.pass_obj
def verify(config: CatalogSettings) -> None:
    """Verify store health (exit non-zero on failure)."""
    result = handle_verify(config)
    if not result["ok"]:
        _fail(result)
    problems = result["value"]["problems"]
    if problems:
        exit_with_message(
            "\n".join(["FAIL"] + [f"- {problem}" for problem in problems]), code=3
        )
    click.echo("OK")


@cli.command()
@click.option("--columns", help="Comma-separated columns to return (default: all).")
@click.option("--where", "selection", help="Filter expression with ? placeholders.")
@click.option("--arg", "args", multiple=True, help="Value for a ? placeholder (repeatable).")
@click.option("--order", help="Sort order (default: expansion, name).")
@click.option("--limit", type=click.IntRange(min=1), help="Maximum rows to print.")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON.")
@click.option(
    "--out",
    type=click.Path(dir_okay=False),
    help="Also write the JSON result to this file.",
)
@click.pass_obj
def query(
    config: CatalogSettings,
    columns: Optional[str],
    selection: Optional[str],
    args: tuple[str, ...],
    order: Optional[str],
    limit: Optional[int],
    as_json: bool,
    out: Optional[str],
) -> None:
    """Query the card catalog."""
    projection = [c.strip() for c in columns.split(",") if c.strip()] if columns else None
    result = handle_query(
        config,
        columns=projection,
        where=selection,
        args=list(args),
        order=order,
        limit=limit,
    )
    if not result["ok"]:
        _fail(result)
    value = result["value"]
    if as_json or out:
        write_json_outputs(payload=value["rows"], out_path=out, emit_stdout=as_json)
        if as_json:
            return
    for line in format_rows(value["columns"], value["rows"]):
        click.echo(line)


if __name__ == "__main__":
    cli()
