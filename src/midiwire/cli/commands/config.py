"""Config command implementations."""

import json
import logging
from typing import Optional

import click

from midiwire.models.config import DEFAULT_CONFIG_PATH

from ..context import config_path, fail, load_config

logger = logging.getLogger(__name__)


@click.group(name="config")
def config_group():
    """Show and change midiwire settings."""
    pass


@config_group.command(name="show")
@click.option("--field", "-f", type=str, default=None, help="Show a single field")
@click.pass_context
def show(ctx, field: Optional[str]):
    """Display the current configuration."""
    config = load_config(ctx)
    data = config.model_dump(mode="json")

    if field:
        if field not in data:
            click.echo(f"Error: Field '{field}' does not exist", err=True)
            ctx.exit(1)
        click.echo(json.dumps(data[field], indent=2))
        return

    click.echo(f"Configuration ({config_path(ctx) or DEFAULT_CONFIG_PATH}):\n")
    click.echo(json.dumps(data, indent=2))


@config_group.command(name="filters")
@click.option("--ignore-sysex/--no-ignore-sysex", default=None, help="Drop System Exclusive input")
@click.option("--ignore-clock/--no-ignore-clock", default=None, help="Drop timing clock and time code")
@click.option("--ignore-sensing/--no-ignore-sensing", default=None, help="Drop active sensing")
@click.pass_context
def filters(
    ctx,
    ignore_sysex: Optional[bool],
    ignore_clock: Optional[bool],
    ignore_sensing: Optional[bool],
):
    """
    Change the input filters.

    Without options, prints the current filters.

    \b
    Examples:
      # Show SysEx but keep dropping clock
      midiwire config filters --no-ignore-sysex --ignore-clock
    """
    config = load_config(ctx)

    updates = {}
    if ignore_sysex is not None:
        updates["ignore_sysex"] = ignore_sysex
    if ignore_clock is not None:
        updates["ignore_realtime_clock"] = ignore_clock
    if ignore_sensing is not None:
        updates["ignore_active_sensing"] = ignore_sensing

    if updates:
        config = config.model_copy(update={"filters": config.filters.model_copy(update=updates)})
        try:
            config.save(config_path(ctx))
        except Exception as e:
            fail(ctx, e)
        logger.info(f"Filters updated: {updates}")
        click.echo("✓ Filters updated")

    for name, value in config.filters.model_dump().items():
        click.echo(f"  {name}: {value}")
