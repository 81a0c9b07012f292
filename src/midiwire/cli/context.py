"""Helpers shared by CLI commands."""

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click

from midiwire.exceptions import format_error_for_display
from midiwire.models import AppConfig

logger = logging.getLogger(__name__)


def config_path(ctx: click.Context) -> Optional[Path]:
    """Config file chosen with --config, or None for the default."""
    return (ctx.obj or {}).get("config_path")


def load_config(ctx: click.Context) -> AppConfig:
    """Load the application config, exiting with a readable message if it is broken."""
    try:
        return AppConfig.load_or_default(config_path(ctx))
    except Exception as e:
        fail(ctx, e)


def fail(ctx: click.Context, error: Exception) -> NoReturn:
    """Show an error without a traceback and exit with status 1."""
    logger.error(f"Command failed: {error}", exc_info=True)

    user_message, recovery_hint = format_error_for_display(error)

    click.echo(f"ERROR: {user_message}", err=True)
    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)

    log_path = (ctx.obj or {}).get("log_path")
    if log_path:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)

    sys.exit(1)
