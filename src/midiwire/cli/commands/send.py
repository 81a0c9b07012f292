"""Send command implementations."""

import logging
from typing import Optional

import click
from pydantic import ValidationError

from midiwire.core import Dispatcher
from midiwire.midi import MidiManager
from midiwire.models import (
    PITCH_BEND_MAX,
    AftertouchCommand,
    AnyCommand,
    ControlChangeCommand,
    NoteOffCommand,
    NoteOnCommand,
    PitchBendCommand,
    PolyAftertouchCommand,
    ProgramChangeCommand,
    RawByteCommand,
)

from ..context import fail, load_config

logger = logging.getLogger(__name__)

CHANNEL = click.IntRange(1, 16)
DATA = click.IntRange(0, 127)


def dest_option(func):
    return click.option(
        "--dest",
        "-d",
        type=click.IntRange(min=0),
        default=None,
        help="Output index shown by 'midiwire midi list' (default: config default_destination, else all)",
    )(func)


def send_command(ctx: click.Context, build) -> None:
    """Open outputs, send one command and close again."""
    config = load_config(ctx)

    try:
        command: AnyCommand = build()
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e

    midi = MidiManager(output_pattern=config.output_port_filter)
    dispatcher = Dispatcher(transport=midi, default_destination=config.default_destination)

    try:
        midi.open(inputs=False, outputs=True, require=True)
        if config.network_enabled:
            dispatcher.enable_network(True)
        sent = dispatcher.send(command)
    except Exception as e:
        fail(ctx, e)
    finally:
        midi.close()

    if not sent:
        raise click.ClickException(
            f"{command.kind.value} not sent: destination not found "
            f"(run 'midiwire midi list' for output indices)"
        )
    click.echo(f"Sent {command.kind.value}")


@click.group(name="send")
def send_group():
    """Send a single MIDI message."""
    pass


@send_group.command(name="note-on")
@click.argument("channel", type=CHANNEL)
@click.argument("pitch", type=DATA)
@click.argument("velocity", type=DATA)
@dest_option
@click.pass_context
def note_on(ctx, channel: int, pitch: int, velocity: int, dest: Optional[int]):
    """Send a note on."""
    send_command(ctx, lambda: NoteOnCommand(
        channel=channel, pitch=pitch, velocity=velocity, destination=dest
    ))


@send_group.command(name="note-off")
@click.argument("channel", type=CHANNEL)
@click.argument("pitch", type=DATA)
@click.argument("velocity", type=DATA, default=0)
@dest_option
@click.pass_context
def note_off(ctx, channel: int, pitch: int, velocity: int, dest: Optional[int]):
    """Send a note off (release velocity defaults to 0)."""
    send_command(ctx, lambda: NoteOffCommand(
        channel=channel, pitch=pitch, velocity=velocity, destination=dest
    ))


@send_group.command(name="cc")
@click.argument("channel", type=CHANNEL)
@click.argument("controller", type=DATA)
@click.argument("value", type=DATA)
@dest_option
@click.pass_context
def control_change(ctx, channel: int, controller: int, value: int, dest: Optional[int]):
    """Send a control change."""
    send_command(ctx, lambda: ControlChangeCommand(
        channel=channel, controller=controller, value=value, destination=dest
    ))


@send_group.command(name="program")
@click.argument("channel", type=CHANNEL)
@click.argument("value", type=DATA)
@dest_option
@click.pass_context
def program_change(ctx, channel: int, value: int, dest: Optional[int]):
    """Send a program change."""
    send_command(ctx, lambda: ProgramChangeCommand(channel=channel, value=value, destination=dest))


@send_group.command(name="bend")
@click.argument("channel", type=CHANNEL)
@click.argument("value", type=click.IntRange(0, PITCH_BEND_MAX))
@dest_option
@click.pass_context
def pitch_bend(ctx, channel: int, value: int, dest: Optional[int]):
    """
    Send a pitch bend.

    VALUE is 14-bit unsigned: 0 is full down, 8192 is center, 16383 is full up.
    """
    send_command(ctx, lambda: PitchBendCommand(channel=channel, value=value, destination=dest))


@send_group.command(name="aftertouch")
@click.argument("channel", type=CHANNEL)
@click.argument("value", type=DATA)
@dest_option
@click.pass_context
def aftertouch(ctx, channel: int, value: int, dest: Optional[int]):
    """Send channel aftertouch."""
    send_command(ctx, lambda: AftertouchCommand(channel=channel, value=value, destination=dest))


@send_group.command(name="poly-aftertouch")
@click.argument("channel", type=CHANNEL)
@click.argument("pitch", type=DATA)
@click.argument("value", type=DATA)
@dest_option
@click.pass_context
def poly_aftertouch(ctx, channel: int, pitch: int, value: int, dest: Optional[int]):
    """Send polyphonic aftertouch."""
    send_command(ctx, lambda: PolyAftertouchCommand(
        channel=channel, pitch=pitch, value=value, destination=dest
    ))


@send_group.command(name="raw")
@click.argument("byte", type=str)
@dest_option
@click.pass_context
def raw_byte(ctx, byte: str, dest: Optional[int]):
    """
    Send a single raw byte.

    BYTE is decimal or 0x-prefixed hex, e.g. 0xFA (start).
    """
    try:
        value = int(byte, 0)
    except ValueError as e:
        raise click.BadParameter(f"not a number: {byte}", param_hint="BYTE") from e
    send_command(ctx, lambda: RawByteCommand(byte=value, destination=dest))
