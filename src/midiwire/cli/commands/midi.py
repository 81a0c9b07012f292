"""MIDI command implementations."""

import logging
import time
from typing import Optional

import click

from midiwire.core import Dispatcher
from midiwire.midi import MidiManager
from midiwire.models import LogicalMessage, MessageKind

from ..context import fail, load_config

logger = logging.getLogger(__name__)


class ConsoleMonitor:
    """Prints every routed message with its source and delta time."""

    def on_midi_message(self, source: str, message: LogicalMessage) -> None:
        click.echo(format_message(source, message))


def format_message(source: str, message: LogicalMessage) -> str:
    """Format a decoded message as one console line."""
    fields = message.model_dump(exclude={"kind", "delta_ms"})
    if message.kind in (MessageKind.SYSEX_BYTE, MessageKind.RAW_BYTE):
        fields = {"channel": fields["channel"], "byte": f"0x{fields['byte']:02X}"}
    details = " ".join(f"{key}={value}" for key, value in fields.items())
    return f"[+{message.delta_ms:9.3f} ms] {source}: {message.kind.value} {details}"


@click.group(name="midi")
def midi_group():
    """MIDI port commands."""
    pass


@midi_group.command(name="list")
@click.pass_context
def list_midi(ctx):
    """
    List available MIDI ports.

    Output indices are the ones 'midiwire send --dest' accepts: only outputs
    matching the configured output_port_filter are numbered.
    """
    config = load_config(ctx)
    midi = MidiManager(
        input_pattern=config.input_port_filter,
        output_pattern=config.output_port_filter,
    )
    available = MidiManager.list_ports()
    matching = midi.matching_ports()

    click.echo("MIDI Input Ports:\n")
    if not available["input"]:
        click.echo("  No MIDI input ports found.")
    for port in available["input"]:
        marker = "*" if config.input_port_filter and port in matching["input"] else " "
        click.echo(f"  {marker} {port}")
    if config.input_port_filter:
        click.echo(f"\n  (* = opened by monitor, input_port_filter '{config.input_port_filter}')")

    click.echo("\nMIDI Output Ports (destination index):\n")
    if not available["output"]:
        click.echo("  No MIDI output ports found.")
    for i, port in enumerate(matching["output"]):
        click.echo(f"  [{i}] {port}")
    for port in available["output"]:
        if port not in matching["output"]:
            click.echo(f"  [-] {port} (excluded by output_port_filter '{config.output_port_filter}')")


@midi_group.command(name="monitor")
@click.option(
    "--port",
    "-p",
    type=str,
    default=None,
    help="Only monitor inputs whose name contains this text (default: config input_port_filter)",
)
@click.option(
    "--sysex/--no-sysex",
    default=None,
    help="Show SysEx bytes (default: from config)",
)
@click.option(
    "--clock/--no-clock",
    default=None,
    help="Show timing clock and time code (default: from config)",
)
@click.option(
    "--sense/--no-sense",
    default=None,
    help="Show active sensing (default: from config)",
)
@click.pass_context
def monitor_midi(
    ctx: click.Context,
    port: Optional[str],
    sysex: Optional[bool],
    clock: Optional[bool],
    sense: Optional[bool],
):
    """
    Monitor MIDI inputs and print decoded messages.

    Every packet goes through the same framing and filtering as in an
    application, so the output shows exactly what sinks would receive.

    Press Ctrl+C to stop monitoring.
    """
    config = load_config(ctx)

    overrides = {}
    if sysex is not None:
        overrides["ignore_sysex"] = not sysex
    if clock is not None:
        overrides["ignore_realtime_clock"] = not clock
    if sense is not None:
        overrides["ignore_active_sensing"] = not sense
    filters = config.filters.model_copy(update=overrides)

    pattern = port if port is not None else config.input_port_filter
    midi = MidiManager(input_pattern=pattern)
    dispatcher = Dispatcher(transport=midi, filters=filters, clock=midi.clock)
    dispatcher.register_monitor(ConsoleMonitor())
    midi.attach(dispatcher)

    try:
        midi.open(inputs=True, outputs=False, require=True)

        click.echo(f"Monitoring {len(midi.input_ports)} MIDI input port(s):")
        for name in midi.input_ports:
            click.echo(f"  - {name}")
        click.echo(
            f"\nFilters: sysex={'hidden' if filters.ignore_sysex else 'shown'}, "
            f"clock={'hidden' if filters.ignore_realtime_clock else 'shown'}, "
            f"active sensing={'hidden' if filters.ignore_active_sensing else 'shown'}"
        )
        click.echo("\nPress Ctrl+C to stop\n")

        while True:
            time.sleep(0.1)

    except KeyboardInterrupt:
        logger.info("Monitor interrupted by user")
        click.echo("\n\nStopping monitor...")
    except Exception as e:
        fail(ctx, e)
    finally:
        midi.close()
