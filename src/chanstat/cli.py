"""Command line interface for chanstat."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .channel import Channel
from .config import ModesConfig, load_config
from .errors import ChanstatError
from .events import event_to_json
from .modes import parse_isupport
from .parsers.znc import ZncParser
from .pipeline import run as run_pipeline
from .progress import NullProgress, ProgressBar

console = Console()
err_console = Console(stderr=True)


def _replay(path: Path, chanmodes: str, prefix: str) -> Channel:
    channel = Channel()
    channel.set_available_modes(*parse_isupport(chanmodes, prefix))
    parser = ZncParser()
    for day, log_path in parser.find_log_files(path):
        parser.read_log(day, log_path, channel)
    return channel


_chanmodes_option = click.option(
    "--chanmodes",
    default=ModesConfig().chanmodes,
    show_default=True,
    help="Channel modes in ISUPPORT CHANMODES syntax",
)
_prefix_option = click.option(
    "--prefix",
    default=ModesConfig().prefix,
    show_default=True,
    help="User modes in ISUPPORT PREFIX syntax",
)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug output")
def cli(verbose):
    """chanstat - replay IRC channel logs and collect statistics."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


@cli.command()
@click.argument("config_path", required=False, type=click.Path(path_type=Path))
@click.option("--no-progress", is_flag=True, help="Don't show a progress bar")
def run(config_path, no_progress):
    """Process logs as described by CONFIG_PATH (default: ./config.json)."""
    try:
        config = load_config(config_path)
        progress = NullProgress() if no_progress else ProgressBar(err_console)
        result = run_pipeline(config, progress=progress)
    except (ChanstatError, OSError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    channel = result.channel
    table = Table(title=f"Channel {channel.name}" if channel.name else "Channel")
    table.add_column("", style="cyan")
    table.add_column("")
    table.add_row("Files", str(result.files))
    table.add_row("Lines", str(result.stats.lines))
    table.add_row("Events", str(result.stats.events))
    table.add_row("Skipped lines", str(result.stats.skipped))
    table.add_row("Actors present", str(len(channel.actors)))
    table.add_row("Topic", channel.topic or "[dim](none)[/dim]")
    console.print(table)
    console.print(f"[green]✓[/green] Results written to {config.writer.target}")


@cli.command()
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@_chanmodes_option
@_prefix_option
def events(path, chanmodes, prefix):
    """Print the replayed events of a log file or directory as JSON lines."""
    try:
        channel = _replay(path, chanmodes, prefix)
    except (ChanstatError, OSError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    for event in channel.events:
        click.echo(event_to_json(event))


@cli.command()
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@_chanmodes_option
@_prefix_option
def state(path, chanmodes, prefix):
    """Show channel state after replaying a log file or directory."""
    try:
        channel = _replay(path, chanmodes, prefix)
    except (ChanstatError, OSError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    console.print(f"[bold]Topic:[/bold] {channel.topic or '(none)'}")
    console.print(f"Events: {len(channel.events)}, Actors: {len(channel.actors)}")
    console.print()

    if channel.actors:
        table = Table(title="Actors")
        table.add_column("Nick", style="cyan")
        table.add_column("Ident")
        table.add_column("Host")
        table.add_column("Modes", style="green")
        user_modes = channel.get_user_modes()
        for nick in sorted(channel.actors, key=str.lower):
            actor = channel.actors[nick]
            modes = "".join(letter for letter, nicks in user_modes.items() if nick in nicks)
            table.add_row(nick, actor.ident or "", actor.host or "", modes)
        console.print(table)
    else:
        console.print("[dim]No actors[/dim]")

    flags = "".join(
        letter for letter, value in channel.get_channel_modes().items() if value is True
    )
    params = {
        letter: value for letter, value in channel.get_channel_modes().items()
        if isinstance(value, str)
    }
    console.print(f"Channel modes: +{flags}" + "".join(f" {k}={v}" for k, v in params.items()))
    for letter, entries in channel.get_lists().items():
        if entries:
            console.print(f"List +{letter}: {', '.join(entries)}")


if __name__ == "__main__":
    cli()
