"""CLI entry point for logframe."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

import click

from logframe import __version__
from logframe.config import FramerConfig
from logframe.debug_log import export_logs_to_file, setup_debug_logging
from logframe.errors import LogframeError
from logframe.framer import LineFramer
from logframe.limits import DEBUG_CAPTURE, DEFAULT_BATCH_SIZE
from logframe.sources import FileCharSource

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from logframe.event import Event

DEFAULT_SEPARATOR = "\n---\n"

F = TypeVar("F", bound="Callable[..., Any]")


def framer_options(func: F) -> F:
    """Options shared by commands that frame a file."""
    decorators = [
        click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path)),
        click.option(
            "-c",
            "--config",
            "config_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            default=None,
            help="TOML file with a [framer] table",
        ),
        click.option("--charset", default=None, help="Input and output charset (default UTF-8)"),
        click.option("--max-length", type=int, default=None, help="Maximum event length"),
        click.option("--prefix", default=None, help="Start-of-entry prefix character"),
        click.option(
            "--batch-size",
            type=click.IntRange(min=1),
            default=DEFAULT_BATCH_SIZE,
            show_default=True,
            help="Events read between marks",
        ),
        click.option(
            "--debug-log",
            type=click.Path(dir_okay=False, path_type=Path),
            default=None,
            help="Write captured log records to this file",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _resolve_config(
    config_path: Path | None,
    charset: str | None,
    max_length: int | None,
    prefix: str | None,
) -> FramerConfig:
    try:
        return FramerConfig.load(config_path).with_overrides(
            output_charset=charset,
            max_event_length=max_length,
            start_prefix=prefix,
        )
    except LogframeError as exc:
        raise click.BadParameter(str(exc), param_hint="configuration") from exc


def _iter_batches(path: Path, config: FramerConfig, batch_size: int) -> Iterator[list[Event]]:
    source = FileCharSource(path, charset=config.output_charset)
    with LineFramer(source, config) as framer:
        # An empty entry also reads as None, so only the source knows when input ends.
        while not source.at_eof:
            framer.mark()
            events = framer.read_events(batch_size)
            if events:
                yield events


def _run(
    path: Path,
    config_path: Path | None,
    charset: str | None,
    max_length: int | None,
    prefix: str | None,
    batch_size: int,
    debug_log: Path | None,
    handle: Callable[[list[Event], FramerConfig], None],
) -> None:
    if debug_log is not None or DEBUG_CAPTURE:
        setup_debug_logging()
    config = _resolve_config(config_path, charset, max_length, prefix)
    try:
        for batch in _iter_batches(path, config, batch_size):
            handle(batch, config)
    except (OSError, UnicodeError) as exc:
        raise click.ClickException(f"Failed to read {path}: {exc}") from exc
    finally:
        if debug_log is not None:
            export_logs_to_file(debug_log)


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version and exit")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """Frame multi-line log files into events."""
    if version:
        click.echo(f"logframe {__version__}")
        ctx.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@framer_options
@click.option(
    "--separator",
    default=DEFAULT_SEPARATOR,
    show_default=repr(DEFAULT_SEPARATOR),
    help="Text written after each event",
)
def split(
    path: Path,
    config_path: Path | None,
    charset: str | None,
    max_length: int | None,
    prefix: str | None,
    batch_size: int,
    debug_log: Path | None,
    separator: str,
) -> None:
    """Print each event of PATH followed by a separator.

    \b
    Examples:
        logframe split app.log
        logframe split app.log --prefix '#' --max-length 4096
        logframe split app.log -c logframe.toml --batch-size 500
    """

    def emit(batch: list[Event], config: FramerConfig) -> None:
        for event in batch:
            click.echo(event.text(config.output_charset) + separator, nl=False)

    _run(path, config_path, charset, max_length, prefix, batch_size, debug_log, emit)


@cli.command()
@framer_options
def count(
    path: Path,
    config_path: Path | None,
    charset: str | None,
    max_length: int | None,
    prefix: str | None,
    batch_size: int,
    debug_log: Path | None,
) -> None:
    """Print the number of events in PATH."""
    total = 0

    def tally(batch: list[Event], config: FramerConfig) -> None:
        nonlocal total
        total += len(batch)

    _run(path, config_path, charset, max_length, prefix, batch_size, debug_log, tally)
    click.echo(total)


if __name__ == "__main__":
    cli()
