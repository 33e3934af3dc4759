"""Command line interface for dirscout."""

from __future__ import annotations

import difflib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.syntax import Syntax

from dirscout.config import ConfigError, ConfigManager, DirscoutConfig, resolve_with_precedence
from dirscout.config.resolver import assign_path
from dirscout.discovery import DiscoveryError, FileType, Locator, Walker, classify, type_name
from dirscout.logs import LEVELS, configure_logging
from dirscout.output import OutputFormat, render

LOGGER = logging.getLogger("dirscout.cli")

console = Console()


@dataclass
class _Options:
    """Global flags captured by the root command."""

    log_level: str | None = None
    output_format: str | None = None

    def overrides(self) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        if self.log_level:
            overrides["logging.level"] = self.log_level.upper()
        if self.output_format:
            overrides["cli.output_format"] = self.output_format
        return overrides


def _load_config(ctx: click.Context) -> DirscoutConfig:
    """Return the effective configuration and configure logging from it.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    options = ctx.find_object(_Options) or _Options()
    try:
        config = ConfigManager().load(cli_overrides=options.overrides())
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    configure_logging(config.logging.level)
    LOGGER.debug("Loaded configuration", extra={"dirscout": config.model_dump(mode="json")})
    return config


def _emit(config: DirscoutConfig, datum: Any) -> None:
    click.echo(render(OutputFormat(config.cli.output_format), datum), nl=False)


def _settings_lines(text: str) -> list[str]:
    return [line for line in text.splitlines() if not line.startswith("#")]


def _locator(config: DirscoutConfig, names: tuple[str, ...]) -> Locator:
    walker = Walker(logger=LOGGER, follow_symlinks=config.walk.follow_symlinks)
    return Locator(*(names or config.search.candidates), logger=LOGGER, walker=walker)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="dirscout")
@click.option(
    "-z",
    "--log-level",
    type=click.Choice(list(LEVELS), case_sensitive=False),
    help="Log verbosity; defaults to the configured level.",
)
@click.option(
    "-o",
    "--output",
    "output_format",
    type=click.Choice([fmt.value for fmt in OutputFormat], case_sensitive=False),
    help="Command output format; defaults to the configured format.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, output_format: str | None) -> None:
    """dirscout locates fixtures directories and inventories the files inside them.

    NAMES default to the configured candidates, normally `testdata`.
    """
    ctx.obj = _Options(
        log_level=log_level,
        output_format=output_format.lower() if output_format else None,
    )


@cli.command("find")
@click.argument("names", nargs=-1)
@click.pass_context
def find_command(ctx: click.Context, names: tuple[str, ...]) -> None:
    """Print the nearest directory named by one of NAMES.

    The search climbs from the working directory to the filesystem root, then
    repeats from the enclosing git repository root.
    """
    config = _load_config(ctx)
    locator = _locator(config, names)
    try:
        directory = locator.resolve()
    except DiscoveryError as exc:
        raise click.ClickException(str(exc)) from exc

    _emit(config, {"directory": directory})


@cli.command("walk")
@click.argument("names", nargs=-1)
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Walk this directory instead of searching for NAMES.",
)
@click.option("--sort/--no-sort", "sort_output", default=None, help="Sort entries by path.")
@click.option(
    "--type",
    "types",
    multiple=True,
    type=click.Choice(
        [member.value for member in FileType if member is not FileType.DIRECTORY],
        case_sensitive=False,
    ),
    help="Only include entries of this type; repeatable.",
)
@click.pass_context
def walk_command(
    ctx: click.Context,
    names: tuple[str, ...],
    root: Path | None,
    sort_output: bool | None,
    types: tuple[str, ...],
) -> None:
    """List every file beneath the located directory with its detected type."""
    if root is not None and names:
        raise click.UsageError("NAMES cannot be combined with --root.")

    config = _load_config(ctx)
    locator = _locator(config, names)
    try:
        descriptors = locator.walk(root)
    except DiscoveryError as exc:
        raise click.ClickException(str(exc)) from exc
    except OSError as exc:
        raise click.ClickException(
            f"Error while walking {exc.filename or root}: {exc.strerror or exc}"
        ) from exc

    if types:
        wanted = {name.lower() for name in types}
        descriptors = [item for item in descriptors if item.type.value.lower() in wanted]
    sort_enabled = config.walk.sort if sort_output is None else sort_output
    if sort_enabled:
        descriptors = sorted(descriptors, key=lambda item: str(item.path))

    _emit(config, descriptors)


@cli.command("classify")
@click.argument("extensions", nargs=-1, required=True)
@click.pass_context
def classify_command(ctx: click.Context, extensions: tuple[str, ...]) -> None:
    """Print the detected type for each of EXTENSIONS."""
    config = _load_config(ctx)
    _emit(config, {extension: type_name(classify(extension)) for extension in extensions})


@cli.group()
def config() -> None:
    """Inspect and update the dirscout configuration file."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules."""
    manager = ConfigManager()
    try:
        config = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(config.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="YAML literal to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value addressed by a dotted KEY such as `walk.sort`."""
    manager = ConfigManager()
    manager.ensure_exists()

    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException("KEY must specify a dotted path such as 'walk.sort'.")

    try:
        parsed_value = yaml.safe_load(value)
        file_data = manager.load_file_overrides()
        assign_path(file_data, segments, parsed_value)
        resolve_with_precedence(defaults=DirscoutConfig(), file_overrides=file_data)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    before = _settings_lines(manager.read_text())
    manager.save(file_data)
    after = _settings_lines(manager.read_text())

    diff = list(
        difflib.unified_diff(
            before,
            after,
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
    )
    if not diff:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
