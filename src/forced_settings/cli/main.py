"""
Main CLI entry point for forced-settings.

Provides commands to validate a settings file, preview the result of
merging it, and list the available loaders. All commands run in strict
mode, so any problem with a file is reported.
"""

import logging as _logging
import pathlib as _pathlib
import sys as _sys
import traceback as _traceback
import typing as _typing

import click as _click
import pydantic as _pydantic

import forced_settings
import forced_settings.config as config
import forced_settings.errors as errors
import forced_settings.formatting as formatting
import forced_settings.loaders.registry as registry
import forced_settings.merge as merge
import forced_settings.resolver as resolver

_logger = _logging.getLogger(__name__)

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

SEPARATOR = "-" * 80


def _configure_logging(debug: bool) -> None:
    """Send library logs to a rich handler when debugging."""
    if not debug:
        return
    import rich.logging as _rich_logging

    _logging.basicConfig(
        level=_logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[_rich_logging.RichHandler(show_path=False)],
    )


def _heading(title: str) -> None:
    _click.echo(title)
    _click.echo("=" * len(title))


def _print_yaml(yaml_text: str, *, color: bool) -> None:
    """Print YAML text, with syntax highlighting on a terminal."""
    if color:
        import rich.console as _rich_console
        import rich.syntax as _rich_syntax

        console = _rich_console.Console()
        console.print(
            _rich_syntax.Syntax(yaml_text, "yaml", theme="monokai", background_color="default")
        )
        return
    _click.echo(yaml_text, nl=False)


def _print_data(data: dict[str, _typing.Any], *, as_json: bool) -> None:
    if as_json:
        _click.echo(formatting.format_json(data))
    else:
        _print_yaml(formatting.format_yaml(data), color=_sys.stdout.isatty())


def _locate_file(filepath: str, settings: config.Settings) -> _pathlib.Path:
    """Resolve a settings file argument.

    Tries, in order:
    1. The path as given
    2. Relative to the current directory
    3. Relative to the application root

    Raises:
        SystemExit: If the file is not found.
    """
    candidates = [
        _pathlib.Path(filepath),
        _pathlib.Path.cwd() / filepath,
        settings.app_root / filepath,
    ]
    for candidate in candidates:
        if candidate.is_file():
            return candidate.resolve()

    _click.echo(f"File not found: {filepath}", err=True)
    raise SystemExit(1)


def _overrides_for(filepath: _pathlib.Path, loader: str | None) -> dict[str, str]:
    if not loader:
        return {}
    return {resolver.get_extension(filepath): loader}


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(forced_settings.__version__, "-V", "--version", prog_name="forced-settings")
@_click.option("--debug", is_flag=True, help="Show debug logging")
@_click.option(
    "--app-root",
    type=_click.Path(file_okay=False, path_type=_pathlib.Path),
    default=None,
    help="Base directory for relative loader paths",
)
@_click.option(
    "--core-section",
    type=str,
    default=None,
    help="Section merged into top-level settings",
)
@_click.pass_context
def cli(
    ctx: _click.Context,
    debug: bool,
    app_root: _pathlib.Path | None,
    core_section: str | None,
) -> None:
    """
    forced-settings - validate and inspect forced settings files.

    \b
    Examples:
        forced-settings validate .settings.json
        forced-settings validate config.toml -l local/loaders/toml_loader.py
        forced-settings preview .settings.yaml --json
        forced-settings loaders
    """
    _configure_logging(debug)

    overrides: dict[str, _typing.Any] = {"strict": True}
    if app_root is not None:
        overrides["app_root"] = app_root
    if core_section is not None:
        overrides["core_section"] = core_section

    try:
        settings = config.Settings(**overrides)
    except _pydantic.ValidationError as e:
        raise _click.ClickException(f"Invalid settings: {e}") from None

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    _logger.debug("Tool settings: %s", settings.describe())


@cli.command()
@_click.argument("file", type=str)
@_click.option("-l", "--loader", type=str, default=None, help="Path to a custom loader file")
@_click.option("-v", "--verbose", is_flag=True, help="Show additional checks and tracebacks")
@_click.option("--json", "as_json", is_flag=True, help="Print content as JSON")
@_click.pass_context
def validate(
    ctx: _click.Context,
    file: str,
    loader: str | None,
    verbose: bool,
    as_json: bool,
) -> None:
    """Validate a settings file and display its content.

    Uses the built-in loader for the file's extension unless --loader is
    given. The file is parsed but not merged anywhere.
    """
    settings: config.Settings = ctx.obj["settings"]
    filepath = _locate_file(file, settings)
    overrides = _overrides_for(filepath, loader)

    _heading("Configuration Validation Results")
    _click.echo(f"File: {filepath}")
    _click.echo(f"Size: {filepath.stat().st_size} bytes")
    if loader:
        _click.echo(f"Custom loader: {loader}")
    _click.echo(SEPARATOR + "\n")

    try:
        config_loader = resolver.LoaderResolver(settings, strict=True).resolve(
            filepath, overrides
        )
        data = config_loader.load(filepath)
    except errors.ForcedSettingsError as e:
        _click.echo("VALIDATION FAILED")
        _click.echo(f"Error: {e}")
        if verbose:
            _click.echo("\nStack trace:")
            _click.echo(_traceback.format_exc())
        raise SystemExit(1) from None

    _click.echo("VALIDATION SUCCESSFUL")
    _click.echo(f"Configuration file is valid (loader: {config_loader.identifier()})\n")

    _heading("Configuration Content")
    _print_data(data, as_json=as_json)

    if verbose:
        _click.echo("")
        _heading("Additional Checks")
        warnings = formatting.find_empty_values(data)
        if warnings:
            _click.echo("Warnings found:")
            for warning in warnings:
                _click.echo(f"  - {warning}")
        else:
            _click.echo("No warnings found.")

    _click.echo("\n" + SEPARATOR)
    _click.echo(f"Total sections: {len(data)}")
    _click.echo("Validation completed successfully.")


@cli.command()
@_click.argument("file", type=str)
@_click.option("-l", "--loader", type=str, default=None, help="Path to a custom loader file")
@_click.option("--json", "as_json", is_flag=True, help="Print result as JSON")
@_click.pass_context
def preview(
    ctx: _click.Context,
    file: str,
    loader: str | None,
    as_json: bool,
) -> None:
    """Show the configuration that applying a settings file produces.

    Merges the file into an empty configuration object and prints the
    top-level fields and per-component settings separately.
    """
    settings: config.Settings = ctx.obj["settings"]
    filepath = _locate_file(file, settings)

    host = merge.HostConfig()
    try:
        merge.apply(host, filepath, _overrides_for(filepath, loader), settings=settings)
    except errors.ForcedSettingsError as e:
        raise _click.ClickException(str(e)) from None

    fields = host.as_dict()
    components = fields.pop(settings.plugin_settings_attr, {})
    _print_data({"fields": fields, settings.plugin_settings_attr: components}, as_json=as_json)


@cli.command(name="loaders")
def list_loaders() -> None:
    """List the registered loaders by extension."""
    loader_registry = registry.get_default_registry()
    for extension in loader_registry.extensions():
        try:
            loader_cls = loader_registry.get(extension)
        except errors.LoaderResolutionError as e:
            _click.echo(f"  .{extension:<8} (unavailable: {e})")
            continue
        declared = ", ".join(sorted(loader_cls.supported_extensions())) or "-"
        _click.echo(f"  .{extension:<8} {loader_cls.identifier()}  [{declared}]")


def main() -> None:
    """Main entry point."""
    cli(prog_name="forced-settings")


if __name__ == "__main__":
    main()

