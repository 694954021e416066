"""Configuration management commands."""

from typing import Optional

import typer
from pydantic import ValidationError

from pomotrack.config import get_config_manager
from pomotrack.exceptions import InvalidInputError, NotFoundError
from pomotrack.utils.ui.console import get_console
from pomotrack.utils.ui.formatters import (
    format_info,
    format_single_item,
    format_success,
    print_json,
)

from .decorators import command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


@app.command("view")
@command_wrapper
def view_config(
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    output: str = typer.Option("pretty", "--output", "-o", help="Output format"),
) -> None:
    """View current configuration."""
    config = get_config_manager(profile).config
    if output == "json":
        print_json(config)
        return
    for section, values in config.model_dump().items():
        console.print(f"[bold cyan]{section}[/bold cyan]")
        format_single_item(values)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., focus.work_minutes)"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Get a configuration value."""
    value = get_config_manager(profile).get(key)
    if value is None:
        raise NotFoundError("Configuration key", key)
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., focus.work_minutes)"),
    value: str = typer.Argument(..., help="Configuration value"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
) -> None:
    """Set a configuration value."""
    config_manager = get_config_manager(profile)

    parsed_value: str | int | bool = value
    if value.lower() in ("true", "false"):
        parsed_value = value.lower() == "true"
    elif value.isdigit():
        parsed_value = int(value)

    try:
        config_manager.set(key, parsed_value)
    except ValidationError as e:
        raise InvalidInputError(f"Invalid value for '{key}': {value}") from e
    format_success(f"Configuration '{key}' set to '{parsed_value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    key: Optional[str] = typer.Argument(None, help="Configuration key to reset"),
    profile: str = typer.Option("default", "--profile", help="Profile name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes:
        target = f"'{key}'" if key else "all configuration"
        if not typer.confirm(f"Reset {target} to defaults?"):
            format_info("Cancelled")
            return
    get_config_manager(profile).reset(key)
    format_success(f"Configuration '{key}' reset" if key else "Configuration reset")
