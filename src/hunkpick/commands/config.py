# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

import os
from dataclasses import MISSING, fields
from enum import Enum
from pathlib import Path
from textwrap import shorten
from typing import Any, get_type_hints

import tomllib
import typer
from colorama import Fore, Style, init
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from hunkpick.constants import (
    CONFIG_FILENAME,
    ENV_APP_PREFIX,
    GLOBAL_CONFIG_FILE,
    LOCAL_CONFIG_FILE,
)
from hunkpick.context import GlobalConfig
from hunkpick.core.exceptions import (
    ConfigurationError,
    handle_hunkpick_exception,
    invalid_config_value,
)

# Initialize colorama
init(autoreset=True)


class ScopeChoice(str, Enum):
    local = "local"
    global_ = "global"
    env = "env"


def display_config(data: list[dict], max_value_length: int = 50) -> None:
    """
    Display config data in a two-line format:
    Key: Description
      Value (Source)
    """
    for item in data:
        value_display = shorten(str(item["Value"]), width=max_value_length, placeholder="...")

        print(
            f"{Fore.CYAN}{Style.BRIGHT}{item['Key']}{Style.RESET_ALL}: "
            f"{Fore.WHITE}{item['Description']}{Style.RESET_ALL}"
        )
        print(
            f"  {Fore.GREEN}{value_display}{Style.RESET_ALL} "
            f"{Fore.YELLOW}({item['Source']}){Style.RESET_ALL}"
        )
        print()


def _get_config_schema() -> dict[str, dict[str, Any]]:
    """Get the schema of available config options from GlobalConfig."""
    hints = get_type_hints(GlobalConfig, include_extras=True)
    schema = {}

    for field in fields(GlobalConfig):
        schema[field.name] = {
            "description": GlobalConfig.descriptions.get(
                field.name, "No description available"
            ),
            "default": None if field.default is MISSING else field.default,
            "type": hints[field.name],
        }

    return schema


def print_describe_options() -> None:
    print(f"{Fore.WHITE}{Style.BRIGHT}Available configuration options:{Style.RESET_ALL}\n")

    table_data = []
    for key, info in sorted(_get_config_schema().items()):
        table_data.append(
            {
                "Key": key,
                "Description": info["description"],
                "Value": info["default"],
                "Source": "Default",
            }
        )
    display_config(table_data, max_value_length=80)


def _check_key_exists(key: str) -> dict:
    """Check if a config key exists. If not, show available options and exit."""
    schema = _get_config_schema()

    if key not in schema:
        print(f"{Fore.RED}Error:{Style.RESET_ALL} Unknown configuration key '{key}'\n")
        print_describe_options()
        raise typer.Exit(1)

    return schema[key]


def coerce_value(key: str, value: str, field_info: dict) -> Any:
    """Convert a command line string into the type GlobalConfig declares for key."""
    try:
        return TypeAdapter(field_info["type"]).validate_python(value)
    except PydanticValidationError as e:
        raise invalid_config_value(key, str(e)) from e


def _add_to_gitignore(config_filename: str) -> None:
    """Add config file to .gitignore if it exists."""
    gitignore_path = Path(".gitignore")
    if not gitignore_path.exists():
        return

    gitignore_content = gitignore_path.read_text()
    if config_filename in gitignore_content:
        return

    with gitignore_path.open("a") as f:
        if gitignore_content and not gitignore_content.endswith("\n"):
            f.write("\n")
        f.write(f"{config_filename}\n")
    print(f"Added {config_filename} to .gitignore")


def _read_toml(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Failed to parse {path}", str(e)) from e


def _write_toml(path: Path, data: dict) -> None:
    # Simple TOML serialization, config values are flat scalars
    with open(path, "w") as f:
        for k, v in data.items():
            if isinstance(v, bool):
                f.write(f"{k} = {str(v).lower()}\n")
            elif isinstance(v, (int, float)):
                f.write(f"{k} = {v}\n")
            else:
                # literal strings, regexes keep their backslashes
                f.write(f"{k} = '{v}'\n")


def _scope_path(scope: str) -> Path:
    if scope == "global":
        GLOBAL_CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        return GLOBAL_CONFIG_FILE
    return LOCAL_CONFIG_FILE


def set_config(key: str, value: str, scope: str) -> None:
    """Set a configuration value in the specified scope."""
    field_info = _check_key_exists(key)
    final_value = coerce_value(key, value, field_info)

    if scope == "env":
        env_var = f"{ENV_APP_PREFIX}{key.upper()}"
        print(f"{Fore.GREEN}To set this as an environment variable:{Style.RESET_ALL}")
        print(f"  Windows (PowerShell): $env:{env_var}='{value}'")
        print(f"  Windows (CMD): set {env_var}={value}")
        print(f"  Linux/macOS: export {env_var}='{value}'")
        return

    config_path = _scope_path(scope)
    if scope == "local":
        _add_to_gitignore(CONFIG_FILENAME)

    config_data = _read_toml(config_path)
    if final_value is None:
        config_data.pop(key, None)
    else:
        config_data[key] = final_value
    _write_toml(config_path, config_data)

    print(f"{Fore.GREEN}Set {key} = {final_value} ({scope}){Style.RESET_ALL}")
    print(f"Config file: {config_path.absolute()}")


def delete_config(key: str, scope: str) -> None:
    """Remove a key from the local or global config file."""
    _check_key_exists(key)
    if scope == "env":
        raise ConfigurationError(
            "Cannot delete environment variables",
            f"Unset {ENV_APP_PREFIX}{key.upper()} in your shell instead",
        )

    config_path = _scope_path(scope)
    config_data = _read_toml(config_path)
    if key not in config_data:
        print(f"{Fore.YELLOW}{key} is not set in {scope} config{Style.RESET_ALL}")
        return

    del config_data[key]
    _write_toml(config_path, config_data)
    print(f"{Fore.GREEN}Deleted {key} from {scope} config{Style.RESET_ALL}")


def _gather_sources(scope: str | None) -> list[tuple[str, dict]]:
    """Config sources in display priority: local, env, global."""
    sources = []

    if scope in (None, "local"):
        local_config = _read_toml(LOCAL_CONFIG_FILE)
        if local_config:
            sources.append(("Local Config", local_config))

    if scope in (None, "env"):
        env_config = {
            k[len(ENV_APP_PREFIX) :].lower(): v
            for k, v in os.environ.items()
            if k.lower().startswith(ENV_APP_PREFIX.lower())
        }
        if env_config:
            sources.append(("Environment", env_config))

    if scope in (None, "global"):
        global_config = _read_toml(GLOBAL_CONFIG_FILE)
        if global_config:
            sources.append(("Global Config", global_config))

    return sources


def get_config(key: str | None, scope: str | None) -> None:
    """Get configuration value(s) from the specified scope or all scopes."""
    schema = _get_config_schema()
    if key is not None:
        _check_key_exists(key)

    sources = _gather_sources(scope)
    table_data = []

    for k in [key] if key is not None else sorted(schema):
        found = False
        for source_name, config_data in sources:
            if k in config_data:
                table_data.append(
                    {
                        "Key": k,
                        "Description": schema[k]["description"],
                        "Value": config_data[k],
                        "Source": source_name,
                    }
                )
                found = True
                # all sources for one key, only the active one when listing
                if key is None:
                    break

        if not found:
            table_data.append(
                {
                    "Key": k,
                    "Description": schema[k]["description"],
                    "Value": schema[k]["default"],
                    "Source": "Default",
                }
            )

    display_config(table_data)


def describe_callback(ctx: typer.Context, param, value: bool):
    if not value or ctx.resilient_parsing:
        return

    print_describe_options()
    raise typer.Exit()


def main(
    ctx: typer.Context,
    describe: bool = typer.Option(
        False,
        "--describe",
        callback=describe_callback,
        is_eager=True,
        help="Describe available configuration options and exit.",
    ),
    key: str | None = typer.Argument(None, help="Configuration key to get or set."),
    value: str | None = typer.Argument(
        None, help="Value to set (omit to get current value)."
    ),
    scope: ScopeChoice | None = typer.Option(
        None,
        "--scope",
        help="Select which scope to use. Defaults to local for setting, all for getting.",
    ),
    delete: bool = typer.Option(
        False,
        "--delete",
        help="Delete the key from the selected scope.",
    ),
) -> None:
    """
    Manage global and local hunkpick configurations.

    Priority order: program arguments > custom config > local config > environment variables > global config

    Examples:
        # Show all configuration
        hunkpick config

        # Get a configuration value
        hunkpick config theme

        # Set a local configuration value
        hunkpick config auto_split true

        # Set a global configuration value
        hunkpick config editor "code --wait" --scope global

        # Delete a key from local config
        hunkpick config editor --delete
    """
    scope_name = scope.value if scope is not None else None

    with handle_hunkpick_exception():
        if delete:
            if key is None or value is not None:
                raise ConfigurationError("--delete takes exactly one key and no value")
            delete_config(key, scope_name or "local")
        elif value is not None:
            if key is None:
                raise ConfigurationError("A key is required when setting a value")
            set_config(key, value, scope_name or "local")
        else:
            get_config(key, scope_name)
