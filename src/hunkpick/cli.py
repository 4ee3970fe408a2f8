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

import sys
from pathlib import Path

import typer
from colorama import init
from dotenv import load_dotenv
from loguru import logger

from hunkpick.commands import config, patch, status
from hunkpick.constants import (
    APP_NAME,
    ENV_APP_PREFIX,
    GLOBAL_CONFIG_FILE,
    LOCAL_CONFIG_FILE,
)
from hunkpick.context import GlobalConfig, GlobalContext
from hunkpick.core.config.config_loader import ConfigLoader
from hunkpick.core.exceptions import handle_hunkpick_exception, not_git_repository
from hunkpick.core.logging.logging import setup_logger
from hunkpick.runtimeutil import (
    ensure_utf8_output,
    get_log_dir_callback,
    setup_signal_handlers,
    version_callback,
)

# Initialize colorama (colored output in terminal)
init(autoreset=True)

# main cli app
app = typer.Typer(
    help=f"{APP_NAME}: pick the hunks you want, leave the rest",
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    add_completion=False,
)

# Main cli commands
app.command(name="patch")(patch.main)
app.command(name="status")(status.main)
app.command(name="config")(config.main)

# which commands do not require a global context
# (a broken config must not stop you from fixing it)
no_context_commands = {"config"}


def load_global_config(custom_config_path: str | None, **input_args):
    # input args are the "runtime overrides" for configs
    config_args = {key: item for key, item in input_args.items() if item is not None}

    return ConfigLoader.get_full_config(
        GlobalConfig,
        config_args,
        LOCAL_CONFIG_FILE,
        ENV_APP_PREFIX,
        GLOBAL_CONFIG_FILE,
        custom_config_path=Path(custom_config_path)
        if custom_config_path is not None
        else None,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    log_path: bool = typer.Option(
        False,
        "--log-dir",
        callback=get_log_dir_callback,
        is_eager=True,
        help="Show log path (where logs for hunkpick live) and exit",
    ),
    repo_path: str = typer.Option(
        ".",
        "--repo",
        help="Path to the git repository to operate on.",
    ),
    custom_config: str | None = typer.Option(
        None,
        "--custom-config",
        help="Path to a custom config file",
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Enable verbose logging output",
    ),
    silent: bool | None = typer.Option(
        None,
        "--silent",
        "-s",
        help="Only print errors, prompts and diffs",
    ),
    no_color: bool | None = typer.Option(
        None,
        "--no-color",
        help="Disable colored output",
    ),
    editor: str | None = typer.Option(
        None,
        "--editor",
        help="Editor used for manual hunk edits",
    ),
    diff_algorithm: str | None = typer.Option(
        None,
        "--diff-algorithm",
        help="Diff algorithm (myers, minimal, patience, histogram)",
    ),
    auto_split: bool | None = typer.Option(
        None,
        "--auto-split",
        help="Split every hunk as far as possible before asking",
    ),
    global_filter: str | None = typer.Option(
        None,
        "--filter",
        help="Only show hunks matching this regex",
    ),
) -> None:
    """
    Global setup callback. Initialize global context/config used by commands
    """
    with handle_hunkpick_exception(exit_on_fail=True):
        if ctx.invoked_subcommand is None:
            print(ctx.get_help())
            raise typer.Exit()

        # skip --help in subcommands
        if any(arg in ctx.help_option_names for arg in sys.argv):
            return

        if ctx.invoked_subcommand in no_context_commands:
            return

        global_config, used_config_sources, used_default = load_global_config(
            custom_config,
            verbose=verbose,
            silent=silent,
            color=False if no_color else None,
            editor=editor,
            diff_algorithm=diff_algorithm,
            auto_split=auto_split,
            global_filter=global_filter,
        )

        setup_logger(
            ctx.invoked_subcommand,
            debug=global_config.verbose,
            silent=global_config.silent,
        )
        logger.debug(
            f"Used {used_config_sources} to build global context (defaults used: {used_default})."
        )

        global_context = GlobalContext.from_global_config(global_config, Path(repo_path))
        # fail immediately if we arent in a valid git repo as we expect one
        if not global_context.git_commands.is_git_repository():
            raise not_git_repository(repo_path)

        setup_signal_handlers()

        ctx.obj = global_context


def run_app():
    """Run the application with global exception handling."""
    # force stdout to be utf8
    ensure_utf8_output()
    # load any .env files (config values possibly set through env)
    load_dotenv()
    # launch cli
    app(prog_name=APP_NAME)


if __name__ == "__main__":
    run_app()
