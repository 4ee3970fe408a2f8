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

"""
Logging configuration for the hunkpick CLI application.

Console output goes through a rich Console so diagnostics share the
terminal with the diff being reviewed; a detailed log file is kept in the
platform log directory for debugging.
"""

from datetime import datetime
from pathlib import Path

from loguru import logger
from rich.console import Console

from hunkpick.constants import LOG_DIR

_LEVEL_STYLES = {
    "TRACE": "dim",
    "DEBUG": "dim",
    "INFO": "",
    "SUCCESS": "green",
    "WARNING": "yellow",
    "ERROR": "bold red",
    "CRITICAL": "bold red",
}


class StructuredLogger:
    """Sets up loguru sinks for one command invocation."""

    def __init__(
        self,
        command_name: str,
        console_level: str,
        log_dir: Path = LOG_DIR,
        console: Console | None = None,
    ):
        self.command_name = command_name
        self.console_level = console_level
        self.log_dir = log_dir
        # diff text contains brackets, never interpret it as rich markup
        self.console = console or Console(highlight=False, soft_wrap=True)
        self.logfile: Path | None = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        # Clear existing sinks to avoid duplicates
        logger.remove()

        def console_sink(message):
            record = message.record
            text = record["message"].rstrip("\n")
            style = _LEVEL_STYLES.get(record["level"].name, "")
            self.console.print(text, style=style or None, markup=False)

        logger.add(
            console_sink, level=self.console_level, format="{message}", catch=True
        )

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.debug(f"Could not create log dir {self.log_dir}: {e}")
            return

        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        logfile = self.log_dir / f"hunkpick_{self.command_name}_{timestamp}.log"

        logger.add(
            logfile,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
            "{name}:{function}:{line} | {message}",
            rotation="10 MB",
            retention="14 days",
            catch=True,
            backtrace=True,
            diagnose=False,
        )

        logger.bind(command=self.command_name, logfile=str(logfile)).debug(
            "Logger initialized"
        )
        self.logfile = logfile


def setup_logger(
    command_name: str, debug: bool = False, silent: bool = False
) -> Path | None:
    """
    Set up logging for a command.

    Args:
        command_name: Name of the command being executed
        debug: Show debug messages on the console
        silent: Only show errors on the console

    Returns:
        Path to the log file, or None when no log file could be created
    """
    if silent:
        console_level = "ERROR"
    elif debug:
        console_level = "DEBUG"
    else:
        console_level = "INFO"

    return StructuredLogger(command_name, console_level).logfile
