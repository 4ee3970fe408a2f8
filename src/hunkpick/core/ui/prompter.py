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

from typing import Protocol

import typer


class Prompter(Protocol):
    def ask(self, prompt: str) -> str | None:
        """Read one line of input. None means the input stream ended."""

    def confirm(self, prompt: str) -> bool: ...

    def say(self, text: str = "") -> None: ...


class ConsolePrompter:
    """Terminal input/output through typer."""

    def ask(self, prompt: str) -> str | None:
        try:
            return typer.prompt(
                prompt, default="", show_default=False, prompt_suffix=""
            )
        except (typer.Abort, EOFError):
            typer.echo()
            return None

    def confirm(self, prompt: str) -> bool:
        try:
            return typer.confirm(
                prompt, default=False, show_default=False, prompt_suffix=""
            )
        except (typer.Abort, EOFError):
            typer.echo()
            return False

    def say(self, text: str = "") -> None:
        typer.echo(text)
