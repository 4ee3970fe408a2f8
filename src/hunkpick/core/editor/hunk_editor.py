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
Manual editing of a single hunk in an external editor.

The hunk is written to a scratch file inside the git directory together with a
short guide, the user edits it, and the result is validated with a dry-run
apply before it may replace the original hunk.
"""

import os
from pathlib import Path

import click
import typer
from loguru import logger

from hunkpick.constants import DEFAULT_EDITOR, EDIT_BUFFER_FILENAME
from hunkpick.core.data.hunk import Decision, Hunk
from hunkpick.core.data.hunk_header import (
    count_body_lines,
    format_hunk_header,
    header_section,
    parse_hunk_header,
)
from hunkpick.core.data.patch_mode import PatchMode
from hunkpick.core.exceptions import EditorError, PatchApplyError
from hunkpick.core.git_commands.git_commands import GitCommands
from hunkpick.core.patch.reassembler import reassemble_patch
from hunkpick.core.ui.prompter import Prompter

EDIT_INTRO = "# Manual hunk edit mode -- see bottom for a quick guide."
EDIT_GUIDE = (
    "# ---",
    "# To remove '-' lines, make them ' ' lines (context).",
    "# To remove '+' lines, delete them.",
    "# Lines starting with # will be removed.",
)
RETRY_PROMPT = 'Your edited hunk does not apply. Edit again (saying "no" discards!) [y/n]? '


def render_edit_buffer(lines: list[str]) -> str:
    return "\n".join([EDIT_INTRO, *lines, *EDIT_GUIDE]) + "\n"


def parse_edit_buffer(text: str, original: Hunk) -> Hunk | None:
    """
    Turn the edited buffer back into a hunk.

    Comment and empty lines are dropped; a lone space is a blank context line
    and is kept. A missing header is restored from the original hunk and the
    line counts are recomputed from the new body.
    Returns None when nothing is left.
    """
    stripped = (line.rstrip("\r") for line in text.split("\n"))
    lines = [line for line in stripped if line and not line.startswith("#")]
    if not lines:
        return None

    if parse_hunk_header(lines[0]) is None:
        lines.insert(0, original.raw_lines[0])

    old_start, _, new_start, _ = parse_hunk_header(lines[0])
    body = lines[1:]
    old_count, new_count = count_body_lines(body)
    header = format_hunk_header(
        old_start, old_count, new_start, new_count, header_section(lines[0])
    )

    return Hunk(
        kind=original.kind,
        raw_lines=[header] + body,
        old_start=old_start,
        old_count=old_count,
        new_start=new_start,
        new_count=new_count,
        decision=Decision.ACCEPT,
        edited=True,
    )


class HunkEditor:
    def __init__(
        self,
        git_commands: GitCommands,
        mode: PatchMode,
        prompter: Prompter,
        editor: str | None = None,
        max_attempts: int = 5,
    ):
        self.git_commands = git_commands
        self.mode = mode
        self.prompter = prompter
        self.editor = editor
        self.max_attempts = max_attempts

    def resolve_editor(self) -> str:
        return (
            self.editor
            or os.environ.get("EDITOR")
            or self.git_commands.git_editor()
            or DEFAULT_EDITOR
        )

    def edit(self, file_header: Hunk, hunk: Hunk) -> Hunk | None:
        """
        Let the user edit hunk until it applies or they give up.

        Returns the edited hunk (accepted, edited=True), or None if the edit was
        emptied, discarded, or ran out of attempts.

        Raises:
            EditorError: if the buffer cannot be written or the editor fails.
        """
        buffer_path = self.git_commands.git_dir() / EDIT_BUFFER_FILENAME
        lines = hunk.raw_lines

        try:
            for attempt in range(1, self.max_attempts + 1):
                edited_text = self._run_editor(buffer_path, lines)
                candidate = parse_edit_buffer(edited_text, hunk)
                if candidate is None:
                    logger.debug("Edited hunk is empty, keeping the original")
                    return None

                try:
                    self.git_commands.check_patch(
                        reassemble_patch(file_header, [candidate]), self.mode
                    )
                    return candidate
                except PatchApplyError as e:
                    logger.debug(f"Edit attempt {attempt} does not apply: {e.details}")

                if not self.prompter.confirm(RETRY_PROMPT):
                    return None
                # reopen what the user wrote rather than starting over
                lines = candidate.raw_lines

            logger.warning(
                f"Giving up after {self.max_attempts} edit attempts, keeping the original hunk"
            )
            return None
        finally:
            buffer_path.unlink(missing_ok=True)

    def _run_editor(self, buffer_path: Path, lines: list[str]) -> str:
        try:
            buffer_path.write_text(
                render_edit_buffer(lines), encoding="utf-8", errors="surrogateescape"
            )
        except OSError as e:
            raise EditorError("Could not write the hunk edit buffer", str(e)) from e

        editor = self.resolve_editor()
        logger.debug(f"Opening {buffer_path} with {editor}")
        try:
            typer.edit(editor=editor, filename=str(buffer_path), require_save=False)
        except click.ClickException as e:
            raise EditorError(f"Editor '{editor}' failed", e.format_message()) from e

        try:
            return buffer_path.read_text(encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            raise EditorError("Could not read the hunk edit buffer", str(e)) from e
