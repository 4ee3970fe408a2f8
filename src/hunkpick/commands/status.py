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

import typer

from hunkpick.context import GlobalContext
from hunkpick.core.data.file_status import FileStatus
from hunkpick.core.exceptions import handle_hunkpick_exception
from hunkpick.core.ui.theme import Theme, get_theme


def _describe(counts: str, add_del: str | None) -> str:
    # a created or deleted file is shown by what happened to it, not by line counts
    if add_del == "create" and counts != "unchanged":
        return f"{counts} (new)"
    if add_del == "delete" and counts != "unchanged":
        return f"{counts} (gone)"
    return counts


def format_status(files: list[FileStatus], theme: Theme) -> list[str]:
    """Render the staged/unstaged table, one numbered row per file."""
    lines = [theme.apply("header", "    %12s %12s %s" % ("staged", "unstaged", "path"))]
    for i, status in enumerate(files, start=1):
        path = status.path
        if status.unmerged:
            path += " (unmerged)"
        elif status.binary:
            path += " (binary)"
        lines.append(
            "%2d: %12s %12s %s"
            % (
                i,
                _describe(status.index, status.index_add_del),
                _describe(status.worktree, status.worktree_add_del),
                path,
            )
        )
    return lines


def main(
    ctx: typer.Context,
    paths: list[str] | None = typer.Argument(
        None, help="Only show files matching these paths."
    ),
) -> None:
    """Show staged and unstaged line counts for every modified file.

    Examples:
        # Everything
        hunkpick status

        # Just one directory
        hunkpick status src/
    """
    global_context: GlobalContext = ctx.obj

    with handle_hunkpick_exception():
        files = global_context.git_commands.list_modified(None, None, paths)
        if not files:
            typer.echo("No changes.")
            return

        theme = get_theme(global_context.config.theme, color=global_context.config.color)
        for line in format_status(files, theme):
            typer.echo(line)
