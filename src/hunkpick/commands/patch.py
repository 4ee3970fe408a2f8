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

from enum import Enum

import typer
from loguru import logger

from hunkpick.context import GlobalContext
from hunkpick.core.data.patch_mode import PatchMode, get_patch_mode
from hunkpick.core.editor.hunk_editor import HunkEditor
from hunkpick.core.exceptions import (
    ValidationError,
    handle_hunkpick_exception,
    unknown_patch_mode,
)
from hunkpick.core.selector.session import PatchSession
from hunkpick.core.ui.prompter import ConsolePrompter
from hunkpick.core.ui.theme import get_theme
from hunkpick.pipelines.patch_pipeline import PatchPipeline, PatchRunOutcome


class ModeChoice(str, Enum):
    stage = "stage"
    stash = "stash"
    reset = "reset"
    checkout = "checkout"
    worktree = "worktree"


def resolve_patch_mode(mode: str, revision: str | None) -> tuple[PatchMode, str | None]:
    """
    Map a user facing mode and optional revision onto a concrete PatchMode.

    Returns:
        The patch mode and the revision the diff should be taken against.
    """
    if mode in ("stage", "stash"):
        if revision:
            raise ValidationError(
                f"'{mode}' does not take a revision",
                "Use --mode reset, checkout or worktree to work against a revision",
            )
        return get_patch_mode(mode), None

    if mode == "reset":
        if not revision or revision == "HEAD":
            return get_patch_mode("reset_head"), "HEAD"
        return get_patch_mode("reset_nothead"), revision

    if mode == "checkout":
        if not revision:
            return get_patch_mode("checkout_index"), None
        if revision == "HEAD":
            return get_patch_mode("checkout_head"), revision
        return get_patch_mode("checkout_nothead"), revision

    if mode == "worktree":
        if not revision:
            return get_patch_mode("checkout_index"), None
        if revision == "HEAD":
            return get_patch_mode("worktree_head"), revision
        return get_patch_mode("worktree_nothead"), revision

    raise unknown_patch_mode(mode)


def run_patch(
    global_context: GlobalContext,
    mode: str,
    revision: str | None,
    paths: list[str] | None,
) -> PatchRunOutcome:
    config = global_context.config
    patch_mode, reference = resolve_patch_mode(mode, revision)
    logger.debug(f"Resolved mode={mode} revision={revision} to {patch_mode.name}")

    prompter = ConsolePrompter()
    theme = get_theme(config.theme, color=config.color)
    session = PatchSession(
        global_filter_pattern=config.global_filter or "",
        auto_split_enabled=config.auto_split,
    )
    editor = HunkEditor(
        global_context.git_commands,
        patch_mode,
        prompter,
        editor=config.editor,
        max_attempts=config.max_edit_attempts,
    )
    pipeline = PatchPipeline(
        global_context.git_commands,
        patch_mode,
        session,
        prompter,
        revision=reference,
        editor=editor,
        theme=theme,
        diff_algorithm=config.diff_algorithm,
        color=config.color,
    )
    return pipeline.run(paths)


def main(
    ctx: typer.Context,
    paths: list[str] | None = typer.Argument(
        None, help="Only consider files matching these paths."
    ),
    mode: ModeChoice = typer.Option(
        ModeChoice.stage,
        "--mode",
        "-p",
        help="What to do with the selected hunks.",
    ),
    revision: str | None = typer.Option(
        None,
        "--revision",
        "-r",
        help="Revision to diff against (reset, checkout and worktree modes only).",
    ),
) -> None:
    """Review changes hunk by hunk and stage, unstage, discard or stash the ones you pick.

    Examples:
        # Stage parts of your working tree changes
        hunkpick patch

        # Unstage hunks from a single directory
        hunkpick patch --mode reset src/

        # Discard worktree changes relative to another branch
        hunkpick patch --mode worktree --revision main
    """
    global_context: GlobalContext = ctx.obj

    with handle_hunkpick_exception():
        outcome = run_patch(global_context, mode.value, revision, paths)
        logger.debug(f"Patch run finished: {outcome.value}")
