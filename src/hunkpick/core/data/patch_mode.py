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

from dataclasses import dataclass
from typing import Literal

from hunkpick.core.exceptions import unknown_patch_mode

StatusFilter = Literal["file-only", "index-only"]


@dataclass(frozen=True)
class PatchMode:
    """Which diff to review and how accepted hunks get applied back."""

    name: str
    diff_cmd: tuple[str, ...]
    apply_cmd: tuple[str, ...]
    check_cmd: tuple[str, ...]
    filter: StatusFilter | None = None
    is_reverse: bool = False


PATCH_MODES: dict[str, PatchMode] = {
    mode.name: mode
    for mode in (
        PatchMode(
            name="stage",
            diff_cmd=("diff-files", "-p"),
            apply_cmd=("apply", "--cached"),
            check_cmd=("apply", "--cached", "--check"),
            filter="file-only",
        ),
        PatchMode(
            name="stash",
            diff_cmd=("diff-index", "-p", "HEAD"),
            apply_cmd=("apply", "--cached"),
            check_cmd=("apply", "--cached", "--check"),
        ),
        PatchMode(
            name="reset_head",
            diff_cmd=("diff-index", "-p", "--cached"),
            apply_cmd=("apply", "-R", "--cached"),
            check_cmd=("apply", "-R", "--cached", "--check"),
            filter="index-only",
            is_reverse=True,
        ),
        PatchMode(
            name="reset_nothead",
            diff_cmd=("diff-index", "-R", "-p", "--cached"),
            apply_cmd=("apply", "--cached"),
            check_cmd=("apply", "--cached", "--check"),
            filter="index-only",
        ),
        PatchMode(
            name="checkout_index",
            diff_cmd=("diff-files", "-p"),
            apply_cmd=("apply", "-R"),
            check_cmd=("apply", "-R", "--check"),
            filter="file-only",
            is_reverse=True,
        ),
        PatchMode(
            name="checkout_head",
            diff_cmd=("diff-index", "-p"),
            apply_cmd=("apply", "-R"),
            check_cmd=("apply", "-R", "--check"),
            is_reverse=True,
        ),
        PatchMode(
            name="checkout_nothead",
            diff_cmd=("diff-index", "-R", "-p"),
            apply_cmd=("apply",),
            check_cmd=("apply", "--check"),
        ),
        PatchMode(
            name="worktree_head",
            diff_cmd=("diff-index", "-p"),
            apply_cmd=("apply", "-R"),
            check_cmd=("apply", "-R", "--check"),
            is_reverse=True,
        ),
        PatchMode(
            name="worktree_nothead",
            diff_cmd=("diff-index", "-R", "-p"),
            apply_cmd=("apply",),
            check_cmd=("apply", "--check"),
        ),
    )
}


def get_patch_mode(name: str) -> PatchMode:
    try:
        return PATCH_MODES[name]
    except KeyError:
        raise unknown_patch_mode(name) from None
