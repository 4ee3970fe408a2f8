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

import pytest

from hunkpick.core.data.file_status import FileStatus
from hunkpick.core.data.hunk import HunkKind
from hunkpick.core.data.patch_mode import PATCH_MODES, get_patch_mode
from hunkpick.core.exceptions import ValidationError
from hunkpick.core.ui.prompts import PATCH_HELP, PATCH_PROMPTS, help_for, prompt_for


def test_all_modes_present():
    assert set(PATCH_MODES) == {
        "stage",
        "stash",
        "reset_head",
        "reset_nothead",
        "checkout_index",
        "checkout_head",
        "checkout_nothead",
        "worktree_head",
        "worktree_nothead",
    }
    assert set(PATCH_PROMPTS) == set(PATCH_MODES)
    assert set(PATCH_HELP) == set(PATCH_MODES)


def test_stage_mode():
    mode = get_patch_mode("stage")
    assert mode.diff_cmd == ("diff-files", "-p")
    assert mode.apply_cmd == ("apply", "--cached")
    assert mode.check_cmd == ("apply", "--cached", "--check")
    assert mode.filter == "file-only"
    assert not mode.is_reverse


def test_reset_head_mode_is_reverse():
    mode = get_patch_mode("reset_head")
    assert mode.apply_cmd == ("apply", "-R", "--cached")
    assert mode.filter == "index-only"
    assert mode.is_reverse


def test_unknown_mode():
    with pytest.raises(ValidationError, match="Unknown patch mode: nope"):
        get_patch_mode("nope")


def test_every_mode_prompts_for_every_kind():
    for prompts in PATCH_PROMPTS.values():
        assert set(prompts) == {"hunk", "mode", "deletion", "addition"}
        for text in prompts.values():
            assert text.endswith("[y,n,q,a,d%s,?]? ")


def test_prompt_for_kinds():
    assert (
        prompt_for("stage", HunkKind.CHANGE, ",j,s")
        == "Stage this hunk [y,n,q,a,d,j,s,?]? "
    )
    assert prompt_for("reset_head", HunkKind.DELETION, "") == "Unstage deletion [y,n,q,a,d,?]? "
    assert (
        prompt_for("reset_nothead", HunkKind.MODE_CHANGE, "")
        == "Apply mode change to index [y,n,q,a,d,?]? "
    )
    assert prompt_for("stash", HunkKind.ADDITION, ",A") == "Stash addition [y,n,q,a,d,A,?]? "
    assert (
        prompt_for("checkout_index", HunkKind.CHANGE, "")
        == "Discard this hunk from worktree [y,n,q,a,d,?]? "
    )


def test_help_for():
    short = help_for("stage")
    assert short.startswith("y - stage this hunk")
    assert "? - print help" not in short

    full = help_for("stage", full=True)
    assert full.startswith(short)
    assert "S - enable auto-splitting globally and split all hunks" in full
    assert full.endswith("? - print help")


def test_file_status_patchable():
    assert FileStatus(path="a").is_patchable
    assert not FileStatus(path="a", binary=True).is_patchable
    assert not FileStatus(path="a", unmerged=True).is_patchable
