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

from pathlib import Path
from unittest.mock import Mock

import pytest

from hunkpick.commands.patch import resolve_patch_mode, run_patch
from hunkpick.context import GlobalConfig, GlobalContext
from hunkpick.core.exceptions import ValidationError
from hunkpick.core.git_commands.git_commands import GitCommands
from hunkpick.core.git_interface.interface import GitInterface
from hunkpick.pipelines.patch_pipeline import PatchRunOutcome


@pytest.mark.parametrize(
    "mode,revision,expected_mode,expected_revision",
    [
        ("stage", None, "stage", None),
        ("stash", None, "stash", None),
        ("reset", None, "reset_head", "HEAD"),
        ("reset", "HEAD", "reset_head", "HEAD"),
        ("reset", "main", "reset_nothead", "main"),
        ("checkout", None, "checkout_index", None),
        ("checkout", "HEAD", "checkout_head", "HEAD"),
        ("checkout", "main", "checkout_nothead", "main"),
        ("worktree", None, "checkout_index", None),
        ("worktree", "HEAD", "worktree_head", "HEAD"),
        ("worktree", "v1.0", "worktree_nothead", "v1.0"),
    ],
)
def test_resolve_patch_mode(mode, revision, expected_mode, expected_revision):
    patch_mode, resolved = resolve_patch_mode(mode, revision)
    assert patch_mode.name == expected_mode
    assert resolved == expected_revision


@pytest.mark.parametrize("mode", ["stage", "stash"])
def test_revision_not_allowed(mode):
    with pytest.raises(ValidationError, match="does not take a revision"):
        resolve_patch_mode(mode, "HEAD")


def test_unknown_mode():
    with pytest.raises(ValidationError, match="Unknown patch mode: commit"):
        resolve_patch_mode("commit", None)


def test_run_patch_uses_config(monkeypatch):
    git_commands = Mock(spec=GitCommands)
    git_commands.list_modified.return_value = []
    config = GlobalConfig(auto_split=True, global_filter="TODO", color=False)
    context = GlobalContext(Path("."), Mock(spec=GitInterface), git_commands, config)
    monkeypatch.setattr("hunkpick.commands.patch.ConsolePrompter.say", lambda self, text="": None)

    outcome = run_patch(context, "reset", None, ["src"])

    assert outcome is PatchRunOutcome.COMPLETED
    git_commands.list_modified.assert_called_once_with("index-only", "HEAD")
