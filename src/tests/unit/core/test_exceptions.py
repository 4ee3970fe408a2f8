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
import typer

from hunkpick.core.exceptions import (
    GitError,
    HunkpickError,
    PatchApplyError,
    ValidationError,
    git_not_found,
    handle_hunkpick_exception,
    invalid_config_value,
    not_git_repository,
    unknown_patch_mode,
)


def test_hierarchy():
    assert issubclass(PatchApplyError, GitError)
    assert issubclass(GitError, HunkpickError)
    error = HunkpickError("message", "details")
    assert str(error) == "message"
    assert error.details == "details"


def test_factories():
    assert isinstance(git_not_found(), GitError)
    assert not_git_repository("/tmp/x").message == "Not a git repository: /tmp/x"
    assert isinstance(unknown_patch_mode("x"), ValidationError)
    assert invalid_config_value("theme", "bad").details == "bad"


def test_known_error_exits_with_one():
    with pytest.raises(typer.Exit) as exc_info:
        with handle_hunkpick_exception():
            raise GitError("boom", "details")
    assert exc_info.value.exit_code == 1


def test_keyboard_interrupt_exits_with_130():
    with pytest.raises(typer.Exit) as exc_info:
        with handle_hunkpick_exception():
            raise KeyboardInterrupt
    assert exc_info.value.exit_code == 130


def test_without_exit_reraises():
    with pytest.raises(GitError):
        with handle_hunkpick_exception(exit_on_fail=False):
            raise GitError("boom")


def test_unknown_errors_propagate():
    with pytest.raises(RuntimeError):
        with handle_hunkpick_exception():
            raise RuntimeError("unexpected")
