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

from subprocess import CompletedProcess
from unittest.mock import Mock

import pytest

from hunkpick.core.data.patch_mode import get_patch_mode
from hunkpick.core.exceptions import GitError, PatchApplyError
from hunkpick.core.git_commands.git_commands import (
    GitCommands,
    split_output_lines,
    unquote_path,
)
from hunkpick.core.git_interface.interface import GitInterface

EMPTY_TREE = "4b825dc642cb6eb9a060e54bf8d69288fbee4904"

# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def mock_git():
    return Mock(spec=GitInterface)


@pytest.fixture
def git_commands(mock_git):
    return GitCommands(mock_git)


def _text_responses(responses: dict[tuple, str | None]):
    """run_git_text_out side effect keyed by the leading args of a command."""

    def _run(args, input_text=None, env=None, cwd=None):
        for prefix, value in responses.items():
            if tuple(args[: len(prefix)]) == prefix:
                return value
        return None

    return _run


# -----------------------------------------------------------------------------
# Output helpers
# -----------------------------------------------------------------------------


def test_unquote_plain_path():
    assert unquote_path("dir/file.txt") == "dir/file.txt"


def test_unquote_escapes():
    assert unquote_path('"a\\tb"') == "a\tb"
    assert unquote_path('"say \\"hi\\".txt"') == 'say "hi".txt'
    assert unquote_path('"back\\\\slash"') == "back\\slash"


def test_unquote_octal_utf8():
    assert unquote_path('"caf\\303\\251.txt"') == "café.txt"


def test_split_output_lines_keeps_carriage_returns():
    assert split_output_lines(b"a\r\nb\n") == ["a\r", "b"]
    assert split_output_lines(b"no newline") == ["no newline"]
    assert split_output_lines(b"") == []


def test_split_output_lines_survives_invalid_utf8():
    [line] = split_output_lines(b"+caf\xe9\n")
    assert line.encode("utf-8", errors="surrogateescape") == b"+caf\xe9"


# -----------------------------------------------------------------------------
# Repository info
# -----------------------------------------------------------------------------


def test_is_git_repository(git_commands, mock_git):
    mock_git.run_git_text_out.return_value = "true\n"
    assert git_commands.is_git_repository()

    mock_git.run_git_text_out.return_value = None
    assert not git_commands.is_git_repository()


def test_resolve_revision_on_unborn_branch(git_commands, mock_git):
    mock_git.run_git_text_out.side_effect = _text_responses(
        {("rev-parse",): None, ("hash-object",): EMPTY_TREE + "\n"}
    )
    assert git_commands.resolve_revision("HEAD") == EMPTY_TREE
    assert git_commands.resolve_revision("main") == "main"
    assert git_commands.resolve_revision(None) is None


def test_resolve_revision_with_history(git_commands, mock_git):
    mock_git.run_git_text_out.side_effect = _text_responses({("rev-parse",): "abc123\n"})
    assert git_commands.resolve_revision("HEAD") == "HEAD"


def test_get_config_blank_is_none(git_commands, mock_git):
    mock_git.run_git_text_out.return_value = "\n"
    assert git_commands.get_config("diff.algorithm") is None


# -----------------------------------------------------------------------------
# Diffs
# -----------------------------------------------------------------------------


def test_get_diff_lines_plain(git_commands, mock_git):
    mock_git.run_git_text_out.side_effect = _text_responses(
        {("config", "--get-colorbool"): "false\n"}
    )
    mock_git.run_git_binary_out.return_value = b"diff --git a/f b/f\n@@ -1 +1 @@\n-a\n+b\n"

    plain, color = git_commands.get_diff_lines("f", get_patch_mode("stage"))

    assert plain == ["diff --git a/f b/f", "@@ -1 +1 @@", "-a", "+b"]
    assert color == []
    mock_git.run_git_binary_out.assert_called_once_with(
        ["diff-files", "-p", "--no-color", "--", "f"]
    )


def test_get_diff_lines_with_algorithm_revision_and_color(git_commands, mock_git):
    mock_git.run_git_text_out.side_effect = _text_responses(
        {
            ("config", "--get-colorbool"): "true\n",
            ("config", "diff.algorithm"): "histogram\n",
        }
    )
    mock_git.run_git_binary_out.side_effect = [b"-a\n+b\n", b"\x1b[31m-a\x1b[m\n\x1b[32m+b\x1b[m\n"]

    plain, color = git_commands.get_diff_lines("f", get_patch_mode("checkout_nothead"), "main")

    assert plain == ["-a", "+b"]
    assert color == ["\x1b[31m-a\x1b[m", "\x1b[32m+b\x1b[m"]
    first, second = mock_git.run_git_binary_out.call_args_list
    assert first.args[0] == [
        "diff-index",
        "--diff-algorithm=histogram",
        "-R",
        "-p",
        "main",
        "--no-color",
        "--",
        "f",
    ]
    assert second.args[0] == [
        "diff-index",
        "--diff-algorithm=histogram",
        "-R",
        "-p",
        "main",
        "--color",
        "--",
        "f",
    ]


def test_get_diff_lines_override_beats_git_config(git_commands, mock_git):
    mock_git.run_git_text_out.side_effect = _text_responses(
        {("config", "diff.algorithm"): "histogram\n"}
    )
    mock_git.run_git_binary_out.return_value = b""

    git_commands.get_diff_lines("f", get_patch_mode("stage"), diff_algorithm="patience", color=False)

    mock_git.run_git_binary_out.assert_called_once_with(
        ["diff-files", "--diff-algorithm=patience", "-p", "--no-color", "--", "f"]
    )


def test_get_diff_lines_failure(git_commands, mock_git):
    mock_git.run_git_text_out.return_value = None
    mock_git.run_git_binary_out.return_value = None

    with pytest.raises(GitError, match="Could not get diff for f"):
        git_commands.get_diff_lines("f", get_patch_mode("stage"))


# -----------------------------------------------------------------------------
# Applying
# -----------------------------------------------------------------------------


def test_apply_patch(git_commands, mock_git):
    mock_git.run_git_binary.return_value = CompletedProcess([], 0, b"", b"")

    git_commands.apply_patch(b"patch", get_patch_mode("reset_head"))

    mock_git.run_git_binary.assert_called_once_with(
        ["apply", "-R", "--cached", "--allow-overlap"], input_bytes=b"patch", check=False
    )


def test_check_patch_failure_carries_stderr(git_commands, mock_git):
    mock_git.run_git_binary.return_value = CompletedProcess([], 1, b"", b"error: patch failed\n")

    with pytest.raises(PatchApplyError) as exc_info:
        git_commands.check_patch(b"patch", get_patch_mode("stage"))

    assert exc_info.value.details == "error: patch failed"
    assert mock_git.run_git_binary.call_args.args[0] == [
        "apply",
        "--cached",
        "--check",
        "--allow-overlap",
    ]


def test_apply_patch_git_missing(git_commands, mock_git):
    mock_git.run_git_binary.return_value = None
    with pytest.raises(PatchApplyError):
        git_commands.apply_patch(b"patch", get_patch_mode("stage"))


def test_refresh_index_swallows_failures(git_commands, mock_git):
    mock_git.run_git_text.return_value = CompletedProcess([], 128, "", "fatal")
    git_commands.refresh_index()

    mock_git.run_git_text.return_value = None
    git_commands.refresh_index()


# -----------------------------------------------------------------------------
# File listing
# -----------------------------------------------------------------------------

STAGED = (
    b"1\t2\ta.txt\n"
    b"-\t-\timg.png\n"
    b"3\t0\tnew.txt\n"
    b"0\t0\t\"caf\\303\\251.txt\"\n"
    b" create mode 100644 new.txt\n"
)

UNSTAGED = (
    b":100644 100644 1111111 0000000 M\ta.txt\n"
    b":000000 000000 0000000 0000000 U\tc.txt\n"
    b"4\t0\ta.txt\n"
    b"0\t1\tgone.txt\n"
    b" delete mode 100644 gone.txt\n"
)


@pytest.fixture
def listing_git(mock_git):
    mock_git.run_git_text_out.side_effect = _text_responses({("rev-parse",): "abc123\n"})

    def _binary(args, input_bytes=None, env=None, cwd=None):
        return STAGED if args[0] == "diff-index" else UNSTAGED

    mock_git.run_git_binary_out.side_effect = _binary
    return mock_git


def test_list_modified_all(git_commands, listing_git):
    files = {f.path: f for f in git_commands.list_modified()}

    assert list(files) == sorted(files)
    assert set(files) == {"a.txt", "c.txt", "café.txt", "gone.txt", "img.png", "new.txt"}

    assert files["a.txt"].index == "+1/-2"
    assert files["a.txt"].worktree == "+4/-0"
    assert files["img.png"].binary
    assert files["img.png"].index == "binary"
    assert files["new.txt"].index_add_del == "create"
    assert files["gone.txt"].worktree_add_del == "delete"
    assert files["gone.txt"].index == "unchanged"
    assert files["c.txt"].unmerged
    assert not files["c.txt"].is_patchable


def test_list_modified_file_only(git_commands, listing_git):
    files = git_commands.list_modified("file-only")

    assert [f.path for f in files] == ["a.txt", "gone.txt"]
    assert all(call.args[0][0] == "diff-files" for call in listing_git.run_git_binary_out.call_args_list)


def test_list_modified_index_only(git_commands, listing_git):
    files = git_commands.list_modified("index-only", "HEAD", ["."])

    assert [f.path for f in files] == ["a.txt", "café.txt", "img.png", "new.txt"]
    listing_git.run_git_binary_out.assert_called_once_with(
        ["diff-index", "--cached", "--numstat", "--summary", "HEAD", "--", "."]
    )


def test_list_modified_failure(git_commands, mock_git):
    mock_git.run_git_text_out.return_value = "abc123\n"
    mock_git.run_git_binary_out.return_value = None

    with pytest.raises(GitError):
        git_commands.list_modified()
