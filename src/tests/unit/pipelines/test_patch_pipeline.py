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

from unittest.mock import Mock

import pytest

from hunkpick.core.data.file_status import FileStatus
from hunkpick.core.data.patch_mode import get_patch_mode
from hunkpick.core.exceptions import PatchApplyError
from hunkpick.core.git_commands.git_commands import GitCommands
from hunkpick.core.selector.session import PatchSession
from hunkpick.pipelines.patch_pipeline import PatchPipeline, PatchRunOutcome


def _file_header(path: str) -> list[str]:
    return [
        f"diff --git a/{path} b/{path}",
        "index 1111111..2222222 100644",
        f"--- a/{path}",
        f"+++ b/{path}",
    ]


def _diff(path: str, hunk_count: int) -> list[str]:
    lines = _file_header(path)
    for i in range(hunk_count):
        start = i * 10 + 1
        lines += [f"@@ -{start} +{start} @@", f"-{path} old {i}", f"+{path} new {i}"]
    return lines


FOUR_BLOCKS = _file_header("blocks.txt") + [
    "@@ -1,3 +1,7 @@",
    "+foo1",
    " c1",
    "+bar1",
    " c2",
    "+foo2",
    " c3",
    "+bar2",
]

# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def diffs():
    return {}


@pytest.fixture
def git_commands(diffs):
    commands = Mock(spec=GitCommands)

    def _list_modified(status_filter=None, revision=None, paths=None):
        return [FileStatus(path=path, worktree="+1/-1") for path in sorted(diffs)]

    def _diff_lines(path, mode, revision=None, diff_algorithm=None, color=True):
        return diffs[path], []

    commands.list_modified.side_effect = _list_modified
    commands.get_diff_lines.side_effect = _diff_lines
    return commands


@pytest.fixture
def session():
    return PatchSession()


@pytest.fixture
def make_pipeline(git_commands, session, scripted_prompter):
    def _make(answers):
        prompter = scripted_prompter(answers)
        pipeline = PatchPipeline(git_commands, get_patch_mode("stage"), session, prompter)
        return pipeline, prompter

    return _make


def _applied(git_commands) -> list[str]:
    return [call.args[0].decode() for call in git_commands.apply_patch.call_args_list]


# -----------------------------------------------------------------------------
# File selection
# -----------------------------------------------------------------------------


def test_no_changes(make_pipeline):
    pipeline, prompter = make_pipeline([])
    assert pipeline.run() is PatchRunOutcome.COMPLETED
    assert prompter.said == ["No changes."]


def test_binary_and_unmerged_files_are_skipped(make_pipeline, git_commands, diffs):
    diffs["a.txt"] = _diff("a.txt", 1)
    git_commands.list_modified.side_effect = None
    git_commands.list_modified.return_value = [
        FileStatus(path="a.txt", worktree="+1/-1"),
        FileStatus(path="img.png", binary=True),
        FileStatus(path="c.txt", unmerged=True),
    ]
    pipeline, _ = make_pipeline(["y"])

    pipeline.run()

    assert [call.args[0] for call in git_commands.get_diff_lines.call_args_list] == ["a.txt"]


def test_paths_restrict_files(make_pipeline, git_commands, diffs):
    diffs["docs/a.md"] = _diff("docs/a.md", 1)
    diffs["src/b.py"] = _diff("src/b.py", 1)
    pipeline, _ = make_pipeline(["y"])

    pipeline.run(["src/"])

    assert [call.args[0] for call in git_commands.get_diff_lines.call_args_list] == ["src/b.py"]


def test_only_matching_paths_left_prints_no_changes(make_pipeline, diffs):
    diffs["a.txt"] = _diff("a.txt", 1)
    pipeline, prompter = make_pipeline([])

    assert pipeline.run(["nope"]) is PatchRunOutcome.COMPLETED
    assert prompter.said == ["No changes."]


# -----------------------------------------------------------------------------
# Decisions across files
# -----------------------------------------------------------------------------


def test_accepted_hunks_are_applied(make_pipeline, git_commands, diffs):
    diffs["a.txt"] = _diff("a.txt", 2)
    pipeline, _ = make_pipeline(["n", "y"])

    assert pipeline.run() is PatchRunOutcome.COMPLETED

    [patch] = _applied(git_commands)
    assert "+a.txt new 1" in patch
    assert "+a.txt new 0" not in patch
    git_commands.refresh_index.assert_called_once()


def test_nothing_accepted_applies_nothing(make_pipeline, git_commands, diffs):
    diffs["a.txt"] = _diff("a.txt", 2)
    pipeline, _ = make_pipeline(["n", "n"])

    pipeline.run()

    git_commands.apply_patch.assert_not_called()
    git_commands.refresh_index.assert_not_called()


def test_quit_applies_accepted_and_stops(make_pipeline, git_commands, diffs):
    diffs["a.txt"] = _diff("a.txt", 5)
    diffs["b.txt"] = _diff("b.txt", 1)
    pipeline, _ = make_pipeline(["y", "q"])

    assert pipeline.run() is PatchRunOutcome.ABORTED

    [patch] = _applied(git_commands)
    assert "+a.txt new 0" in patch
    assert "+a.txt new 1" not in patch
    assert [call.args[0] for call in git_commands.get_diff_lines.call_args_list] == ["a.txt"]


def test_accept_all_switches_later_files_to_bulk(make_pipeline, git_commands, diffs):
    diffs["a.txt"] = _diff("a.txt", 2)
    diffs["b.txt"] = _diff("b.txt", 3)
    pipeline, prompter = make_pipeline(["A"])

    assert pipeline.run() is PatchRunOutcome.COMPLETED

    first, second = _applied(git_commands)
    assert first.count("+a.txt new") == 2
    assert second.count("+b.txt new") == 3
    assert len(prompter.prompts) == 1


def test_auto_split_filter_accept_all_applies_matching_hunks(make_pipeline, git_commands, diffs, session):
    diffs["blocks.txt"] = FOUR_BLOCKS
    pipeline, _ = make_pipeline(["S", "G foo", "A"])

    pipeline.run()

    [patch] = _applied(git_commands)
    assert "+foo1" in patch
    assert "+foo2" in patch
    assert "+bar1" not in patch
    assert "+bar2" not in patch
    assert session.global_filter_pattern == "foo"
    assert session.auto_split_enabled


def test_session_state_carries_to_next_file(make_pipeline, git_commands, diffs):
    diffs["a.txt"] = _diff("a.txt", 2)
    diffs["b.txt"] = _diff("b.txt", 2)
    pipeline, prompter = make_pipeline(["G new 1", "y", "y"])

    pipeline.run()

    assert "Applied global filter 'new 1': showing 1 of 2 hunks" in prompter.said
    first, second = _applied(git_commands)
    assert "+a.txt new 1" in first
    assert "+b.txt new 1" in second
    assert "+b.txt new 0" not in second


# -----------------------------------------------------------------------------
# Preprocessing
# -----------------------------------------------------------------------------


def test_auto_split_message(make_pipeline, diffs, session):
    session.auto_split_enabled = True
    diffs["blocks.txt"] = FOUR_BLOCKS
    pipeline, prompter = make_pipeline(["d"])

    pipeline.run()

    assert "Auto-split enabled: expanded 1 hunks into 4 smaller hunks" in prompter.said


def test_auto_split_message_when_nothing_splits(make_pipeline, diffs, session):
    session.auto_split_enabled = True
    diffs["a.txt"] = _diff("a.txt", 2)
    pipeline, prompter = make_pipeline(["d"])

    pipeline.run()

    assert "Auto-split enabled: 2 hunks (no further splitting possible)" in prompter.said


def test_global_filter_without_matches_skips_file(make_pipeline, git_commands, diffs, session):
    session.global_filter_pattern = "zzz"
    diffs["a.txt"] = _diff("a.txt", 2)
    pipeline, prompter = make_pipeline([])

    assert pipeline.run() is PatchRunOutcome.COMPLETED
    assert "No hunks in this file match global filter: zzz" in prompter.said
    assert prompter.prompts == []


def test_clearing_global_filter_rereads_the_diff(make_pipeline, git_commands, diffs, session):
    session.global_filter_pattern = "new 0"
    diffs["a.txt"] = _diff("a.txt", 2)
    pipeline, _ = make_pipeline(["G", "", "y", "y"])

    pipeline.run()

    assert git_commands.get_diff_lines.call_count == 2
    assert _applied(git_commands) == ["\n".join(_diff("a.txt", 2)) + "\n"]


# -----------------------------------------------------------------------------
# Failures
# -----------------------------------------------------------------------------


def test_malformed_diff_skips_file(make_pipeline, git_commands, diffs):
    diffs["a.txt"] = _file_header("a.txt") + ["@@ -x +1 @@", "+a"]
    diffs["b.txt"] = _diff("b.txt", 1)
    pipeline, _ = make_pipeline(["y"])

    assert pipeline.run() is PatchRunOutcome.COMPLETED

    [patch] = _applied(git_commands)
    assert "+b.txt new 0" in patch


def test_empty_diff_is_skipped(make_pipeline, git_commands, diffs):
    diffs["a.txt"] = []
    pipeline, prompter = make_pipeline([])

    assert pipeline.run() is PatchRunOutcome.COMPLETED
    assert prompter.prompts == []


def test_apply_failure_continues(make_pipeline, git_commands, diffs):
    diffs["a.txt"] = _diff("a.txt", 1)
    diffs["b.txt"] = _diff("b.txt", 1)
    git_commands.apply_patch.side_effect = [
        PatchApplyError("git apply --cached failed", "error: patch failed: a.txt:1"),
        None,
    ]
    pipeline, _ = make_pipeline(["y", "y"])

    assert pipeline.run() is PatchRunOutcome.COMPLETED

    assert git_commands.apply_patch.call_count == 2
    git_commands.refresh_index.assert_called_once()
