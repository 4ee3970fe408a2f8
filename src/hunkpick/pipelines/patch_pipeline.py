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
from functools import partial

from loguru import logger

from hunkpick.core.data.hunk import Decision, Hunk
from hunkpick.core.data.patch_mode import PatchMode
from hunkpick.core.diff_parser.diff_parser import classify_hunks, parse_diff
from hunkpick.core.editor.hunk_editor import HunkEditor
from hunkpick.core.exceptions import DiffParseError, PatchApplyError
from hunkpick.core.git_commands.git_commands import GitCommands
from hunkpick.core.git_commands.pathspec import filter_paths
from hunkpick.core.hunk_filter.hunk_filter import filter_hunks
from hunkpick.core.hunk_splitter.hunk_splitter import auto_split
from hunkpick.core.logging.utils import log_hunks, time_block
from hunkpick.core.patch.reassembler import reassemble_patch
from hunkpick.core.selector.hunk_selector import FileOutcome, HunkSelector, mark_remaining
from hunkpick.core.selector.session import PatchSession
from hunkpick.core.ui.prompter import Prompter
from hunkpick.core.ui.theme import Theme


class PatchRunOutcome(Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"


class PatchPipeline:
    """
    Runs one patch mode over every candidate file.

    Files are visited in path order. Each file's hunks are auto-split and
    filtered according to the session, decided on interactively (or accepted
    in bulk once the user chose accept-all), and the accepted ones are applied
    before moving on to the next file.
    """

    def __init__(
        self,
        git_commands: GitCommands,
        mode: PatchMode,
        session: PatchSession,
        prompter: Prompter,
        revision: str | None = None,
        editor: HunkEditor | None = None,
        theme: Theme | None = None,
        diff_algorithm: str | None = None,
        color: bool = True,
    ):
        self.git_commands = git_commands
        self.mode = mode
        self.session = session
        self.prompter = prompter
        self.revision = revision
        self.diff_algorithm = diff_algorithm
        self.color = color
        self.selector = HunkSelector(mode, session, prompter, editor=editor, theme=theme)

    def run(self, paths: list[str] | None = None) -> PatchRunOutcome:
        with time_block("list_modified"):
            files = self.git_commands.list_modified(self.mode.filter, self.revision)

        skipped = [f.path for f in files if not f.is_patchable]
        if skipped:
            logger.debug(f"Skipping binary or unmerged files: {skipped}")

        candidates = filter_paths(paths or [], [f.path for f in files if f.is_patchable])
        if not candidates:
            self.prompter.say("No changes.")
            return PatchRunOutcome.COMPLETED

        accept_all = False
        for path in candidates:
            with time_block(f"patch {path}"):
                outcome = self.process_file(path, accept_all)

            if outcome is FileOutcome.QUIT:
                logger.debug(f"User quit at {path}")
                return PatchRunOutcome.ABORTED
            if outcome is FileOutcome.ACCEPT_ALL:
                accept_all = True

        return PatchRunOutcome.COMPLETED

    def load_hunks(self, path: str) -> tuple[Hunk, list[Hunk]] | None:
        plain_lines, color_lines = self.git_commands.get_diff_lines(
            path,
            self.mode,
            self.revision,
            diff_algorithm=self.diff_algorithm,
            color=self.color,
        )
        hunks = classify_hunks(parse_diff(plain_lines, color_lines))
        if not hunks:
            return None
        return hunks[0], hunks[1:]

    def reload_hunks(self, path: str) -> list[Hunk]:
        """Parse the file's diff again, without auto-split or filter."""
        loaded = self.load_hunks(path)
        return loaded[1] if loaded else []

    def preprocess(self, hunks: list[Hunk]) -> list[Hunk] | None:
        """
        Apply session auto-split and global filter to a file's hunks.

        Returns the working list, or None when the filter leaves nothing.
        """
        if self.session.auto_split_enabled:
            original_count = len(hunks)
            hunks = auto_split(hunks)
            if len(hunks) > original_count:
                self.prompter.say(
                    f"Auto-split enabled: expanded {original_count} hunks into "
                    f"{len(hunks)} smaller hunks"
                )
            else:
                self.prompter.say(
                    f"Auto-split enabled: {len(hunks)} hunks (no further splitting possible)"
                )

        pattern = self.session.global_filter_pattern
        if not pattern:
            return hunks

        filtered = filter_hunks(hunks, pattern)
        if not filtered:
            self.prompter.say(f"No hunks in this file match global filter: {pattern}")
            return None

        self.prompter.say(
            f"Applied global filter '{pattern}': showing {len(filtered)} of {len(hunks)} hunks"
        )
        return filtered

    def process_file(self, path: str, accept_all: bool = False) -> FileOutcome:
        try:
            loaded = self.load_hunks(path)
        except DiffParseError as e:
            logger.error(f"Skipping {path}: {e.message}")
            return FileOutcome.DONE

        if loaded is None:
            logger.debug(f"No diff for {path}")
            return FileOutcome.DONE

        file_header, hunks = loaded
        if not hunks:
            return FileOutcome.DONE

        working = self.preprocess(hunks)
        if working is None:
            return FileOutcome.DONE

        if accept_all:
            logger.info(f"Accepting {len(working)} hunks in {path}")
            mark_remaining(working, 0, Decision.ACCEPT)
            outcome, final = FileOutcome.ACCEPT_ALL, working
        else:
            outcome, final = self.selector.select(
                file_header, working, reload=partial(self.reload_hunks, path)
            )

        log_hunks(f"decided {path}", final)
        self.apply_accepted(file_header, final)
        return outcome

    def apply_accepted(self, file_header: Hunk, hunks: list[Hunk]) -> bool:
        """Apply the accepted hunks of one file. Returns whether anything was applied."""
        accepted = [h for h in hunks if h.decision is Decision.ACCEPT]
        if not accepted:
            return False

        patch = reassemble_patch(file_header, accepted)
        try:
            self.git_commands.apply_patch(patch, self.mode)
        except PatchApplyError as e:
            logger.error(f"Failed to apply patch: {e.details or e.message}")
            return False

        self.git_commands.refresh_index()
        return True
