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
The per-file decision loop.

HunkSelector walks the hunks of one file with a cursor, asks the user what to
do with each undecided one and returns the hunk list with decisions filled in.
Operations that reshape the list (split, filter, auto-split) build a new list
and a new cursor instead of editing the list being walked.
"""

from collections.abc import Callable
from dataclasses import replace
from enum import Enum
from functools import partial

from loguru import logger

from hunkpick.core.data.hunk import Decision, Hunk, HunkKind
from hunkpick.core.data.patch_mode import PatchMode
from hunkpick.core.editor.hunk_editor import HunkEditor
from hunkpick.core.exceptions import EditorError, HunkpickError
from hunkpick.core.hunk_filter.hunk_filter import compile_pattern, filter_hunks, search_hunks
from hunkpick.core.hunk_splitter.hunk_splitter import auto_split, is_splittable, split_hunk
from hunkpick.core.selector.session import PatchSession
from hunkpick.core.ui.prompter import Prompter
from hunkpick.core.ui.prompts import help_for, prompt_for
from hunkpick.core.ui.theme import Theme, colorize_diff_line, get_theme

# commands whose upper and lower case mean different things
_CASE_SENSITIVE = {"S", "A", "G"}


class FileOutcome(Enum):
    DONE = "done"
    QUIT = "quit"
    ACCEPT_ALL = "accept_all"


def mark_remaining(hunks: list[Hunk], start: int, decision: Decision) -> None:
    for hunk in hunks[start:]:
        if hunk.decision is Decision.UNDECIDED:
            hunk.decision = decision


def _next_undecided(hunks: list[Hunk], ix: int) -> int:
    while ix < len(hunks) and hunks[ix].is_decided:
        ix += 1
    return ix


def _copies(hunks: list[Hunk]) -> list[Hunk]:
    return [replace(h) for h in hunks]


def _prev_undecided(hunks: list[Hunk], ix: int) -> int | None:
    while ix >= 0 and hunks[ix].is_decided:
        ix -= 1
    return ix if ix >= 0 else None


class HunkSelector:
    def __init__(
        self,
        mode: PatchMode,
        session: PatchSession,
        prompter: Prompter,
        editor: HunkEditor | None = None,
        theme: Theme | None = None,
    ):
        self.mode = mode
        self.session = session
        self.prompter = prompter
        self.editor = editor
        self.theme = theme or get_theme(None, color=False)

    # -----------------------------------------------------------------------------
    # Output helpers
    # -----------------------------------------------------------------------------

    def _say(self, text: str = "", style: str | None = None) -> None:
        self.prompter.say(self.theme.apply(style, text) if style else text)

    def _error(self, text: str) -> None:
        self._say(text, "error")

    def _render(self, hunk: Hunk) -> None:
        for raw, display in zip(hunk.raw_lines, hunk.display_lines, strict=True):
            # git did not color this line, use the theme instead
            self._say(colorize_diff_line(self.theme, raw) if display == raw else display)

    def _list_hunks(self, hunks: list[Hunk], ix: int) -> None:
        for i, hunk in enumerate(hunks):
            marker = {
                Decision.UNDECIDED: " ",
                Decision.ACCEPT: "+",
                Decision.REJECT: "-",
            }[hunk.decision]
            current = ">" if i == ix else " "
            summary = hunk.raw_lines[0] if hunk.raw_lines else ""
            self._say(f"{current}{marker}{i + 1:3}: {summary}")

    def build_options(self, hunks: list[Hunk], ix: int) -> str:
        """The extra letters offered in the prompt for the current hunk."""
        hunk = hunks[ix]
        options = []
        if any(not h.is_decided for h in hunks[:ix]):
            options.append("k")
        if any(not h.is_decided for h in hunks[ix + 1 :]):
            options.append("j")
        if len(hunks) > 1:
            options.append("g")
        options += ["G", "A"]
        if is_splittable(hunk):
            options.append("s")
        options.append("S")
        if hunk.kind is HunkKind.CHANGE and self.editor is not None:
            options.append("e")
        return "," + ",".join(options)

    # -----------------------------------------------------------------------------
    # Main loop
    # -----------------------------------------------------------------------------

    def select(
        self,
        file_header: Hunk,
        hunks: list[Hunk],
        reload: Callable[[], list[Hunk]] | None = None,
    ) -> tuple[FileOutcome, list[Hunk]]:
        """
        Ask about every undecided hunk of one file.

        Args:
            file_header: The file's header pseudo-hunk (needed to validate edits)
            hunks: Working list after auto-split and global filter
            reload: Returns the file's hunks freshly parsed, used when the
                global filter is cleared. Defaults to copies of the hunks as
                they were passed in.

        Returns:
            How the file ended and the final hunk list (decisions filled in).
        """
        hunks = list(hunks)
        if reload is None:
            reload = partial(_copies, _copies(hunks))
        if not hunks:
            return FileOutcome.DONE, hunks

        self._render(file_header)

        ix = 0
        while True:
            ix = _next_undecided(hunks, ix)
            if ix >= len(hunks):
                return FileOutcome.DONE, hunks

            hunk = hunks[ix]
            self._render(hunk)
            prompt = prompt_for(self.mode.name, hunk.kind, self.build_options(hunks, ix))
            status = f"({ix + 1}/{len(hunks)}){self.session.status_suffix} "

            answer = self.prompter.ask(status + self.theme.apply("prompt", prompt))
            if answer is None:
                # end of input behaves like quit
                answer = "q"
            answer = answer.strip()
            if not answer:
                continue

            cmd, arg = answer[0], answer[1:].strip()
            if cmd not in _CASE_SENSITIVE:
                cmd = cmd.lower()

            if cmd == "y":
                hunk.decision = Decision.ACCEPT
                ix += 1
            elif cmd == "n":
                hunk.decision = Decision.REJECT
                ix += 1
            elif cmd == "q":
                mark_remaining(hunks, ix, Decision.REJECT)
                return FileOutcome.QUIT, hunks
            elif cmd == "a":
                mark_remaining(hunks, ix, Decision.ACCEPT)
                return FileOutcome.DONE, hunks
            elif cmd == "d":
                mark_remaining(hunks, ix, Decision.REJECT)
                return FileOutcome.DONE, hunks
            elif cmd == "A":
                mark_remaining(hunks, 0, Decision.ACCEPT)
                return FileOutcome.ACCEPT_ALL, hunks
            elif cmd == "s":
                hunks = self._split(hunks, ix)
            elif cmd == "e":
                hunks = self._edit(file_header, hunks, ix)
            elif cmd == "j":
                ix = self._step(hunks, ix, forward=True)
            elif cmd == "k":
                ix = self._step(hunks, ix, forward=False)
            elif cmd == "g":
                ix = self._goto(hunks, ix, arg)
            elif cmd == "/":
                ix = self._search(hunks, ix, arg)
            elif cmd == "G":
                result = self._global_filter(hunks, reload, ix, arg)
                if result is None:
                    return FileOutcome.DONE, []
                hunks, ix = result
            elif cmd == "S":
                hunks, ix = self._auto_split_all(hunks), 0
            elif cmd == "?":
                self._say(help_for(self.mode.name, full=True), "help")
            else:
                self._say(help_for(self.mode.name), "help")

    # -----------------------------------------------------------------------------
    # Commands
    # -----------------------------------------------------------------------------

    def _split(self, hunks: list[Hunk], ix: int) -> list[Hunk]:
        if not is_splittable(hunks[ix]):
            self._error("Sorry, cannot split this hunk")
            return hunks

        parts = split_hunk(hunks[ix])
        self._say(f"Split into {len(parts)} hunks.", "header")
        return hunks[:ix] + parts + hunks[ix + 1 :]

    def _edit(self, file_header: Hunk, hunks: list[Hunk], ix: int) -> list[Hunk]:
        if self.editor is None or hunks[ix].kind is not HunkKind.CHANGE:
            self._error("Sorry, cannot edit this hunk")
            return hunks

        try:
            edited = self.editor.edit(file_header, hunks[ix])
        except EditorError as e:
            logger.error(f"Error editing hunk: {e.message}")
            if e.details:
                logger.debug(e.details)
            return hunks

        if edited is None:
            return hunks
        return hunks[:ix] + [edited] + hunks[ix + 1 :]

    def _step(self, hunks: list[Hunk], ix: int, forward: bool) -> int:
        if forward:
            # past the end finishes the file
            return _next_undecided(hunks, ix + 1)

        target = _prev_undecided(hunks, ix - 1)
        return 0 if target is None else target

    def _goto(self, hunks: list[Hunk], ix: int, arg: str) -> int:
        if not arg:
            self._list_hunks(hunks, ix)
            answer = self.prompter.ask("go to which hunk? ")
            if answer is None:
                return ix
            arg = answer.strip()
            if not arg:
                return ix

        try:
            number = int(arg)
        except ValueError:
            self._error(f"Invalid number: '{arg}'")
            return ix

        if 1 <= number <= len(hunks):
            return number - 1
        self._error(f"Sorry, only {len(hunks)} hunks available.")
        return ix

    def _search(self, hunks: list[Hunk], ix: int, arg: str) -> int:
        pattern = arg
        if not pattern:
            answer = self.prompter.ask("search for which pattern? ")
            if answer is None:
                return ix
            pattern = answer.strip()
            if not pattern:
                return ix

        found = search_hunks(hunks, pattern, ix)
        if found is None:
            self._error(f"Pattern not found: {pattern}")
            return ix
        return found

    def _global_filter(
        self, hunks: list[Hunk], reload: Callable[[], list[Hunk]], ix: int, arg: str
    ) -> tuple[list[Hunk], int] | None:
        """
        Set or clear the session-wide filter for this and later files.

        Clearing re-reads the file, so earlier splits, edits and decisions in
        it are dropped. Returns the new (hunks, cursor), or None when nothing
        is left to show and the file is finished.
        """
        pattern = arg
        if not pattern:
            answer = self.prompter.ask(
                "search for which pattern (empty to clear global filter)? "
            )
            if answer is None:
                return hunks, ix
            pattern = answer.strip()

        if not pattern:
            self.session.global_filter_pattern = ""
            self._say("Global filter cleared")
            try:
                restored = reload()
            except HunkpickError as e:
                logger.error(f"Error reparsing hunks: {e.message}")
                return hunks, ix
            if self.session.auto_split_enabled:
                restored = auto_split(restored)
            if not restored:
                return None
            return restored, 0

        if compile_pattern(pattern) is None:
            # invalid regex, the filter is left as it was
            return hunks, ix

        self.session.global_filter_pattern = pattern
        filtered = filter_hunks(hunks, pattern)
        if not filtered:
            self._error(f"No hunks in current file match pattern: {pattern}")
            return None

        self._say(
            f"Global filter set to '{pattern}': showing {len(filtered)} hunks in current file"
        )
        return filtered, 0

    def _auto_split_all(self, hunks: list[Hunk]) -> list[Hunk]:
        self.session.auto_split_enabled = True
        expanded = auto_split(hunks)
        self._say(
            f"Auto-split enabled globally: expanded {len(hunks)} hunks into "
            f"{len(expanded)} smaller hunks",
            "header",
        )
        return expanded
