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
Thin layer of git operations the hunk selector depends on.

Everything here shells out through a GitInterface; nothing touches the index
or the working tree directly.
"""

import re
from pathlib import Path

from loguru import logger

from hunkpick.core.data.file_status import FileStatus
from hunkpick.core.data.patch_mode import PatchMode, StatusFilter
from hunkpick.core.exceptions import GitError, PatchApplyError
from hunkpick.core.git_interface.interface import GitInterface

_C_ESCAPES = {
    b"a": b"\a",
    b"b": b"\b",
    b"t": b"\t",
    b"n": b"\n",
    b"v": b"\v",
    b"f": b"\f",
    b"r": b"\r",
    b'"': b'"',
    b"\\": b"\\",
}
_ESCAPE_RE = re.compile(rb"\\([0-7]{3}|.)")


def unquote_path(path: str) -> str:
    """Undo git's C-style quoting of paths with special or non-ASCII characters."""
    if len(path) < 2 or path[0] != '"' or path[-1] != '"':
        return path

    raw = path[1:-1].encode("utf-8", errors="surrogateescape")

    def _replace(match: re.Match) -> bytes:
        escape = match.group(1)
        if len(escape) == 3:
            return bytes([int(escape, 8) & 0xFF])
        return _C_ESCAPES.get(escape, escape)

    return _ESCAPE_RE.sub(_replace, raw).decode("utf-8", errors="surrogateescape")


def split_output_lines(output: bytes) -> list[str]:
    """Split git output into lines without touching carriage returns."""
    text = output.decode("utf-8", errors="surrogateescape")
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class GitCommands:
    _CREATE_DELETE_RE = re.compile(r"^ (create|delete) mode [0-7]+ (.*)$")
    _RAW_RE = re.compile(r"^:[0-7]+ [0-7]+ [0-9a-f]{7,64} [0-9a-f]{7,64} (.)[0-9]*\t(.*)$")

    def __init__(self, git: GitInterface):
        self.git = git

    # -----------------------------------------------------------------------------
    # Repository info
    # -----------------------------------------------------------------------------

    def is_git_repository(self) -> bool:
        out = self.git.run_git_text_out(["rev-parse", "--is-inside-work-tree"])
        return out is not None and out.strip() == "true"

    def git_dir(self) -> Path:
        out = self.git.run_git_text_out(["rev-parse", "--absolute-git-dir"])
        if out is None:
            raise GitError("Could not determine the git directory")
        return Path(out.strip())

    def is_initial_commit(self) -> bool:
        return self.git.run_git_text_out(["rev-parse", "--verify", "-q", "HEAD"]) is None

    def empty_tree(self) -> str:
        out = self.git.run_git_text_out(
            ["hash-object", "-t", "tree", "--stdin"], input_text=""
        )
        if out is None:
            raise GitError("Could not compute the empty tree object")
        return out.strip()

    def get_config(self, key: str) -> str | None:
        out = self.git.run_git_text_out(["config", key])
        if out is None:
            return None
        return out.strip() or None

    def get_color_bool(self, key: str) -> bool:
        out = self.git.run_git_text_out(["config", "--get-colorbool", key, "true"])
        return out is not None and out.strip() == "true"

    def git_editor(self) -> str | None:
        out = self.git.run_git_text_out(["var", "GIT_EDITOR"])
        if out is None:
            return None
        return out.strip() or None

    def resolve_revision(self, revision: str | None) -> str | None:
        """On an unborn branch HEAD does not exist yet, diff against the empty tree."""
        if not revision:
            return None
        if revision == "HEAD" and self.is_initial_commit():
            return self.empty_tree()
        return revision

    # -----------------------------------------------------------------------------
    # Diffs
    # -----------------------------------------------------------------------------

    def get_diff_lines(
        self,
        path: str,
        mode: PatchMode,
        revision: str | None = None,
        diff_algorithm: str | None = None,
        color: bool = True,
    ) -> tuple[list[str], list[str]]:
        """
        Produce the diff of one file for a patch mode.

        Returns:
            (plain_lines, color_lines). color_lines is empty when color is off
            or git could not render it.
        """
        cmd = list(mode.diff_cmd)

        algorithm = diff_algorithm or self.get_config("diff.algorithm")
        if algorithm:
            cmd.insert(1, f"--diff-algorithm={algorithm}")

        reference = self.resolve_revision(revision)
        if reference:
            cmd.append(reference)

        out = self.git.run_git_binary_out(cmd + ["--no-color", "--", path])
        if out is None:
            raise GitError(f"Could not get diff for {path}", f"git {' '.join(cmd)}")
        plain_lines = split_output_lines(out)

        color_lines: list[str] = []
        if color and plain_lines and self.get_color_bool("color.diff"):
            colored = self.git.run_git_binary_out(cmd + ["--color", "--", path])
            if colored is not None:
                color_lines = split_output_lines(colored)

        return plain_lines, color_lines

    # -----------------------------------------------------------------------------
    # Applying
    # -----------------------------------------------------------------------------

    def _run_apply(self, args: list[str], patch: bytes) -> None:
        args = args + ["--allow-overlap"]
        result = self.git.run_git_binary(args, input_bytes=patch, check=False)
        if result is None:
            raise PatchApplyError(f"Could not run git {' '.join(args)}")
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise PatchApplyError(f"git {' '.join(args)} failed", stderr or None)

    def apply_patch(self, patch: bytes, mode: PatchMode) -> None:
        self._run_apply(list(mode.apply_cmd), patch)

    def check_patch(self, patch: bytes, mode: PatchMode) -> None:
        self._run_apply(list(mode.check_cmd), patch)

    def refresh_index(self) -> None:
        """Best effort `update-index --refresh`; stale stat info is not an error."""
        result = self.git.run_git_text(["update-index", "-q", "--refresh"], check=False)
        if result is None or result.returncode != 0:
            logger.debug("update-index --refresh did not complete cleanly")

    # -----------------------------------------------------------------------------
    # File listing
    # -----------------------------------------------------------------------------

    def list_modified(
        self,
        status_filter: StatusFilter | None = None,
        revision: str | None = None,
        paths: list[str] | None = None,
    ) -> list[FileStatus]:
        """
        List modified files with their staged and unstaged line counts.

        Args:
            status_filter: "index-only" skips unstaged changes, "file-only"
                skips staged ones.
            revision: Compare the index against this instead of HEAD.
            paths: Optional pathspecs to restrict the listing.
        """
        statuses: dict[str, FileStatus] = {}
        pathspec = ["--"] + list(paths or [])

        if status_filter != "file-only":
            reference = self.resolve_revision(revision or "HEAD")
            out = self.git.run_git_binary_out(
                ["diff-index", "--cached", "--numstat", "--summary", reference] + pathspec
            )
            if out is None:
                raise GitError("Could not list staged changes")
            for line in split_output_lines(out):
                self._parse_status_line(line, statuses, staged=True)

        if status_filter != "index-only":
            out = self.git.run_git_binary_out(
                ["diff-files", "--ignore-submodules=dirty", "--numstat", "--summary", "--raw"]
                + pathspec
            )
            if out is None:
                raise GitError("Could not list unstaged changes")
            for line in split_output_lines(out):
                self._parse_status_line(line, statuses, staged=False)

        files = []
        for path in sorted(statuses):
            status = statuses[path]
            if status_filter == "index-only" and status.index == "unchanged":
                continue
            if status_filter == "file-only" and status.worktree == "nothing":
                continue
            files.append(status)
        return files

    def _parse_status_line(
        self, line: str, statuses: dict[str, FileStatus], staged: bool
    ) -> None:
        parts = line.split("\t")
        if len(parts) >= 3 and not line.startswith(":"):
            added, deleted, path = parts[0], parts[1], unquote_path("\t".join(parts[2:]))
            status = statuses.setdefault(path, FileStatus(path=path))
            if added == "-" and deleted == "-":
                counts = "binary"
                status.binary = True
            else:
                counts = f"+{added}/-{deleted}"
            if staged:
                status.index = counts
            else:
                status.worktree = counts
            return

        if match := self._CREATE_DELETE_RE.match(line):
            op, path = match.group(1), unquote_path(match.group(2))
            status = statuses.setdefault(path, FileStatus(path=path))
            if staged:
                status.index_add_del = op
            else:
                status.worktree_add_del = op
            return

        if not staged and (match := self._RAW_RE.match(line)):
            kind, path = match.group(1), unquote_path(match.group(2))
            status = statuses.setdefault(path, FileStatus(path=path))
            if kind == "U":
                status.unmerged = True
