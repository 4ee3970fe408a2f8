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
from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field

from hunkpick.core.git_commands.git_commands import GitCommands
from hunkpick.core.git_interface.interface import GitInterface
from hunkpick.core.git_interface.SubprocessGitInterface import (
    SubprocessGitInterface,
)

DiffAlgorithm = Literal["myers", "minimal", "patience", "histogram"]


@dataclass
class GlobalConfig:
    verbose: bool = False
    silent: bool = False
    color: bool = True
    theme: Literal["classic", "ocean", "mono"] = "classic"
    editor: str | None = None
    diff_algorithm: DiffAlgorithm | None = None
    auto_split: bool = False
    global_filter: str | None = None
    max_edit_attempts: Annotated[int, Field(ge=1, le=50)] = 5

    descriptions = {
        "verbose": "Enable verbose logging output",
        "silent": "Only print errors, prompts and diffs to the console",
        "color": "Use colors in the terminal (git's color.diff is honored as well)",
        "theme": "Color theme for prompts and messages (classic, ocean, mono)",
        "editor": "Editor for manual hunk edits (falls back to $EDITOR, then git's editor)",
        "diff_algorithm": "Diff algorithm to use instead of git's diff.algorithm",
        "auto_split": "Start every session with auto-splitting enabled",
        "global_filter": "Regex applied to every file's hunks at startup",
        "max_edit_attempts": "How many times a failing manual edit may be retried",
    }


@dataclass(frozen=True)
class GlobalContext:
    repo_path: Path
    git_interface: GitInterface
    git_commands: GitCommands
    config: GlobalConfig

    @classmethod
    def from_global_config(cls, config: GlobalConfig, repo_path: Path):
        git_interface = SubprocessGitInterface(repo_path)
        git_commands = GitCommands(git_interface)

        return GlobalContext(repo_path, git_interface, git_commands, config)
