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

from dataclasses import dataclass, field
from enum import Enum


class HunkKind(Enum):
    FILE_HEADER = "header"
    CHANGE = "hunk"
    MODE_CHANGE = "mode"
    DELETION = "deletion"
    ADDITION = "addition"


class Decision(Enum):
    UNDECIDED = "undecided"
    ACCEPT = "accept"
    REJECT = "reject"


@dataclass
class Hunk:
    """
    One addressable unit of a file diff.

    raw_lines is the authoritative diff text (header line first for content
    hunks). display_lines runs parallel to it and is only used for rendering.
    header_offset places a MODE_CHANGE hunk back inside the file header: its
    lines go before the header line at that index.
    """

    kind: HunkKind
    raw_lines: list[str]
    display_lines: list[str] = field(default_factory=list)
    old_start: int = 0
    old_count: int = 0
    new_start: int = 0
    new_count: int = 0
    decision: Decision = Decision.UNDECIDED
    edited: bool = False
    header_offset: int | None = None

    def __post_init__(self):
        if not self.display_lines:
            self.display_lines = list(self.raw_lines)
        if len(self.display_lines) != len(self.raw_lines):
            raise ValueError(
                f"display_lines ({len(self.display_lines)}) and raw_lines "
                f"({len(self.raw_lines)}) must have the same length"
            )

    @property
    def is_decided(self) -> bool:
        return self.decision is not Decision.UNDECIDED

    @property
    def header_line(self) -> str | None:
        if self.kind is HunkKind.FILE_HEADER or not self.raw_lines:
            return None
        return self.raw_lines[0]

    @property
    def body(self) -> list[str]:
        """Lines after the @@ header."""
        if self.kind is HunkKind.FILE_HEADER:
            return list(self.raw_lines)
        return self.raw_lines[1:]

    def is_content(self) -> bool:
        """Whether the hunk carries @@ content (as opposed to header metadata)."""
        return self.kind not in (HunkKind.FILE_HEADER, HunkKind.MODE_CHANGE)
