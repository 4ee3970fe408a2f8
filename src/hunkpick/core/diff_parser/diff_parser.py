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
Splits the text of a single-file unified diff into hunks.

The first hunk is always the file header (everything before the first `@@`
line); every following hunk starts at an `@@ ` line and runs until the next.
"""

from loguru import logger

from hunkpick.core.data.hunk import Hunk, HunkKind
from hunkpick.core.data.hunk_header import parse_hunk_header
from hunkpick.core.exceptions import DiffParseError

_MODE_LINE_PREFIXES = ("old mode ", "new mode ")


def parse_diff(plain_lines: list[str], color_lines: list[str] | None = None) -> list[Hunk]:
    """
    Parse diff lines into [file header, hunk, hunk, ...].

    Args:
        plain_lines: Diff text without color, one entry per line
        color_lines: The same diff rendered with color. Empty (or a different
            line count) means no color is available and plain text is displayed.

    Returns:
        The hunk list, or an empty list for an empty diff.

    Raises:
        DiffParseError: if a hunk starts with a malformed `@@` header.
    """
    if not plain_lines:
        return []

    if not color_lines or len(color_lines) != len(plain_lines):
        if color_lines:
            logger.debug(
                f"Color diff has {len(color_lines)} lines, plain diff has "
                f"{len(plain_lines)}; falling back to plain display"
            )
        color_lines = plain_lines

    hunks: list[Hunk] = []
    raw: list[str] = []
    display: list[str] = []
    kind = HunkKind.FILE_HEADER

    for line, display_line in zip(plain_lines, color_lines, strict=True):
        if line.startswith("@@ "):
            hunks.append(_make_hunk(kind, raw, display))
            kind = HunkKind.CHANGE
            raw, display = [], []

        raw.append(line)
        display.append(display_line)

    hunks.append(_make_hunk(kind, raw, display))
    return hunks


def _make_hunk(kind: HunkKind, raw: list[str], display: list[str]) -> Hunk:
    hunk = Hunk(kind=kind, raw_lines=raw, display_lines=display)
    if kind is HunkKind.CHANGE:
        parsed = parse_hunk_header(raw[0])
        if parsed is None:
            raise DiffParseError(f"Invalid hunk header: {raw[0]}")
        hunk.old_start, hunk.old_count, hunk.new_start, hunk.new_count = parsed
    return hunk


def classify_hunks(hunks: list[Hunk]) -> list[Hunk]:
    """
    Tag whole-file metadata so prompts can name it.

    A mode change (`old mode`/`new mode` header lines) is moved out of the
    file header into its own MODE_CHANGE hunk that remembers where in the
    header it came from. The content hunk of a created or deleted file
    becomes an ADDITION or DELETION. Returns a new list.
    """
    if not hunks or hunks[0].kind is not HunkKind.FILE_HEADER:
        return list(hunks)

    header, content = hunks[0], hunks[1:]

    kept_raw: list[str] = []
    kept_display: list[str] = []
    mode_raw: list[str] = []
    mode_display: list[str] = []
    mode_offset = None
    for raw_line, display_line in zip(header.raw_lines, header.display_lines, strict=True):
        if raw_line.startswith(_MODE_LINE_PREFIXES):
            if mode_offset is None:
                mode_offset = len(kept_raw)
            mode_raw.append(raw_line)
            mode_display.append(display_line)
        else:
            kept_raw.append(raw_line)
            kept_display.append(display_line)

    result = [Hunk(kind=HunkKind.FILE_HEADER, raw_lines=kept_raw, display_lines=kept_display)]
    if mode_raw:
        result.append(
            Hunk(
                kind=HunkKind.MODE_CHANGE,
                raw_lines=mode_raw,
                display_lines=mode_display,
                header_offset=mode_offset,
            )
        )
    else:
        # nothing moved, keep the header object
        result[0] = header

    content_kind = HunkKind.CHANGE
    if any(line.startswith("new file mode") for line in header.raw_lines):
        content_kind = HunkKind.ADDITION
    elif any(line.startswith("deleted file mode") for line in header.raw_lines):
        content_kind = HunkKind.DELETION

    for hunk in content:
        if hunk.kind is HunkKind.CHANGE and content_kind is not HunkKind.CHANGE:
            hunk.kind = content_kind
        result.append(hunk)

    return result
