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

from hunkpick.core.data.hunk import Hunk, HunkKind

_FILE_LINE_PREFIXES = ("---", "+++")


def reassemble_patch(file_header: Hunk, accepted: list[Hunk]) -> bytes:
    """
    Build an applyable patch from the file header and the accepted hunks.

    Mode change hunks go back to their place inside the header. The header's
    `---`/`+++` lines are held back and emitted once, right before the first
    hunk that carries @@ content, so a patch made of a mode change alone stays
    valid.
    """
    anchored: dict[int, list[Hunk]] = {}
    rest: list[Hunk] = []
    for hunk in accepted:
        if hunk.kind is HunkKind.MODE_CHANGE and hunk.header_offset is not None:
            anchored.setdefault(hunk.header_offset, []).append(hunk)
        else:
            rest.append(hunk)

    lines: list[str] = []
    file_lines: list[str] = []
    for i, line in enumerate(file_header.raw_lines):
        for hunk in anchored.pop(i, []):
            lines.extend(hunk.raw_lines)
        if line.startswith(_FILE_LINE_PREFIXES):
            file_lines.append(line)
        else:
            lines.append(line)

    # offsets past the end of the header
    for offset in sorted(anchored):
        for hunk in anchored[offset]:
            lines.extend(hunk.raw_lines)

    file_lines_added = False
    for hunk in rest:
        if hunk.is_content() and not file_lines_added:
            lines.extend(file_lines)
            file_lines_added = True
        lines.extend(hunk.raw_lines)

    text = "\n".join(lines) + "\n"
    return text.encode("utf-8", errors="surrogateescape")
