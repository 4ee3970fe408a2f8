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

import re

HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def parse_hunk_header(line: str) -> tuple[int, int, int, int] | None:
    """
    Parse an `@@ -a[,b] +c[,d] @@` line into (old_start, old_count, new_start,
    new_count). A missing count means 1. Returns None if the line is not a header.
    """
    match = HUNK_HEADER_RE.match(line)
    if not match:
        return None

    old_start = int(match.group(1))
    old_count = int(match.group(2)) if match.group(2) is not None else 1
    new_start = int(match.group(3))
    new_count = int(match.group(4)) if match.group(4) is not None else 1

    return old_start, old_count, new_start, new_count


def header_section(line: str) -> str:
    """Return whatever trails the closing `@@` (usually the function context)."""
    match = HUNK_HEADER_RE.match(line)
    if not match:
        return ""
    return line[match.end() :]


def format_hunk_header(
    old_start: int, old_count: int, new_start: int, new_count: int, section: str = ""
) -> str:
    header = f"@@ -{old_start}"
    if old_count != 1:
        header += f",{old_count}"
    header += f" +{new_start}"
    if new_count != 1:
        header += f",{new_count}"
    header += " @@"
    return header + section


def count_body_lines(lines: list[str]) -> tuple[int, int]:
    """Tally (old_count, new_count) for the body lines of a hunk."""
    old_count = 0
    new_count = 0
    for line in lines:
        if line.startswith(" "):
            old_count += 1
            new_count += 1
        elif line.startswith("-"):
            old_count += 1
        elif line.startswith("+"):
            new_count += 1
    return old_count, new_count
