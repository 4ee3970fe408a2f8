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

from loguru import logger

from hunkpick.core.data.hunk import Hunk


def compile_pattern(pattern: str) -> re.Pattern | None:
    """Compile a user supplied regex; an invalid pattern is logged and yields None."""
    try:
        return re.compile(pattern)
    except re.error as e:
        logger.error(f"Invalid regex pattern: {e}")
        return None


def _matches(hunk: Hunk, regex: re.Pattern) -> bool:
    return any(regex.search(line) for line in hunk.raw_lines)


def hunk_matches(hunk: Hunk, pattern: str) -> bool:
    """True if any raw line of the hunk (header included) matches pattern."""
    regex = compile_pattern(pattern)
    if regex is None:
        return False
    return _matches(hunk, regex)


def filter_hunks(hunks: list[Hunk], pattern: str) -> list[Hunk]:
    """
    Keep the hunks matching pattern, in their original order.

    An invalid pattern matches nothing and returns an empty list.
    """
    regex = compile_pattern(pattern)
    if regex is None:
        return []
    return [hunk for hunk in hunks if _matches(hunk, regex)]


def search_hunks(hunks: list[Hunk], pattern: str, start: int) -> int | None:
    """
    Find the index of the next hunk matching pattern after start, wrapping
    around to the beginning (start itself is checked last).
    """
    regex = compile_pattern(pattern)
    if regex is None:
        return None

    order = list(range(start + 1, len(hunks))) + list(range(0, min(start + 1, len(hunks))))
    for i in order:
        if _matches(hunks[i], regex):
            return i
    return None
